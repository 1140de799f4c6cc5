import logging
import os
from functools import lru_cache
from typing import Optional
from dotenv import load_dotenv

load_dotenv(override=True)


class Settings:
    def __init__(self) -> None:
        # Detection service
        self.API_BASE_URL = os.getenv(
            "TEADOC_API_BASE_URL", os.getenv("API_BASE_URL", "http://127.0.0.1:8091")
        ).rstrip("/")

        # Weather provider (RapidAPI weatherapi.com)
        self.WEATHER_API_URL = os.getenv(
            "TEADOC_WEATHER_API_URL", "https://weatherapi-com.p.rapidapi.com/current.json"
        )
        self.WEATHER_API_HOST = os.getenv("TEADOC_WEATHER_API_HOST", "weatherapi-com.p.rapidapi.com")
        self.WEATHER_API_KEY = os.getenv("TEADOC_WEATHER_API_KEY", os.getenv("RAPIDAPI_KEY", ""))

        # HTTP behaviour
        self.HTTP_TIMEOUT = float(os.getenv("TEADOC_HTTP_TIMEOUT", os.getenv("HTTP_TIMEOUT", "30")))
        self.HTTP_RETRIES = int(os.getenv("TEADOC_HTTP_RETRIES", "2"))
        self.HTTP_BACKOFF = float(os.getenv("TEADOC_HTTP_BACKOFF", "0.5"))

        # Location prefilled by the UI session form (Rathganga estate)
        self.DEFAULT_LATITUDE = float(os.getenv("TEADOC_DEFAULT_LAT", "6.4265"))
        self.DEFAULT_LONGITUDE = float(os.getenv("TEADOC_DEFAULT_LON", "80.6010"))

        self.LOG_LEVEL = os.getenv("TEADOC_LOG_LEVEL", os.getenv("LOG_LEVEL", "INFO")).upper()


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()


def configure_logging(level: Optional[str] = None) -> None:
    """Apply LOG_LEVEL to the root logger. Called once by the UI entry point."""
    level = level or get_settings().LOG_LEVEL
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    # basicConfig is a no-op once handlers exist (Streamlit reruns)
    logging.getLogger().setLevel(level)


settings = get_settings()
