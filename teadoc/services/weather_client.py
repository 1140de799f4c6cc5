from typing import Any, Optional
import logging

from pydantic import ValidationError

from teadoc.api.schemas import WeatherObservation
from teadoc.core.config import get_settings
from teadoc.core.errors import InvalidWeatherRequest, MalformedResponse
from teadoc.services.http import build_session, request_json

logger = logging.getLogger(__name__)


class WeatherClient:
    """Current-conditions lookup against the RapidAPI weather provider."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        api_url: Optional[str] = None,
        api_host: Optional[str] = None,
        session: Any = None,
        timeout: Optional[float] = None,
    ):
        settings = get_settings()
        self.api_key = api_key if api_key is not None else settings.WEATHER_API_KEY
        self.api_url = api_url or settings.WEATHER_API_URL
        self.api_host = api_host or settings.WEATHER_API_HOST
        self.timeout = timeout if timeout is not None else settings.HTTP_TIMEOUT
        self.session = session if session is not None else build_session()

    def current(self, latitude: float, longitude: float) -> WeatherObservation:
        if not self.api_key:
            raise InvalidWeatherRequest("Weather API key is not configured (TEADOC_WEATHER_API_KEY)")

        body = request_json(
            self.session,
            "GET",
            self.api_url,
            self.timeout,
            params={"q": f"{latitude},{longitude}"},
            headers={
                "X-RapidAPI-Host": self.api_host,
                "X-RapidAPI-Key": self.api_key,
            },
        )
        try:
            return WeatherObservation.model_validate(body.get("current"))
        except ValidationError as e:
            logger.error(f"Unexpected weather provider shape: {e.error_count()} errors")
            raise MalformedResponse(f"Unexpected weather provider shape: {e}") from e
