"""
Client for the remote tea detection service.

Endpoints:
- GET  {base}/detection/{url}            -> {"data": [DetectionRecord, ...]}
- POST {base}/detection/detect-weather   -> {"data": WeatherClassification}
"""
from typing import Any, List, Optional
from urllib.parse import quote
import logging

from pydantic import ValidationError

from teadoc.api.schemas import (
    DetectionListResponse,
    DetectionRecord,
    WeatherClassification,
    WeatherClassificationResponse,
    WeatherDetectRequest,
)
from teadoc.core.config import get_settings
from teadoc.core.errors import MalformedResponse
from teadoc.services.http import build_session, request_json

logger = logging.getLogger(__name__)


def history_path(url: str) -> str:
    """Resource path of a detection history, relative to the service base."""
    return f"detection/{quote(url, safe='')}"


class DetectionClient:
    """
    Thin REST client for the detection service.

    Usage:
        client = DetectionClient()
        records = client.list_detections("blister-blight")
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        session: Any = None,
        timeout: Optional[float] = None,
    ):
        settings = get_settings()
        self.base_url = (base_url or settings.API_BASE_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.HTTP_TIMEOUT
        self.session = session if session is not None else build_session()

    def url_for(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def list_detections(self, path: str) -> List[DetectionRecord]:
        """
        Fetch the detection records at `path` (see history_path).

        Records are returned in response order; sorting is up to the caller.
        """
        body = request_json(self.session, "GET", self.url_for(path), self.timeout)
        try:
            parsed = DetectionListResponse.model_validate(body)
        except ValidationError as e:
            logger.error(f"Unexpected detection history shape from {path}: {e.error_count()} errors")
            raise MalformedResponse(f"Unexpected detection history shape: {e}") from e

        logger.info(f"Received {len(parsed.data)} detection records from {path}")
        return parsed.data

    def detect_weather(self, payload: WeatherDetectRequest) -> WeatherClassification:
        """Post today's observation and return the weather classification."""
        body = request_json(
            self.session,
            "POST",
            self.url_for("detection/detect-weather"),
            self.timeout,
            json=payload.model_dump(),
        )
        try:
            return WeatherClassificationResponse.model_validate(body).data
        except ValidationError as e:
            logger.error(f"Unexpected weather classification shape: {e.error_count()} errors")
            raise MalformedResponse(f"Unexpected weather classification shape: {e}") from e
