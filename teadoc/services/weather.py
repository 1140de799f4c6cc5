"""
Weather view controller.

Looks up current conditions at the user's location, posts them to the
detection service's weather classifier and holds the result. Uses the same
IDLE -> LOADING -> READY | FAILED state machine as the history views.
"""
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import List, Optional, Tuple
import logging

from teadoc.api.schemas import WeatherClassification, WeatherDetectRequest, WeatherObservation
from teadoc.core.errors import DetectionServiceError, InvalidWeatherRequest
from teadoc.core.session import UserSession
from teadoc.services.detection_client import DetectionClient
from teadoc.services.history.renderer import format_timestamp
from teadoc.services.state import FetchState, RequestTracker
from teadoc.services.weather_client import WeatherClient

logger = logging.getLogger(__name__)

LOADING_TEXT = "Loading weather..."


def format_request_day(day: date) -> str:
    # The classifier parses month/day/year without zero padding
    return f"{day.month}/{day.day}/{day.year}"


def build_detect_request(
    session: UserSession,
    observation: WeatherObservation,
    day: date,
) -> WeatherDetectRequest:
    # The current-conditions endpoint gives one temperature, used as both bounds
    return WeatherDetectRequest(
        lang=session.latitude,
        long=session.longitude,
        userId=session.user_id,
        precipitation=observation.precip_mm,
        temp_max=observation.temp_c,
        temp_min=observation.temp_c,
        wind=observation.wind_kph,
        today=format_request_day(day),
    )


class WeatherController:
    """
    Usage:
        controller = WeatherController(user, DetectionClient(), WeatherClient())
        controller.load()
        controller.next_day()
    """

    def __init__(
        self,
        session: Optional[UserSession],
        detection_client: Optional[DetectionClient] = None,
        weather_client: Optional[WeatherClient] = None,
        today: Optional[date] = None,
    ):
        self.session = session
        self._detection_client = detection_client if detection_client is not None else DetectionClient()
        self._weather_client = weather_client if weather_client is not None else WeatherClient()
        self.day = today or date.today()

        self.state = FetchState.IDLE
        self.error_message: Optional[str] = None
        self.classification: Optional[WeatherClassification] = None
        self._tracker = RequestTracker()

    def _validate(self) -> Tuple[float, float]:
        if self.session is None or not self.session.user_id:
            raise InvalidWeatherRequest("A signed-in user is required")
        if not self.session.has_location:
            raise InvalidWeatherRequest("Current location is not available")
        if not self._weather_client.api_key:
            raise InvalidWeatherRequest("Weather API key is not configured (TEADOC_WEATHER_API_KEY)")
        return self.session.latitude, self.session.longitude

    def load(self, day: Optional[date] = None) -> FetchState:
        if day is not None:
            self.day = day
        latitude, longitude = self._validate()

        self.state = FetchState.LOADING
        generation = self._tracker.begin()
        try:
            observation = self._weather_client.current(latitude, longitude)
            payload = build_detect_request(self.session, observation, self.day)
            classification = self._detection_client.detect_weather(payload)
        except DetectionServiceError as e:
            logger.error(f"Weather lookup failed for {self.day}: {e}")
            self._complete(generation, error=e)
            return self.state
        except Exception as e:
            logger.error("Unexpected error during weather lookup", exc_info=True)
            self._complete(generation, error=e)
            raise

        self._complete(generation, classification=classification)
        return self.state

    def _complete(
        self,
        generation: int,
        classification: Optional[WeatherClassification] = None,
        error: Optional[BaseException] = None,
    ) -> bool:
        if not self._tracker.is_current(generation):
            return False
        if error is not None:
            self.state = FetchState.FAILED
            self.error_message = str(error) or error.__class__.__name__
            return True
        self.classification = classification
        self.error_message = None
        self.state = FetchState.READY
        return True

    def next_day(self) -> FetchState:
        return self.load(self.day + timedelta(days=1))

    def previous_day(self) -> FetchState:
        return self.load(self.day - timedelta(days=1))

    @property
    def loading(self) -> bool:
        return self.state == FetchState.LOADING

    @property
    def error(self) -> bool:
        return self.state == FetchState.FAILED


@dataclass
class WeatherView:
    date_label: str = ""
    loading: bool = False
    error: Optional[str] = None
    rows: List[Tuple[str, str]] = field(default_factory=list)


def _first(values: List[float], unit: str) -> str:
    return f"{values[0]} {unit}" if values else "N/A"


def render_weather(controller: WeatherController) -> WeatherView:
    if controller.loading:
        return WeatherView(loading=True, error=None, rows=[])
    if controller.error:
        return WeatherView(error=controller.error_message or "Could not load weather")

    c = controller.classification
    if c is None:
        return WeatherView()

    if c.detection_date is not None:
        date_label = format_timestamp(c.detection_date).date
    else:
        date_label = controller.day.strftime("%x")

    return WeatherView(
        date_label=f"Date: {date_label}",
        rows=[
            ("Today's Weather", c.todayWeatherClass),
            ("Temperature", _first(c.temps, "°C")),
            ("Humidity", _first(c.humidities, "%")),
            ("Rainfalls", _first(c.rainfalls, "mm")),
            ("Wind Speed", f"{c.wind} km/h" if c.wind is not None else "N/A"),
        ],
    )
