"""
Pytest fixtures for TeaDoc tests.
"""
import os
from datetime import date
import pytest

# Set test environment variables BEFORE importing the package
os.environ['TEADOC_API_BASE_URL'] = 'http://detection.test'
os.environ['TEADOC_WEATHER_API_URL'] = 'https://weather.test/current.json'
os.environ['TEADOC_WEATHER_API_KEY'] = 'test-key'
os.environ['TEADOC_HTTP_TIMEOUT'] = '5'

from teadoc.api.schemas import DetectionRecord, WeatherClassification
from teadoc.core import config
from teadoc.core.errors import ServiceUnavailable
from teadoc.core.session import UserSession


class FakeResponse:
    """Stands in for requests.Response."""

    def __init__(self, status_code=200, body=None, text=None):
        self.status_code = status_code
        self._body = body
        self.text = text if text is not None else ("" if body is None else str(body))

    def json(self):
        if isinstance(self._body, Exception):
            raise self._body
        return self._body


class FakeSession:
    """Records calls and replays queued responses (or raises queued exceptions)."""

    def __init__(self, *outcomes):
        self.outcomes = list(outcomes)
        self.calls = []

    def request(self, method, url, **kwargs):
        self.calls.append({"method": method, "url": url, **kwargs})
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


class FakeDetectionClient:
    """In-memory DetectionClient: returns (or raises) queued results."""

    def __init__(self, *results, classification=None):
        self.results = list(results)
        self.classification = classification
        self.paths = []
        self.posted = []

    def list_detections(self, path):
        self.paths.append(path)
        result = self.results.pop(0) if self.results else []
        if isinstance(result, Exception):
            raise result
        return list(result)

    def detect_weather(self, payload):
        self.posted.append(payload)
        if isinstance(self.classification, Exception):
            raise self.classification
        return self.classification


class FakeWeatherClient:
    def __init__(self, observation=None, api_key="test-key"):
        self.observation = observation
        self.api_key = api_key
        self.calls = []

    def current(self, latitude, longitude):
        self.calls.append((latitude, longitude))
        if isinstance(self.observation, Exception):
            raise self.observation
        return self.observation


def make_record(record_id, label, created_at, score=0.9, ratio=0.1):
    return DetectionRecord.model_validate({
        "_id": record_id,
        "imgURL": f"https://images.test/{record_id}.jpg",
        "label": label,
        "score": score,
        "ratio": ratio,
        "createdAt": created_at,
    })


@pytest.fixture(autouse=True)
def fresh_settings():
    """Drop memoized settings so monkeypatched env vars take effect."""
    config.get_settings.cache_clear()
    yield
    config.get_settings.cache_clear()


@pytest.fixture
def user():
    return UserSession(user_id="u-42", email="planter@example.com", latitude=6.43, longitude=80.6)


@pytest.fixture
def history_payload():
    """Raw detection service response, deliberately out of order."""
    return {
        "data": [
            {"_id": "a", "imgURL": "https://images.test/a.jpg", "label": "healthy",
             "score": 0.97, "ratio": 0.0, "createdAt": "2024-03-01T08:00:00.000Z"},
            {"_id": "b", "imgURL": "https://images.test/b.jpg", "label": "blister_blight",
             "score": 0.81, "ratio": 0.35, "createdAt": "2024-03-05T10:30:00.000Z"},
            {"_id": "c", "imgURL": "https://images.test/c.jpg", "label": "healthy",
             "score": 0.88, "ratio": 0.02, "createdAt": "2024-03-03T16:45:00.000Z"},
        ]
    }


@pytest.fixture
def blister_records():
    """Labels healthy/blister_blight/healthy with t2 > t3 > t1."""
    return [
        make_record("r1", "healthy", "2024-03-01T08:00:00Z"),
        make_record("r2", "blister_blight", "2024-03-05T10:30:00Z"),
        make_record("r3", "healthy", "2024-03-03T16:45:00Z"),
    ]


@pytest.fixture
def classification():
    return WeatherClassification(
        todayWeatherClass="Rainy",
        temps=[21.5, 22.0],
        humidities=[88.0],
        rainfalls=[12.4],
        wind=14.0,
    )


@pytest.fixture
def today():
    return date(2024, 3, 5)


@pytest.fixture
def unavailable():
    return ServiceUnavailable("Could not reach detection.test", status_code=None)
