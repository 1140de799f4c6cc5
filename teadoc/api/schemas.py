from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator


class DetectionRecord(BaseModel):
    """One classification result for one submitted image. Never mutated."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    id: str = Field(alias="_id")
    image_uri: str = Field(default="", alias="imgURL")
    label: str = ""
    score: Optional[float] = None
    ratio: Optional[float] = None
    created_at: datetime = Field(alias="createdAt")

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, v):
        return v if isinstance(v, str) else str(v)

    @field_validator("label", "image_uri", mode="before")
    @classmethod
    def _none_to_empty(cls, v):
        return "" if v is None else v


class DetectionListResponse(BaseModel):
    data: List[DetectionRecord]


class WeatherObservation(BaseModel):
    """The `current` block of the weather provider response."""

    model_config = ConfigDict(extra="ignore")

    precip_mm: float
    temp_c: float
    wind_kph: float


class WeatherDetectRequest(BaseModel):
    # Field names are the detection service's wire names; `lang` carries latitude.
    lang: float
    long: float
    userId: str
    precipitation: float
    temp_max: float
    temp_min: float
    wind: float
    today: str


class WeatherClassification(BaseModel):
    model_config = ConfigDict(extra="ignore")

    todayWeatherClass: str
    temps: List[float] = []
    humidities: List[float] = []
    rainfalls: List[float] = []
    wind: Optional[float] = None
    detection_date: Optional[datetime] = None


class WeatherClassificationResponse(BaseModel):
    data: WeatherClassification
