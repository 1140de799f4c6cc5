from typing import Optional
from pydantic import BaseModel, ConfigDict


class UserSession(BaseModel):
    """The signed-in user, passed explicitly to controllers and pages."""

    model_config = ConfigDict(frozen=True)

    user_id: str
    email: str
    latitude: Optional[float] = None
    longitude: Optional[float] = None

    @property
    def has_location(self) -> bool:
        return self.latitude is not None and self.longitude is not None

    @property
    def greeting(self) -> str:
        return f"Hi {self.email}!"
