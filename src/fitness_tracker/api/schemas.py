"""Request models for the HTTP API."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from fitness_tracker.domain.profile import Gender, Goal, UserProfile
from fitness_tracker.domain.progress import Measurements, Mood


class UserCreate(UserProfile):
    """Payload for registering a user."""

    name: str = Field(min_length=1, max_length=50)
    email: str = Field(pattern=r"^[^@\s]+@[^@\s]+\.[A-Za-z]{2,}$")

    @field_validator("name")
    @classmethod
    def strip_name(cls, value: str) -> str:
        return value.strip()

    def to_payload(self) -> dict[str, object]:
        """Return repository fields."""
        return self.model_dump(exclude_none=True)


class UserUpdate(BaseModel):
    """Partial profile update."""

    model_config = ConfigDict(populate_by_name=True)

    name: str | None = Field(default=None, min_length=1, max_length=50)
    age: int | None = Field(default=None, ge=13, le=100)
    gender: Gender | None = None
    height_cm: float | None = Field(default=None, ge=100, le=250, alias="height")
    weight_kg: float | None = Field(default=None, ge=30, le=300, alias="weight")
    goal: Goal | None = None
    experience: str | None = None

    @field_validator("goal", mode="before")
    @classmethod
    def normalize_goal(cls, value: object) -> object:
        if isinstance(value, str):
            return Goal(value)
        return value

    def to_payload(self) -> dict[str, object]:
        """Return only the fields that were provided."""
        return self.model_dump(exclude_unset=True, exclude_none=True)


class MeasurementsIn(BaseModel):
    """Body measurements in centimeters."""

    chest: float | None = Field(default=None, ge=50, le=200)
    waist: float | None = Field(default=None, ge=50, le=200)
    hips: float | None = Field(default=None, ge=50, le=200)
    biceps: float | None = Field(default=None, ge=20, le=60)
    thighs: float | None = Field(default=None, ge=40, le=100)

    def to_domain(self) -> Measurements:
        """Convert to the domain dataclass."""
        return Measurements(**self.model_dump())


class ProgressUpdate(BaseModel):
    """Partial progress entry update."""

    model_config = ConfigDict(populate_by_name=True)

    weight_kg: float | None = Field(default=None, ge=30, le=300, alias="weight")
    body_fat_percentage: float | None = Field(default=None, ge=5, le=50)
    muscle_mass_kg: float | None = Field(
        default=None, ge=20, le=100, alias="muscle_mass"
    )
    measurements: MeasurementsIn | None = None
    notes: str | None = Field(default=None, max_length=500)
    mood: Mood | None = None
    energy_level: int | None = Field(default=None, ge=1, le=10)

    @field_validator("notes")
    @classmethod
    def strip_notes(cls, value: str | None) -> str | None:
        return value.strip() if value else value

    def to_payload(self) -> dict[str, object]:
        """Return service fields for the values that were provided."""
        payload = self.model_dump(
            exclude_unset=True, exclude_none=True, exclude={"measurements"}
        )
        if self.measurements is not None:
            payload["measurements"] = self.measurements.to_domain()
        return payload


class ProgressCreate(ProgressUpdate):
    """Payload for logging a progress entry."""

    weight_kg: float = Field(ge=30, le=300, alias="weight")
    date: datetime | None = None


class TipsRequest(BaseModel):
    """Optional focus for AI tips."""

    specific_request: str | None = Field(default=None, max_length=500)


class DietAdviceRequest(BaseModel):
    """Optional goal override for diet advice."""

    goal: Goal | None = None

    @field_validator("goal", mode="before")
    @classmethod
    def normalize_goal(cls, value: object) -> object:
        if isinstance(value, str):
            return Goal(value)
        return value
