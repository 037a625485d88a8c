"""User profile models."""

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from fitness_tracker.domain.errors import InvalidInputError


class Gender(StrEnum):
    """Supported gender values."""

    MALE = "male"
    FEMALE = "female"
    OTHER = "other"


class Goal(StrEnum):
    """Fitness goals driving calorie and macro targets."""

    WEIGHT_LOSS = "weight loss"
    MUSCLE_GAIN = "muscle gain"
    MAINTENANCE = "maintenance"

    @classmethod
    def _missing_(cls, value: object) -> "Goal | None":
        if not isinstance(value, str):
            return None
        normalized = value.strip().lower().replace("_", " ")
        for member in cls:
            if member.value == normalized:
                return member
        return None


def parse_goal(value: "Goal | str | None") -> Goal:
    """Return a goal, defaulting to maintenance when none is given."""
    if value is None:
        return Goal.MAINTENANCE
    try:
        return Goal(value)
    except ValueError as exc:
        raise InvalidInputError(f"Unrecognized goal: {value!r}") from exc


class UserProfile(BaseModel):
    """Demographic inputs for health calculations."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    age: int = Field(ge=13, le=100)
    gender: Gender
    height_cm: float = Field(ge=100, le=250, alias="height")
    weight_kg: float = Field(ge=30, le=300, alias="weight")
    goal: Goal = Goal.MAINTENANCE
    experience: str | None = None

    @field_validator("goal", mode="before")
    @classmethod
    def normalize_goal(cls, value: object) -> object:
        if value is None:
            return Goal.MAINTENANCE
        if isinstance(value, str):
            return Goal(value)
        return value


def parse_profile(data: "UserProfile | Mapping[str, object]") -> UserProfile:
    """Validate raw profile data, raising InvalidInputError on failure."""
    if isinstance(data, UserProfile):
        return data
    try:
        return UserProfile.model_validate(dict(data))
    except ValidationError as exc:
        fields = ", ".join(
            ".".join(str(part) for part in error["loc"]) for error in exc.errors()
        )
        raise InvalidInputError(f"Invalid user profile: {fields}") from exc


@dataclass(frozen=True)
class UserRecord:
    """Represents a user stored in the database."""

    id: UUID
    name: str
    email: str
    age: int
    gender: Gender
    height_cm: float
    weight_kg: float
    goal: Goal
    experience: str | None = None
    created_at: datetime | None = None

    def to_profile(self) -> UserProfile:
        """Return the validated calculation profile for this user."""
        return parse_profile(
            {
                "age": self.age,
                "gender": self.gender,
                "height_cm": self.height_cm,
                "weight_kg": self.weight_kg,
                "goal": self.goal,
                "experience": self.experience,
            }
        )
