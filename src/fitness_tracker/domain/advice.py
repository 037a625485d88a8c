"""Models for AI advisory results."""

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class AdviceResult:
    """Tips from the advisory model, or the static fallback list."""

    success: bool
    tips: list[str] = field(default_factory=list)
    message: str | None = None
    generated_at: datetime | None = None
