"""Error types raised by the fitness tracker."""


class FitnessTrackerError(Exception):
    """Base class for application errors."""


class InvalidInputError(FitnessTrackerError, ValueError):
    """Raised when a numeric input is missing or out of range."""


class DivisionByZeroError(FitnessTrackerError, ZeroDivisionError):
    """Raised when a calculation would divide by a zero baseline."""


class NotFoundError(FitnessTrackerError):
    """Raised when a requested record does not exist."""


class DuplicateEntryError(FitnessTrackerError):
    """Raised when a progress entry already exists for the day."""

    def __init__(self, existing_entry_id: object) -> None:
        super().__init__(
            "Progress entry already exists for today. Use PUT to update."
        )
        self.existing_entry_id = existing_entry_id
