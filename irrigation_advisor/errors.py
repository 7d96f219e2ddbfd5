"""Error types raised by the recommendation core and its weather collaborator."""
from typing import Any


class ValidationError(ValueError):
    """Malformed or out-of-range input. Fatal to a single recommendation."""

    def __init__(self, field: str, constraint: str, value: Any = None):
        self.field = field
        self.constraint = constraint
        self.value = value
        super().__init__(f"{field}: {constraint}")


class WeatherDataError(RuntimeError):
    """The weather provider failed or left out a field the core needs."""

    def __init__(self, message: str, missing: tuple = ()):
        self.missing = tuple(missing)
        super().__init__(message)
