"""Exception types raised by the shooting incident pipeline."""
from __future__ import annotations

from typing import Any, Optional


class ShootingPipelineError(Exception):
    """Base class for every pipeline failure."""


class SourceUnavailableError(ShootingPipelineError):
    """The dataset could not be fetched or opened."""


class _InputError(ShootingPipelineError):
    def __init__(self, message: str, *, value: Any = None, row: Optional[int] = None) -> None:
        self.value = value
        self.row = row
        details = []
        if value is not None:
            details.append(f"value={value!r}")
        if row is not None:
            details.append(f"row={row}")
        if details:
            message = f"{message} ({', '.join(details)})"
        super().__init__(message)


class MalformedInputError(_InputError):
    """The content is not valid delimited tabular data for this dataset."""


class DateParseError(_InputError):
    """An occurrence date did not match the month/day/year format."""


class TimeParseError(_InputError):
    """An occurrence time did not match the hour:minute:second format."""


class ModelFitError(ShootingPipelineError):
    """The logistic regression could not be fitted."""


__all__ = [
    "ShootingPipelineError",
    "SourceUnavailableError",
    "MalformedInputError",
    "DateParseError",
    "TimeParseError",
    "ModelFitError",
]
