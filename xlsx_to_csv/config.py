"""
Render configuration for worksheet export.
"""

import re
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_DATETIME_FORMAT = "%Y-%m-%dT%H:%M:%SZ"

OffsetKind = Literal["time", "date", "datetime"]

# strftime conversions accepted on every supported platform, plus the
# glibc extensions (%-d, %e, %k, ...) that spreadsheet users commonly reach for
_KNOWN_DIRECTIVES = set("aAbBcCdDeFfgGhHIjklmMnpPrRsStTuUVwWxXyYzZ%") | {":z"}
_DIRECTIVE = re.compile(r"%(?P<flag>[-_0^#]?)(?P<directive>:z|.|$)", re.DOTALL)


def validate_strftime_pattern(pattern: str) -> str:
    """
    Check that every ``%`` in a strftime pattern introduces a known directive.

    Args:
        pattern: strftime template supplied by the user

    Returns:
        The pattern, unchanged

    Raises:
        ValueError: If the pattern contains an unknown or dangling directive
    """
    for match in _DIRECTIVE.finditer(pattern):
        directive = match.group("directive")
        if not directive:
            raise ValueError(f"dangling '%' at the end of pattern {pattern!r}")
        if directive not in _KNOWN_DIRECTIVES:
            raise ValueError(f"unknown directive '%{directive}' in pattern {pattern!r}")
    return pattern


class RenderConfig(BaseModel):
    """Rules for rendering cell values as CSV text."""

    model_config = ConfigDict(frozen=True)

    numeric_bool: bool = Field(
        default=False,
        description="Render booleans as 1/0 instead of true/false"
    )
    datetime_format: Optional[str] = Field(
        default=DEFAULT_DATETIME_FORMAT,
        description="strftime pattern for datetime values; None keeps the raw day offset"
    )
    time_format: Optional[str] = Field(
        default=None,
        description="strftime pattern for time-only values (falls back to datetime_format)"
    )
    date_format: Optional[str] = Field(
        default=None,
        description="strftime pattern for date-only values (falls back to datetime_format)"
    )
    duration_hms: bool = Field(
        default=False,
        description="Render durations as H:MM:SS instead of a raw day count"
    )
    include_errors: bool = Field(
        default=False,
        description="Render error cells as their code instead of an empty string"
    )

    @field_validator("datetime_format", "time_format", "date_format")
    @classmethod
    def _check_pattern(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        return validate_strftime_pattern(value)

    def pattern_for(self, kind: OffsetKind) -> Optional[str]:
        """Return the pattern used for a date, time or datetime value."""
        if kind == "time" and self.time_format is not None:
            return self.time_format
        if kind == "date" and self.date_format is not None:
            return self.date_format
        return self.datetime_format
