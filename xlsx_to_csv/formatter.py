"""
Cell value formatter: renders typed worksheet values as CSV field text.
"""

import math
from datetime import date, datetime, time, timedelta
from typing import Optional

import numpy as np

from .cells import (
    CellError,
    CellValue,
    DateTimeOffset,
    Duration,
    IsoDateTime,
    IsoDuration,
)
from .config import OffsetKind, RenderConfig

SECONDS_PER_DAY = 86400

# Day 0 of the 1900 date system. Time-only values are stored on this date.
EPOCH_PLACEHOLDER_DATE = date(1899, 12, 31)

# The 1900 date system counts a 1900-02-29 that never existed (day 60), so
# from day 60 onwards offsets are counted from one day earlier.
_PHANTOM_LEAP_DAY = 60
_LEAP_ADJUSTED_EPOCH = datetime(1899, 12, 30)


def format_number(value: float) -> str:
    """Shortest round-trippable positional decimal, e.g. ``2.5``, ``1``, ``0.0000001``."""
    return np.format_float_positional(float(value), trim="-")


def offset_to_datetime(days: float) -> Optional[datetime]:
    """
    Convert a day offset of the 1900 date system to a calendar datetime.

    Fractional seconds are rounded to the nearest second.

    Args:
        days: Days since the epoch, time of day as the fraction

    Returns:
        The datetime, or None if the offset has no calendar representation
    """
    if not math.isfinite(days):
        return None
    if days < _PHANTOM_LEAP_DAY:
        days += 1
    try:
        return _LEAP_ADJUSTED_EPOCH + timedelta(seconds=round(days * SECONDS_PER_DAY))
    except OverflowError:
        return None


def classify_datetime(moment: datetime) -> OffsetKind:
    """
    Guess whether a converted day offset was meant as a time, a date or both.

    A value on the epoch placeholder date is a time. A value at exactly
    midnight is a date; true midnight timestamps end up here too and cannot be
    told apart from plain dates.
    """
    if moment.date() == EPOCH_PLACEHOLDER_DATE:
        return "time"
    if moment.time() == time(0):
        return "date"
    return "datetime"


def format_clock(days: float) -> str:
    """Render a day count as ``H:MM:SS``; hours are unpadded and may exceed 24."""
    total_seconds = round(days * SECONDS_PER_DAY)
    sign = "-" if total_seconds < 0 else ""
    hours, remainder = divmod(abs(total_seconds), 3600)
    minutes, seconds = divmod(remainder, 60)
    return f"{sign}{hours}:{minutes:02d}:{seconds:02d}"


class CellFormatter:
    """Render cell values according to a RenderConfig."""

    @staticmethod
    def format_value(value: CellValue, config: RenderConfig) -> str:
        """
        Render one cell value as CSV field text.

        Every CellValue member has a rendering, so this never fails for
        values produced by the workbook reader. Anything outside CellValue
        is a programming error and raises TypeError.

        Args:
            value: The typed cell value
            config: Rendering rules for the run

        Returns:
            The field text
        """
        if value is None:
            return ""

        # bool is a subclass of int, so it has to be checked first
        if isinstance(value, bool):
            return CellFormatter._format_bool(value, config)
        if isinstance(value, int):
            return str(value)
        if isinstance(value, float):
            return format_number(value)
        if isinstance(value, str):
            return value

        if isinstance(value, DateTimeOffset):
            return CellFormatter._format_datetime(value, config)
        if isinstance(value, Duration):
            return CellFormatter._format_duration(value, config)
        if isinstance(value, (IsoDateTime, IsoDuration)):
            return value.text
        if isinstance(value, CellError):
            return value.code if config.include_errors else ""

        raise TypeError(f"Unsupported cell value: {value!r}")

    @staticmethod
    def format_row(row: list, config: RenderConfig) -> list:
        """Render every cell of a row."""
        return [CellFormatter.format_value(value, config) for value in row]

    @staticmethod
    def _format_bool(value: bool, config: RenderConfig) -> str:
        if config.numeric_bool:
            return "1" if value else "0"
        return "true" if value else "false"

    @staticmethod
    def _format_datetime(value: DateTimeOffset, config: RenderConfig) -> str:
        """Format a day offset with the pattern for its guessed kind."""
        moment = offset_to_datetime(value.days)
        if moment is None:
            return format_number(value.days)

        pattern = config.pattern_for(classify_datetime(moment))
        if pattern is None:
            return format_number(value.days)

        return moment.strftime(pattern)

    @staticmethod
    def _format_duration(value: Duration, config: RenderConfig) -> str:
        if config.duration_hms and math.isfinite(value.days):
            return format_clock(value.days)
        return format_number(value.days)
