"""
Typed cell values as read from a worksheet.

A cell value is one of:

- ``None`` for an empty cell
- ``bool``, ``int``, ``float`` or ``str`` for plain values
- one of the small wrapper types below for values whose raw storage needs
  interpretation before it can be rendered
"""

from typing import NamedTuple, Union


class DateTimeOffset(NamedTuple):
    """A date, time or datetime stored as days since the 1900 epoch.

    The integer part is the date and the fraction is the time of day. Nothing
    in the stored value says whether it was meant as a date, a time or both.
    """

    days: float


class Duration(NamedTuple):
    """An elapsed time stored as a (possibly fractional) number of days."""

    days: float


class IsoDateTime(NamedTuple):
    """A datetime that the workbook stores as ISO 8601 text."""

    text: str


class IsoDuration(NamedTuple):
    """A duration that the workbook stores as ISO 8601 text."""

    text: str


class CellError(NamedTuple):
    """An error cell such as ``#DIV/0!`` or ``#N/A``."""

    code: str


CellValue = Union[
    None,
    bool,
    int,
    float,
    str,
    DateTimeOffset,
    Duration,
    IsoDateTime,
    IsoDuration,
    CellError,
]
