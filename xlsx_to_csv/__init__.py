"""
xlsx-to-csv - Convert one sheet of an XLSX file to CSV.

Workbooks store dates, times and datetimes alike as a number of days since
1899-12-31. Each value is rendered with its own strftime pattern:
- time-only values (on the 1899-12-31 placeholder date) use the time format
- values at exactly midnight use the date format
- everything else uses the datetime format

Example:
    from xlsx_to_csv import RenderConfig, XlsxToCsvConverter

    converter = XlsxToCsvConverter(RenderConfig(date_format='%Y-%m-%d'))
    converter.convert('data.xlsx', 'data.csv', sheet='Sheet1')
"""

from .cells import CellError, CellValue, DateTimeOffset, Duration, IsoDateTime, IsoDuration
from .config import DEFAULT_DATETIME_FORMAT, RenderConfig
from .converter import XlsxToCsvConverter
from .exceptions import SheetNotFoundError, WorkbookOpenError, XlsxToCsvError
from .formatter import CellFormatter

__version__ = "0.1.0"
__all__ = [
    "XlsxToCsvConverter",
    "RenderConfig",
    "CellFormatter",
    "DEFAULT_DATETIME_FORMAT",
    "CellValue",
    "CellError",
    "DateTimeOffset",
    "Duration",
    "IsoDateTime",
    "IsoDuration",
    "XlsxToCsvError",
    "WorkbookOpenError",
    "SheetNotFoundError",
]
