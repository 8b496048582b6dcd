"""
Exceptions raised while exporting a worksheet.
"""


class XlsxToCsvError(Exception):
    """Base class for export failures."""


class WorkbookOpenError(XlsxToCsvError):
    """The input workbook is missing, unreadable or not a valid XLSX container."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"{path}: {reason}")


class SheetNotFoundError(XlsxToCsvError, ValueError):
    """The requested sheet does not exist or is not a worksheet."""

    def __init__(self, sheet_name: str):
        self.sheet_name = sheet_name
        super().__init__(f"Couldn't open sheet: '{sheet_name}'")
