"""
XLSX worksheet to CSV converter implementation.
"""

import io
import logging
from contextlib import contextmanager
from datetime import date, datetime, time, timedelta
from itertools import islice
from typing import IO, Iterable, Iterator, List, Optional, Tuple
from zipfile import BadZipFile

import pandas as pd
from openpyxl import load_workbook
from openpyxl.utils.datetime import to_excel
from openpyxl.utils.exceptions import InvalidFileException
from openpyxl.workbook.workbook import Workbook
from openpyxl.worksheet.worksheet import Worksheet

from .cells import CellError, CellValue, DateTimeOffset, Duration, IsoDateTime
from .config import RenderConfig
from .exceptions import SheetNotFoundError, WorkbookOpenError
from .formatter import CellFormatter

logger = logging.getLogger(__name__)

# Records handed to pandas per write
CHUNK_SIZE = 1000


class XlsxToCsvConverter:
    """Convert one worksheet of an XLSX file to CSV."""

    def __init__(self, config: Optional[RenderConfig] = None):
        """
        Initialize the converter.

        Args:
            config: Optional rendering rules for the converter
        """
        self.config = config or RenderConfig()

    def sheet_names(self, input_file_path: str) -> List[str]:
        """List the sheet names of a workbook in container order."""
        with self._open_workbook(input_file_path) as wb:
            return list(wb.sheetnames)

    def iter_rows(self, input_file_path: str, sheet: Optional[str] = None) -> Iterator[List[CellValue]]:
        """
        Yield the typed cell values of a worksheet, row by row.

        Args:
            input_file_path: Path to the XLSX file
            sheet: Name of the sheet to read (default: first sheet)

        Raises:
            WorkbookOpenError: If the workbook can't be opened
            SheetNotFoundError: If the sheet doesn't exist
        """
        with self._open_workbook(input_file_path) as wb:
            ws = self._select_sheet(wb, sheet)
            yield from self._read_rows(ws)

    def iter_records(self, input_file_path: str, sheet: Optional[str] = None) -> Iterator[List[str]]:
        """Yield the rendered CSV fields of a worksheet, row by row."""
        for row in self.iter_rows(input_file_path, sheet):
            yield CellFormatter.format_row(row, self.config)

    def convert(self, input_file_path: str, output_file_path: str, sheet: Optional[str] = None) -> int:
        """
        Convert a worksheet to a CSV file.

        The output file is created or truncated. It is only opened once the
        workbook and sheet have been resolved.

        Args:
            input_file_path: Path to the XLSX file
            output_file_path: Path of the CSV file to write
            sheet: Name of the sheet to convert (default: first sheet)

        Returns:
            Number of records written

        Raises:
            WorkbookOpenError: If the workbook can't be opened
            SheetNotFoundError: If the sheet doesn't exist
            OSError: If the output file can't be written
        """
        with self._open_workbook(input_file_path) as wb:
            ws = self._select_sheet(wb, sheet)
            with open(output_file_path, "w", encoding="utf-8", newline="") as handle:
                count = self._write_records(handle, self._render_rows(ws))

        logger.info("Wrote %d records from sheet '%s' to %s", count, ws.title, output_file_path)
        return count

    def convert_to_string(self, input_file_path: str, sheet: Optional[str] = None) -> str:
        """Convert a worksheet and return the CSV text."""
        buffer = io.StringIO()
        with self._open_workbook(input_file_path) as wb:
            ws = self._select_sheet(wb, sheet)
            self._write_records(buffer, self._render_rows(ws))
        return buffer.getvalue()

    @contextmanager
    def _open_workbook(self, input_file_path: str) -> Iterator[Workbook]:
        """Open the input file and load it as a workbook with cached formula values."""
        try:
            handle = open(input_file_path, "rb")
        except OSError as e:
            raise WorkbookOpenError(str(input_file_path), e.strerror or str(e)) from e

        with handle:
            try:
                wb = load_workbook(handle, data_only=True)
            except (BadZipFile, InvalidFileException, KeyError, ValueError, SyntaxError) as e:
                raise WorkbookOpenError(str(input_file_path), str(e) or type(e).__name__) from e
            except OSError as e:
                raise WorkbookOpenError(str(input_file_path), e.strerror or str(e)) from e

            logger.debug("Opened %s with sheets %s", input_file_path, wb.sheetnames)
            try:
                yield wb
            finally:
                wb.close()

    def _select_sheet(self, wb: Workbook, sheet: Optional[str]) -> Worksheet:
        """Return the named worksheet, or the first sheet when no name is given."""
        if sheet is None:
            if not wb.sheetnames:
                raise SheetNotFoundError("")
            sheet = wb.sheetnames[0]

        if sheet not in wb.sheetnames:
            raise SheetNotFoundError(sheet)

        # Chartsheets have names but no cells
        ws = wb[sheet]
        if not isinstance(ws, Worksheet):
            raise SheetNotFoundError(sheet)

        logger.debug("Selected sheet '%s'", sheet)
        return ws

    def _used_range(self, ws: Worksheet) -> Optional[Tuple[int, int, int, int]]:
        """
        Bounds of the cells that hold a value, as (min_row, max_row, min_col, max_col).

        ws.min_row and friends also count cells that only carry formatting,
        so the bounds are taken from the stored cells directly.

        Returns:
            The bounds, or None if no cell holds a value
        """
        coordinates = [coord for coord, cell in ws._cells.items() if cell.value is not None]
        if not coordinates:
            return None

        rows = [row for row, _ in coordinates]
        cols = [col for _, col in coordinates]
        return min(rows), max(rows), min(cols), max(cols)

    def _read_rows(self, ws: Worksheet) -> Iterator[List[CellValue]]:
        """Yield typed rows spanning the used range of the worksheet."""
        bounds = self._used_range(ws)
        if bounds is None:
            return

        # Look cells up without ws.cell(), which would create the missing ones
        min_row, max_row, min_col, max_col = bounds
        for row_idx in range(min_row, max_row + 1):
            yield [
                self._to_cell_value(ws._cells.get((row_idx, col_idx)))
                for col_idx in range(min_col, max_col + 1)
            ]

    @staticmethod
    def _to_cell_value(cell) -> CellValue:
        """Map an openpyxl cell (or None for a missing one) to a typed cell value."""
        if cell is None:
            return None

        value = cell.value
        if value is None:
            return None

        if cell.data_type == "e":
            return CellError(str(value))

        if isinstance(value, (bool, int, float)):
            return value

        # openpyxl has already resolved date-formatted numbers to Python
        # objects; re-encode them as day offsets of the 1900 date system
        if isinstance(value, timedelta):
            return Duration(to_excel(value))
        if isinstance(value, (datetime, date, time)):
            return DateTimeOffset(to_excel(value))

        if isinstance(value, str):
            if cell.data_type == "d":
                return IsoDateTime(value)
            return value

        return str(value)

    def _render_rows(self, ws: Worksheet) -> Iterator[List[str]]:
        for row in self._read_rows(ws):
            yield CellFormatter.format_row(row, self.config)

    def _write_records(self, handle: IO[str], records: Iterable[List[str]]) -> int:
        """
        Write records as CSV in chunks, preserving their order.

        Args:
            handle: Text stream opened with newline=""
            records: Rendered rows

        Returns:
            Number of records written
        """
        count = 0
        records = iter(records)
        while True:
            chunk = list(islice(records, CHUNK_SIZE))
            if not chunk:
                break
            df = pd.DataFrame(chunk, dtype=object)
            df.to_csv(handle, header=False, index=False, lineterminator="\n")
            count += len(chunk)
            logger.debug("Wrote %d records", count)

        handle.flush()
        return count
