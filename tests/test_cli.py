"""
Tests for the xlsx-to-csv command line.
"""

import tempfile
from datetime import date, time
from pathlib import Path

from click.testing import CliRunner
from openpyxl import Workbook

from xlsx_to_csv import __version__
from xlsx_to_csv.cli import main


def create_test_excel(file_path: Path):
    """Create a two-sheet workbook with a date and a time on the second sheet."""
    wb = Workbook()
    ws = wb.active
    ws.title = "Sheet1"
    ws.append([1, "a", True])
    ws.append([2.5, "b", False])

    ws2 = wb.create_sheet("Sheet2")
    ws2.append([date(2020, 1, 1), time(6, 0)])

    wb.save(file_path)


class TestCli:
    """Test the command line interface."""

    def test_no_options(self):
        """Test exporting the first sheet with default options."""
        runner = CliRunner()
        with tempfile.TemporaryDirectory() as temp_dir:
            xlsx_path = Path(temp_dir) / "test.xlsx"
            csv_path = Path(temp_dir) / "out.csv"
            create_test_excel(xlsx_path)

            result = runner.invoke(main, ['-i', str(xlsx_path), '-o', str(csv_path)])

            assert result.exit_code == 0
            assert result.output == "Done\n"
            assert csv_path.read_text(encoding='utf-8') == "1,a,true\n2.5,b,false\n"

    def test_sheet_and_formats(self):
        """Test a named sheet with date and time formats."""
        runner = CliRunner()
        with tempfile.TemporaryDirectory() as temp_dir:
            xlsx_path = Path(temp_dir) / "test.xlsx"
            csv_path = Path(temp_dir) / "out.csv"
            create_test_excel(xlsx_path)

            result = runner.invoke(main, [
                '--input', str(xlsx_path),
                '--output', str(csv_path),
                '--sheet', 'Sheet2',
                '--date-format', '%m/%d/%y',
                '--time-format', '%H:%M',
            ])

            assert result.exit_code == 0
            assert csv_path.read_text(encoding='utf-8') == "01/01/20,06:00\n"

    def test_datetime_format_applies_to_all_kinds(self):
        """Test that date and time values fall back to --datetime-format."""
        runner = CliRunner()
        with tempfile.TemporaryDirectory() as temp_dir:
            xlsx_path = Path(temp_dir) / "test.xlsx"
            csv_path = Path(temp_dir) / "out.csv"
            create_test_excel(xlsx_path)

            result = runner.invoke(main, [
                '-i', str(xlsx_path), '-o', str(csv_path), '-s', 'Sheet2',
                '--datetime-format', '%Y-%m-%d %H:%M:%S',
            ])

            assert result.exit_code == 0
            assert csv_path.read_text(encoding='utf-8') == "2020-01-01 00:00:00,1899-12-31 06:00:00\n"

    def test_numeric_bool(self):
        """Test rendering booleans as 1/0."""
        runner = CliRunner()
        with tempfile.TemporaryDirectory() as temp_dir:
            xlsx_path = Path(temp_dir) / "test.xlsx"
            csv_path = Path(temp_dir) / "out.csv"
            create_test_excel(xlsx_path)

            result = runner.invoke(main, ['-i', str(xlsx_path), '-o', str(csv_path), '--numeric-bool'])

            assert result.exit_code == 0
            assert csv_path.read_text(encoding='utf-8') == "1,a,1\n2.5,b,0\n"

    def test_missing_input(self):
        """Test that a missing input file is reported with its path."""
        runner = CliRunner()
        with tempfile.TemporaryDirectory() as temp_dir:
            missing = str(Path(temp_dir) / "nope.xlsx")
            csv_path = Path(temp_dir) / "out.csv"

            result = runner.invoke(main, ['-i', missing, '-o', str(csv_path)])

            assert result.exit_code == 1
            assert f"{missing}: No such file or directory" in result.output
            assert not csv_path.exists()

    def test_missing_sheet(self):
        """Test that an unknown sheet name fails."""
        runner = CliRunner()
        with tempfile.TemporaryDirectory() as temp_dir:
            xlsx_path = Path(temp_dir) / "test.xlsx"
            create_test_excel(xlsx_path)

            result = runner.invoke(main, [
                '-i', str(xlsx_path), '-o', str(Path(temp_dir) / "out.csv"), '-s', 'Nope',
            ])

            assert result.exit_code == 1
            assert "Couldn't open sheet: 'Nope'" in result.output

    def test_unwritable_output(self):
        """Test that an output file that can't be created fails with the OS message."""
        runner = CliRunner()
        with tempfile.TemporaryDirectory() as temp_dir:
            xlsx_path = Path(temp_dir) / "test.xlsx"
            csv_path = Path(temp_dir) / "missing" / "out.csv"
            create_test_excel(xlsx_path)

            result = runner.invoke(main, ['-i', str(xlsx_path), '-o', str(csv_path)])

            assert result.exit_code == 1
            assert "Error: " in result.output
            assert "No such file or directory" in result.output
            assert str(csv_path) in result.output
            assert "Done" not in result.output

    def test_invalid_pattern_fails_fast(self):
        """Test that a bad format pattern is rejected before any file is touched."""
        runner = CliRunner()
        with tempfile.TemporaryDirectory() as temp_dir:
            csv_path = Path(temp_dir) / "out.csv"

            result = runner.invoke(main, [
                '-i', str(Path(temp_dir) / "whatever.xlsx"), '-o', str(csv_path),
                '--time-format', '%H:%Q',
            ])

            assert result.exit_code == 1
            assert "time_format" in result.output
            assert "unknown directive '%Q'" in result.output
            assert not csv_path.exists()

    def test_no_args(self):
        """Test that required options are enforced."""
        result = CliRunner().invoke(main, [])

        assert result.exit_code != 0
        assert "Usage" in result.output

    def test_version(self):
        result = CliRunner().invoke(main, ['--version'])

        assert result.exit_code == 0
        assert __version__ in result.output
