"""
Command-line interface for the xlsx-to-csv converter.
"""

import logging

import click
from pydantic import ValidationError

from . import __version__
from .config import DEFAULT_DATETIME_FORMAT, RenderConfig
from .converter import XlsxToCsvConverter
from .exceptions import XlsxToCsvError


def configure_logging(verbosity: int) -> None:
    if verbosity >= 2:
        level = logging.DEBUG
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.WARNING
    logging.basicConfig(level=level, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")


@click.command()
@click.version_option(__version__, prog_name="xlsx-to-csv")
@click.option('-i', '--input', 'input_file', required=True, type=click.Path(), help='Input XLSX file')
@click.option('-o', '--output', 'output_file', required=True, type=click.Path(), help='Output CSV file (created or truncated)')
@click.option('-s', '--sheet', help='Sheet name (default: first sheet in the workbook)')
@click.option('--numeric-bool', is_flag=True, help='Render booleans as 1/0 instead of true/false')
@click.option('--datetime-format', default=DEFAULT_DATETIME_FORMAT, show_default=True,
              help='strftime format for datetime values')
@click.option('--time-format', help='strftime format for time values (default: --datetime-format)')
@click.option('--date-format', help='strftime format for date values (default: --datetime-format)')
@click.option('--duration-hms', is_flag=True, help='Render durations as H:MM:SS instead of a number of days')
@click.option('--include-errors', is_flag=True, help='Render error cells (#DIV/0!, #N/A, ...) instead of leaving them empty')
@click.option('-v', '--verbose', count=True, help='Increase logging verbosity (repeatable)')
def main(input_file, output_file, sheet, numeric_bool, datetime_format, time_format,
         date_format, duration_hms, include_errors, verbose):
    """
    Convert one sheet of an XLSX file to CSV.

    Examples:

        # First sheet with default rendering
        xlsx-to-csv -i data.xlsx -o data.csv

        # Named sheet, plain dates and clock-style durations
        xlsx-to-csv -i data.xlsx -o data.csv -s Sheet2 --date-format %Y-%m-%d --duration-hms
    """
    configure_logging(verbose)

    try:
        config = RenderConfig(
            numeric_bool=numeric_bool,
            datetime_format=datetime_format,
            time_format=time_format,
            date_format=date_format,
            duration_hms=duration_hms,
            include_errors=include_errors
        )
        converter = XlsxToCsvConverter(config)
        converter.convert(input_file, output_file, sheet=sheet)

        click.echo("Done")

    except ValidationError as e:
        for error in e.errors():
            field = ".".join(str(part) for part in error["loc"])
            click.echo(f"Error: {field}: {error['msg']}", err=True)
        raise click.Abort()
    except XlsxToCsvError as e:
        click.echo(f"Error: {e}", err=True)
        raise click.Abort()
    except OSError as e:
        click.echo(f"Error: {e}", err=True)
        raise click.Abort()
    except Exception as e:
        click.echo(f"Unexpected error: {e}", err=True)
        raise click.Abort()


if __name__ == '__main__':
    main()
