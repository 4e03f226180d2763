"""CLI helpers for status messages and output files."""

from pathlib import Path
from typing import Optional

import click

from .error_handler import ReportInputError

# Status messages are suppressed in quiet mode; errors and results are not
_quiet_mode = False


def set_quiet_mode(quiet: bool) -> None:
    global _quiet_mode
    _quiet_mode = quiet


def status(message: str = "", **kwargs) -> None:
    """Print a status message on stderr unless in quiet mode."""
    if _quiet_mode:
        return
    click.echo(message, err=True, **kwargs)


def error(message: str) -> None:
    """Print an error message on stderr."""
    click.secho(f"ERROR: {message}", err=True, fg='red')


def read_text(path: str) -> str:
    """Read an input file, '-' meaning stdin."""
    try:
        with click.open_file(path, 'r') as f:
            return f.read()
    except OSError as e:
        raise ReportInputError(f"Cannot read {path}: {e}") from e


def write_output(text: str, output_file: Optional[str]) -> None:
    """Write a result to output_file, or to stdout if none is given."""
    if output_file is None:
        click.echo(text)
        return
    path = Path(output_file)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text)
    status(f"Written to: {output_file}")
