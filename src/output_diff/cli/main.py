"""
OutputDiff CLI - compare two files and report their differences.

Exit codes: 0 when the files are identical, 1 when they differ, 2 on error.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

import click

from .. import __version__
from ..core.changes import has_changes
from ..core.config import DEFAULT_WIDTH, MIN_WIDTH, DiffConfig, FileType, OutputFormat
from ..core.errors import DiffError, ParseError
from ..diff.compare import compare_bytes
from ..diff.renderer import format_diff

EXIT_IDENTICAL = 0
EXIT_DIFFERENT = 1
EXIT_ERROR = 2

logger = logging.getLogger(__name__)


def _verbose_handler() -> logging.Handler:
    """Send package debug records to stderr with a [DEBUG] style prefix."""
    handler = logging.StreamHandler(click.get_text_stream("stderr"))
    handler.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
    package_logger = logging.getLogger("output_diff")
    package_logger.addHandler(handler)
    package_logger.setLevel(logging.DEBUG)
    return handler


def _read(path: str) -> bytes:
    try:
        return Path(path).read_bytes()
    except OSError as e:
        click.echo(f"Error reading {path}: {e.strerror or e}", err=True)
        sys.exit(EXIT_ERROR)


def _use_color(when: str, output: Optional[str]) -> bool:
    if when == "always":
        return True
    if when == "never" or output:
        return False
    return click.get_text_stream("stdout").isatty()


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(version=__version__, prog_name="output-diff")
@click.argument("file1", type=click.Path(dir_okay=False))
@click.argument("file2", type=click.Path(dir_okay=False))
@click.option(
    "--format", "-f", "output_format",
    type=click.Choice([f.value for f in OutputFormat]),
    default=OutputFormat.UNIFIED.value,
    show_default=True,
    envvar="OUTPUT_DIFF_FORMAT",
    help="Output format",
)
@click.option(
    "--type", "-t", "file_type",
    type=click.Choice([t.value for t in FileType] + ["auto"]),
    default="auto",
    show_default=True,
    help="Force file type instead of detecting it",
)
@click.option(
    "--context", "-c", "context_lines",
    type=click.IntRange(min=0),
    default=None,
    envvar="OUTPUT_DIFF_CONTEXT",
    help="Context lines around changes [default: all]",
)
@click.option(
    "--color",
    type=click.Choice(["auto", "always", "never"]),
    default="auto",
    show_default=True,
    envvar="OUTPUT_DIFF_COLOR",
    help="Colored output",
)
@click.option(
    "--width", "-w",
    type=click.IntRange(min=MIN_WIDTH),
    default=DEFAULT_WIDTH,
    show_default=True,
    help="Total width of side-by-side output",
)
@click.option("--quiet", "-q", is_flag=True, help="Suppress output, only set the exit code")
@click.option("--output", "-o", type=click.Path(dir_okay=False), help="Write output to this file")
@click.option("--verbose", "-v", is_flag=True, help="Verbose output")
def cli(file1, file2, output_format, file_type, context_lines, color, width, quiet, output, verbose):
    """
    Semantic diff tool for JSON, text, and binary files.

    Compares FILE1 (baseline) with FILE2 and exits with 0 when they are
    identical, 1 when they differ and 2 on error.
    """
    handler = _verbose_handler() if verbose else None
    try:
        code = _run(file1, file2, output_format, file_type, context_lines, color, width, quiet, output, verbose)
    finally:
        if handler is not None:
            package_logger = logging.getLogger("output_diff")
            package_logger.removeHandler(handler)
            package_logger.setLevel(logging.NOTSET)
    sys.exit(code)


def _run(file1, file2, output_format, file_type, context_lines, color, width, quiet, output, verbose) -> int:
    content1 = _read(file1)
    content2 = _read(file2)

    config = DiffConfig(
        context_lines=context_lines,
        format=OutputFormat(output_format),
        color=_use_color(color, output),
        verbose=verbose,
        width=width,
    )
    force_type = None if file_type == "auto" else FileType(file_type)

    try:
        result = compare_bytes(
            content1,
            content2,
            config,
            old_hint=Path(file1).suffix,
            new_hint=Path(file2).suffix,
            force_type=force_type,
        )
    except ParseError as e:
        click.echo(f"Error parsing JSON: {e}", err=True)
        return EXIT_ERROR
    except DiffError as e:
        click.echo(f"Error: {e}", err=True)
        return EXIT_ERROR

    changed = has_changes(result)
    if quiet:
        return EXIT_DIFFERENT if changed else EXIT_IDENTICAL

    if not changed and verbose:
        click.echo("Files are identical")

    if changed or verbose:
        rendered = format_diff(result, file1, file2, config)
        if output:
            try:
                Path(output).write_text(rendered, encoding="utf-8")
            except OSError as e:
                click.echo(f"Error writing {output}: {e.strerror or e}", err=True)
                return EXIT_ERROR
            logger.debug(f"Output written to {output}")
        else:
            click.echo(rendered, nl=False)

    return EXIT_DIFFERENT if changed else EXIT_IDENTICAL


def main():
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
