"""CLI application entry point for glacon.

This module provides the main CLI interface using Typer.
"""

import json
from pathlib import Path
from typing import Annotated

import typer

from glacon import __version__
from glacon.cli.output import (
    console,
    create_progress,
    format_file_size,
    print_error,
    print_header,
    print_icon_map,
    print_skipped,
    print_source_info,
    print_step,
    print_success,
)
from glacon.config import GlaconSettings, LoggingConfig
from glacon.core import IconFontProcessor, build_icon_map
from glacon.exceptions import (
    FontIOError,
    FontParseError,
    GlaconError,
    InvalidDestinationError,
    NoIconsFoundError,
)
from glacon.io import collect_svg_paths, get_font_name
from glacon.utils import configure_logging

# Create the Typer app
app = typer.Typer(
    name="glacon",
    help="Build TrueType icon fonts from SVG files.",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]Glacon[/bold blue] v{__version__}")
        raise typer.Exit()


@app.callback()
def main_options(
    _version: Annotated[  # noqa: ARG001
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Build TrueType icon fonts from SVG files."""


@app.command()
def build(
    source_dir: Annotated[
        Path,
        typer.Argument(
            help="Directory containing the SVG icons (searched recursively)",
            show_default=False,
        ),
    ],
    destination: Annotated[
        Path,
        typer.Argument(
            help="Font file to create; the file name becomes the font name",
            show_default=False,
        ),
    ],
    log_file: Annotated[
        Path | None,
        typer.Option(
            "--log-file",
            help="Write detailed logs to file",
        ),
    ] = None,
    log_level: Annotated[
        str,
        typer.Option(
            "--log-level",
            help="Logging level (DEBUG|INFO|WARNING|ERROR)",
        ),
    ] = "WARNING",
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Verbose console output",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Minimal console output",
        ),
    ] = False,
) -> None:
    """Build an icon font from a directory of SVG files.

    Every SVG file becomes a glyph named after its path relative to
    SOURCE_DIR without extension, e.g. "jam/book". Codepoints are assigned
    from U+E000 in sorted name order.

    Example:
        glacon build assets/icons assets/app-icons.ttf
    """
    # Validate mutually exclusive options
    if verbose and quiet:
        print_error("Cannot use --verbose and --quiet together")
        raise typer.Exit(code=1)

    if not source_dir.is_dir():
        print_error(
            f"Source directory not found: {source_dir}",
            details=f"The directory '{source_dir}' does not exist or is not a directory.",
        )
        raise typer.Exit(code=1)

    if not quiet:
        print_header(__version__)

    settings = GlaconSettings(
        logging=LoggingConfig(
            log_file=log_file,
            log_level=log_level if not quiet else "WARNING",
        ),
    )
    logger = configure_logging(
        log_file=settings.logging.log_file,
        console_level=settings.logging.log_level,
        file_level=settings.logging.file_log_level,
        quiet=quiet,
    )

    try:
        get_font_name(destination, settings.font.extension)

        if not quiet:
            print_step("Collecting icons")
        sources = collect_svg_paths(source_dir)
        if not quiet:
            print_source_info(str(source_dir), len(sources))
            print_step("Building font")

        processor = IconFontProcessor(settings, logger)

        if not quiet:
            with create_progress() as progress:
                task_id = progress.add_task(
                    f"Processing {len(sources)} icons",
                    total=len(sources),
                )

                def update_progress(completed: int, *_: object) -> None:
                    progress.update(task_id, completed=completed)

                stats = processor.process(source_dir, destination, progress_callback=update_progress)
        else:
            stats = processor.process(source_dir, destination)

        if not quiet:
            print_skipped(stats.skipped, verbose)
            print_success(
                output_path=str(destination),
                file_size=format_file_size(stats.output_size),
                total_time_s=stats.duration_seconds,
                processed=stats.processed_count,
                skipped=stats.skipped_count,
                contours=stats.contour_count,
            )

    except InvalidDestinationError as e:
        print_error(f"Invalid destination: {e.reason}")
        raise typer.Exit(code=1)
    except NoIconsFoundError as e:
        print_error(f"No icons found in {e.source}")
        raise typer.Exit(code=1)
    except FontIOError as e:
        print_error(f"Could not access {e.path}: {e.reason}")
        raise typer.Exit(code=1)
    except GlaconError as e:
        print_error(str(e))
        raise typer.Exit(code=1)


@app.command("map")
def map_icons(
    font: Annotated[
        Path,
        typer.Argument(
            help="Compiled icon font (.ttf)",
            show_default=False,
        ),
    ],
    json_output: Annotated[
        bool,
        typer.Option(
            "--json",
            help="Print the map as JSON (icon name to codepoint)",
        ),
    ] = False,
) -> None:
    """Show the icon names and codepoints stored in a font.

    Example:
        glacon map assets/app-icons.ttf --json
    """
    try:
        icon_map = build_icon_map(font)
    except FontIOError as e:
        print_error(f"Could not read {e.path}: {e.reason}")
        raise typer.Exit(code=1)
    except FontParseError as e:
        print_error(f"Could not parse font: {e.reason}")
        raise typer.Exit(code=1)

    if json_output:
        codepoints = {
            name: f"U+{ord(char):04X}"
            for name, char in sorted(icon_map.items(), key=lambda item: item[1])
        }
        typer.echo(json.dumps(codepoints, indent=2, ensure_ascii=False))
    else:
        print_icon_map(icon_map)


def cli() -> None:
    """Entry point for the CLI application."""
    app()


def main() -> None:
    """Entry point for the CLI application (alias for cli)."""
    cli()


if __name__ == "__main__":
    cli()
