"""Rich console output helpers for the CLI.

This module provides user-friendly console output using Rich library
with progress bars, tables, and formatted messages.
"""

from rich.console import Console
from rich.progress import (
    BarColumn,
    Progress,
    TaskProgressColumn,
    TextColumn,
    TimeElapsedColumn,
)
from rich.table import Table
from rich.text import Text

console = Console()

# Unicode symbols for consistent visual language
SYM_STEP = "▸"  # Step indicator
SYM_OK = "✓"  # Success
SYM_ERR = "✗"  # Error
SYM_DOT = "·"  # Separator/secondary info


def create_progress() -> Progress:
    """Create a rich progress bar for icon processing.

    Returns:
        Configured Progress instance with bar and time elapsed.
    """
    return Progress(
        TextColumn("  "),
        BarColumn(bar_width=40, complete_style="green", finished_style="green"),
        TaskProgressColumn(),
        TimeElapsedColumn(),
        console=console,
        transient=False,
    )


def print_header(version: str) -> None:
    """Print application header.

    Args:
        version: Application version string
    """
    console.print(f"\n[bold]Glacon[/bold] v{version}")
    console.print("─" * 44)


def print_step(message: str) -> None:
    """Print a processing step indicator."""
    console.print(f"\n{SYM_STEP} {message}")


def print_source_info(source_dir: str, icon_count: int) -> None:
    """Print the icon source summary.

    Args:
        source_dir: Directory containing the SVG files
        icon_count: Number of SVG files found
    """
    # Use Text to safely handle paths with special characters
    line = Text("  ")
    line.append(source_dir)
    console.print(line)
    console.print(f"  {icon_count:,} SVG files")


def print_skipped(skipped: list[tuple[str, str]], verbose: bool) -> None:
    """Print icons that were left out of the font.

    Args:
        skipped: (icon name, reason) pairs
        verbose: Whether to show the reasons
    """
    if not skipped:
        return
    console.print(f"  [yellow]{len(skipped)}[/yellow] icons skipped")
    if verbose:
        for name, reason in skipped[:20]:
            line = Text(f"  {SYM_DOT} ")
            line.append(name, style="bold")
            line.append(f": {reason}")
            console.print(line)
        if len(skipped) > 20:
            console.print(f"  {SYM_DOT}{SYM_DOT}{SYM_DOT} (+{len(skipped) - 20} more)")


def _format_time(seconds: float) -> str:
    """Format seconds into human-readable time string."""
    if seconds < 1:
        return f"{seconds * 1000:.0f}ms"
    elif seconds < 60:
        return f"{seconds:.1f}s"
    else:
        mins = int(seconds // 60)
        secs = seconds % 60
        return f"{mins}m {secs:.1f}s"


def format_file_size(size_bytes: int) -> str:
    """Format a byte count in human-readable form (e.g. "12 KB")."""
    if size_bytes < 1024:
        return f"{size_bytes} B"
    elif size_bytes < 1024 * 1024:
        return f"{size_bytes / 1024:.0f} KB"
    else:
        return f"{size_bytes / (1024 * 1024):.1f} MB"


def print_success(
    output_path: str,
    file_size: str,
    total_time_s: float,
    processed: int,
    skipped: int,
    contours: int,
) -> None:
    """Print success message with summary.

    Args:
        output_path: Path to output file
        file_size: Human-readable file size string
        total_time_s: Total processing time in seconds
        processed: Number of icons in the font
        skipped: Number of icons left out
        contours: Total number of contours written
    """
    time_str = _format_time(total_time_s)

    console.print(f"\n[bold green]{SYM_OK} Complete[/bold green] in {time_str}")

    line = Text("  ")
    line.append(output_path, style="bold")
    line.append(f" ({file_size})")
    console.print(line)

    skipped_style = "yellow" if skipped > 0 else "green"
    console.print(
        f"  {processed} icons {SYM_DOT} {contours} contours {SYM_DOT} "
        f"[{skipped_style}]{skipped} skipped[/{skipped_style}]"
    )


def print_icon_map(icon_map: dict[str, str]) -> None:
    """Print an icon map as a table ordered by codepoint."""
    table = Table(show_header=True, header_style="bold")
    table.add_column("Codepoint")
    table.add_column("Icon")

    for name, char in sorted(icon_map.items(), key=lambda item: item[1]):
        table.add_row(f"U+{ord(char):04X}", Text(name))

    console.print(table)
    console.print(f"  {len(icon_map)} icons")


def print_error(message: str, details: str | None = None) -> None:
    """Print error message.

    Args:
        message: Main error message
        details: Optional detailed error information
    """
    console.print(f"\n[bold red]{SYM_ERR} Error:[/bold red] {message}")
    if details:
        console.print(f"  {details}")
