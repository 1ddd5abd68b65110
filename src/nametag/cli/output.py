"""Rich console output helpers for the CLI.

This module provides user-friendly console output using Rich library
with tables and formatted messages.
"""

from rich.console import Console
from rich.table import Table
from rich.text import Text

from nametag.core import NameTag
from nametag.utils import rgb_to_hex

console = Console()

# Unicode symbols for consistent visual language
SYM_STEP = "▸"  # Step indicator
SYM_OK = "✓"  # Success
SYM_ERR = "✗"  # Error
SYM_DOT = "·"  # Separator/secondary info

REGION_NAMES = ("body", "text")


def print_header(version: str) -> None:
    """Print application header.

    Args:
        version: Application version string
    """
    console.print(f"\n[bold]Nametag[/bold] v{version}")
    console.print("─" * 44)


def print_step(message: str) -> None:
    """Print a processing step indicator.

    Args:
        message: Step description message
    """
    console.print(f"\n{SYM_STEP} {message}")


def print_tag_info(text: str, back_text: str, workers: int) -> None:
    """Print what is about to be built."""
    line = Text("  ")
    line.append(repr(text), style="bold")
    if back_text:
        line.append(f" {SYM_DOT} back ")
        line.append(repr(back_text))
    console.print(line)
    console.print(f"  {workers} {'worker' if workers == 1 else 'workers'}")


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


def print_regions(tag: NameTag) -> None:
    """Print a table of the coloured regions of a tag."""
    table = Table(box=None, padding=(0, 2), show_edge=False)
    table.add_column("Region")
    table.add_column("Colour")
    table.add_column("Faces", justify="right")
    for name, region in zip(REGION_NAMES, tag.regions):
        color = rgb_to_hex(region.color)
        table.add_row(name, f"[{color}]■[/{color}] {color}", str(len(region.geometry.faces)))
    console.print(table)


def print_success(tag: NameTag, validated: bool, verbose: bool = False) -> None:
    """Print success message with summary.

    Args:
        tag: Built name tag
        validated: Whether the watertightness check ran
        verbose: Show per-part timings
    """
    stats = tag.stats
    solid = tag.solid

    console.print(
        f"\n[bold green]{SYM_OK} Complete[/bold green] in {_format_time(stats.duration_seconds)}"
    )

    lo, hi = solid.bounds()
    size = hi.minus(lo)
    console.print(
        f"  {len(solid.faces):,} faces {SYM_DOT} {len(set(solid.vertices())):,} vertices "
        f"{SYM_DOT} {stats.booleans} booleans"
    )
    console.print(
        f"  {size.x:.2f} x {size.y:.2f} x {size.z:.2f} {SYM_DOT} "
        f"volume {solid.volume():.2f} {SYM_DOT} half length {tag.text_length:.2f}"
    )
    status = "[green]watertight[/green]" if validated else "[yellow]not checked[/yellow]"
    console.print(f"  {status}")

    if verbose:
        for part, duration_ms in stats.part_durations.items():
            console.print(f"  {part} {SYM_DOT} {duration_ms:.1f}ms")


def print_glyphs(characters: str) -> None:
    """Print the characters the stroke font supports."""
    console.print(f"\n[bold]{len(characters)} supported characters[/bold]\n")
    console.print(Text(f"  {characters}"))


def print_error(message: str, details: str | None = None) -> None:
    """Print error message.

    Args:
        message: Main error message
        details: Optional detailed error information
    """
    console.print(f"\n[bold red]{SYM_ERR} Error:[/bold red] {message}")
    if details:
        console.print(f"  {details}")
