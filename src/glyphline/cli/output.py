"""Rich console output helpers for the CLI.

This module provides user-friendly console output using Rich library
with tables and formatted messages.
"""

from rich.console import Console
from rich.table import Table
from rich.text import Text

from glyphline.domain import Glyph
from glyphline.utils import LabelStats

console = Console()

# Unicode symbols for consistent visual language
SYM_STEP = "▸"  # Step indicator
SYM_OK = "✓"  # Success
SYM_ERR = "✗"  # Error
SYM_DOT = "·"  # Separator/secondary info


def print_header(version: str) -> None:
    """Print application header.

    Args:
        version: Application version string
    """
    console.print(f"\n[bold]Glyphline[/bold] v{version}")
    console.print("─" * 44)


def print_step(message: str) -> None:
    """Print a processing step indicator.

    Args:
        message: Step description message
    """
    console.print(f"\n{SYM_STEP} {message}")


def print_font_info(font_name: str, family: str, glyph_count: int, scale: float) -> None:
    """Print font information.

    Args:
        font_name: Font name or path as given on the command line
        family: Family name from the font definition
        glyph_count: Number of glyphs in the definition
        scale: Font instance scale
    """
    # Use Text to safely handle paths with special characters
    line1 = Text("  ")
    line1.append(font_name)
    line1.append(f" ({family})")
    console.print(line1)
    console.print(f"  {glyph_count:,} glyphs {SYM_DOT} scale {scale:g}")


def print_glyph_details(glyph: Glyph) -> None:
    """Print a table describing a vectorized glyph.

    Args:
        glyph: Glyph to describe
    """
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column(style="dim")
    table.add_column()

    points = sum(
        len(ring.coords)
        for polygon in glyph.geometry.geoms
        for ring in [polygon.exterior, *polygon.interiors]
    )
    table.add_row("Character", repr(glyph.char))
    table.add_row("Lookup", glyph.lookup.value)
    table.add_row("Advance", f"{glyph.advance:g}")
    table.add_row("Midline", f"{glyph.mid_y:g}")
    table.add_row("Polygons", str(glyph.polygon_count))
    table.add_row("Rings", str(glyph.ring_count))
    table.add_row("Points", str(points))
    if not glyph.is_empty():
        min_x, min_y, max_x, max_y = glyph.geometry.bounds
        table.add_row("Bounds", f"{min_x:g}, {min_y:g} {SYM_DOT} {max_x:g}, {max_y:g}")
    console.print(table)


def print_label_length(text: str, length: float, unit: str = "m") -> None:
    """Print a predicted label length.

    Args:
        text: Label text
        length: Predicted length
        unit: Unit of the length
    """
    line = Text("  ")
    line.append(text, style="bold")
    line.append(f" {SYM_DOT} {length:g} {unit}")
    console.print(line)


def print_success(output_path: str, stats: LabelStats) -> None:
    """Print success message with summary.

    Args:
        output_path: Path to output file
        stats: Label statistics of the run
    """
    console.print(f"\n[bold green]{SYM_OK} Complete[/bold green]")

    line = Text("  ")
    line.append(output_path, style="bold")
    console.print(line)

    warn_style = "yellow" if stats.fallback_count or stats.missing_count else "green"
    console.print(
        f"  {stats.glyphs_placed} glyphs {SYM_DOT} {stats.total_distance:g} m {SYM_DOT} "
        f"[{warn_style}]{stats.fallback_count} fallbacks, "
        f"{stats.missing_count} missing[/{warn_style}]"
    )


def print_error(message: str, details: str | None = None) -> None:
    """Print error message.

    Args:
        message: Main error message
        details: Optional detailed error information
    """
    console.print(f"\n[bold red]{SYM_ERR} Error:[/bold red] {message}")
    if details:
        console.print(f"  {details}")
