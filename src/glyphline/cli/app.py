"""CLI application entry point for glyphline.

This module provides the main CLI interface using Typer.
"""

import asyncio
from pathlib import Path
from typing import Annotated

import typer

from glyphline import __version__
from glyphline.cli.output import (
    console,
    print_error,
    print_font_info,
    print_glyph_details,
    print_header,
    print_label_length,
    print_step,
    print_success,
)
from glyphline.config import (
    GlyphlineSettings,
    LoggingConfig,
    MissingGlyphPolicy,
    OutlineConfig,
    PlacementConfig,
    SourceConfig,
)
from glyphline.core import Labeler
from glyphline.domain import Coordinate
from glyphline.exceptions import FontLoadError, GlyphlineError
from glyphline.io import LabelWriter

# Create the Typer app
app = typer.Typer(
    name="glyphline",
    help="Vectorize font glyphs and place text labels along lines.",
    add_completion=False,
    no_args_is_help=True,
)


def positive_number(value: float) -> float:
    """Reject zero and negative numbers."""
    if value <= 0:
        raise typer.BadParameter(f"must be positive, got {value}")
    return value


FontArgument = Annotated[
    str,
    typer.Argument(
        help="Font name, or path to a typeface.json/TTF/OTF file",
        show_default=False,
    ),
]
ScaleOption = Annotated[
    float,
    typer.Option(
        "--scale",
        "-s",
        help="Linear scale from font units to output units",
        callback=positive_number,
    ),
]
FontDirOption = Annotated[
    Path | None,
    typer.Option(
        "--font-dir",
        help="Directory holding named fonts",
    ),
]
LogFileOption = Annotated[
    Path | None,
    typer.Option(
        "--log-file",
        help="Write detailed logs to file",
    ),
]
LogLevelOption = Annotated[
    str,
    typer.Option(
        "--log-level",
        help="Logging level (DEBUG|INFO|WARNING|ERROR)",
    ),
]


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]Glyphline[/bold blue] v{__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
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
    """Vectorize font glyphs and place text labels along lines."""


def parse_position(value: str) -> Coordinate:
    """Parse an ``x,y`` pair.

    Raises:
        typer.BadParameter: If the value is not two comma separated numbers
    """
    parts = value.split(",")
    if len(parts) != 2:
        raise typer.BadParameter(f"expected 'x,y', got '{value}'")
    try:
        return (float(parts[0]), float(parts[1]))
    except ValueError:
        raise typer.BadParameter(f"expected numeric 'x,y', got '{value}'") from None


def parse_line(value: str) -> list[Coordinate]:
    """Parse whitespace or semicolon separated ``x,y`` pairs."""
    return [parse_position(pair) for pair in value.replace(";", " ").split()]


def build_settings(
    font_dir: Path | None = None,
    advance: float = 1.0,
    missing: str = "error",
    log_file: Path | None = None,
    log_level: str = "WARNING",
) -> GlyphlineSettings:
    """Create settings from CLI arguments.

    Raises:
        typer.BadParameter: If the missing glyph policy is unknown
    """
    try:
        policy = MissingGlyphPolicy(missing.lower())
    except ValueError:
        raise typer.BadParameter(f"invalid missing glyph policy '{missing}' (error|empty)") from None

    source = SourceConfig(font_dir=font_dir) if font_dir is not None else SourceConfig()
    return GlyphlineSettings(
        outline=OutlineConfig(missing_glyph=policy),
        placement=PlacementConfig(advance_multiplier=advance),
        source=source,
        logging=LoggingConfig(log_file=log_file, log_level=log_level),
    )


@app.command()
def label(
    font: FontArgument,
    text: Annotated[str, typer.Argument(help="Label text", show_default=False)],
    scale: ScaleOption = 1.0,
    line: Annotated[
        str | None,
        typer.Option(
            "--line",
            "-l",
            help="Label line as 'x,y x,y ...'",
        ),
    ] = None,
    at: Annotated[
        str | None,
        typer.Option(
            "--at",
            help="Anchor position 'x,y' (used when no line is given)",
        ),
    ] = None,
    geographic: Annotated[
        bool,
        typer.Option(
            "--geographic",
            "-g",
            help="Positions are longitude,latitude (WGS84)",
        ),
    ] = False,
    advance: Annotated[
        float,
        typer.Option(
            "--advance",
            "-a",
            help="Advance multiplier applied to every glyph",
            callback=positive_number,
        ),
    ] = 1.0,
    missing: Annotated[
        str,
        typer.Option(
            "--missing",
            help="Missing glyph policy (error|empty)",
        ),
    ] = "error",
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="GeoJSON output path (default: print to console)",
        ),
    ] = None,
    font_dir: FontDirOption = None,
    log_file: LogFileOption = None,
    log_level: LogLevelOption = "WARNING",
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Minimal console output",
        ),
    ] = False,
) -> None:
    """Place TEXT along a line and write the label as GeoJSON.

    Example:
        glyphline label fonts/serif.json "Main St" --scale 0.01 --line "0,0 10,2 20,0"
    """
    coordinates = parse_line(line) if line else None
    anchor = parse_position(at) if at else None
    settings = build_settings(font_dir, advance, missing, log_file, log_level)

    if not quiet and output is not None:
        print_header(__version__)
        print_step("Placing label")

    try:
        labeler = Labeler(settings)
        feature = asyncio.run(
            labeler.place_label(font, text, scale, coordinates, anchor, geographic)
        )
    except FontLoadError as e:
        print_error(f"Could not load font: {e.reason}")
        raise typer.Exit(code=1)
    except GlyphlineError as e:
        print_error(str(e))
        raise typer.Exit(code=1)

    writer = LabelWriter(indent=2)
    if output is None:
        console.print_json(data=writer.to_collection([feature]))
        return

    writer.write(output, [feature])
    if not quiet:
        print_success(str(output), labeler.stats)


@app.command()
def measure(
    font: FontArgument,
    text: Annotated[str, typer.Argument(help="Label text", show_default=False)],
    scale: ScaleOption = 1.0,
    advance: Annotated[
        float,
        typer.Option(
            "--advance",
            "-a",
            help="Advance multiplier applied to every glyph",
            callback=positive_number,
        ),
    ] = 1.0,
    missing: Annotated[
        str,
        typer.Option(
            "--missing",
            help="Missing glyph policy (error|empty)",
        ),
    ] = "error",
    font_dir: FontDirOption = None,
    log_file: LogFileOption = None,
    log_level: LogLevelOption = "WARNING",
) -> None:
    """Print the predicted length of a label without placing it."""
    settings = build_settings(font_dir, advance, missing, log_file, log_level)
    try:
        labeler = Labeler(settings)
        length = asyncio.run(labeler.measure(font, text, scale))
    except GlyphlineError as e:
        print_error(str(e))
        raise typer.Exit(code=1)

    print_label_length(text, length)


@app.command()
def glyph(
    font: FontArgument,
    char: Annotated[str, typer.Argument(help="Single character", show_default=False)],
    scale: ScaleOption = 1.0,
    font_dir: FontDirOption = None,
    log_file: LogFileOption = None,
    log_level: LogLevelOption = "WARNING",
) -> None:
    """Print details of one vectorized glyph."""
    if len(char) != 1:
        print_error(f"Expected a single character, got '{char}'")
        raise typer.Exit(code=1)

    settings = build_settings(font_dir, log_file=log_file, log_level=log_level)
    try:
        labeler = Labeler(settings)
        instance = asyncio.run(labeler.get_font(font, scale))
        result = instance.get_glyph(char)
    except GlyphlineError as e:
        print_error(str(e))
        raise typer.Exit(code=1)

    print_font_info(font, instance.name, len(instance.definition.glyphs), instance.scale)
    print_glyph_details(result)


def cli() -> None:
    """Entry point for the CLI application."""
    app()


def main() -> None:
    """Entry point for the CLI application (alias for cli)."""
    cli()


if __name__ == "__main__":
    cli()
