"""Configuration settings for Glyphline."""

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field

# Font names resolvable without an explicit resource, mapped to typeface.json resources
PREDEFINED_FONTS: dict[str, str] = {
    "noto_serif________regular": "noto_serif________regular.json",
    "noto_serif_________italic": "noto_serif_________italic.json",
    "noto_serif___thin_regular": "noto_serif___thin_regular.json",
    "noto_serif___thin__italic": "noto_serif___thin__italic.json",
    "noto_serif_medium_regular": "noto_serif_medium_regular.json",
    "noto_serif_medium__italic": "noto_serif_medium__italic.json",
    "noto_serif___bold_regular": "noto_serif___bold_regular.json",
    "noto_serif___bold__italic": "noto_serif___bold__italic.json",
}


class MissingGlyphPolicy(str, Enum):
    """What to do when neither a character nor the fallback glyph exist."""

    ERROR = "error"
    EMPTY = "empty"


class OutlineConfig(BaseModel):
    """Configuration for glyph vectorization with scale-relative tolerances.

    Lengths are given in font units and multiplied by the font instance
    scale, so visual fidelity stays constant across scales.
    """

    flatten_segment_factor: float = Field(
        default=25.0,
        gt=0.0,
        description="Maximum flattened segment length in font units (times scale)",
    )
    simplify_tolerance_factor: float = Field(
        default=2.0,
        ge=0.0,
        description="Simplification tolerance in font units (times scale), 0 disables",
    )
    preserve_topology: bool = Field(
        default=True,
        description="Use topology preserving simplification",
    )
    fallback_character: str = Field(
        default="?",
        min_length=1,
        description="Glyph substituted for characters absent from the font",
    )
    missing_glyph: MissingGlyphPolicy = Field(
        default=MissingGlyphPolicy.ERROR,
        description="Policy when both the character and the fallback are absent",
    )

    def get_segment_length(self, scale: float) -> float:
        """Get maximum flattened segment length for the given scale."""
        return self.flatten_segment_factor * scale

    def get_simplify_tolerance(self, scale: float) -> float:
        """Get simplification tolerance for the given scale."""
        return self.simplify_tolerance_factor * scale


class PlacementConfig(BaseModel):
    """Configuration for label placement."""

    advance_multiplier: float = Field(
        default=1.0,
        gt=0.0,
        description="Multiplier applied to every glyph advance",
    )
    anchor_line_length: float = Field(
        default=111_320.0,
        gt=0.0,
        description="Ground length in metres of the line built from an anchor point"
        " (default: one degree of latitude)",
    )
    anchor_line_points: int = Field(
        default=100,
        ge=2,
        description="Number of positions in the synthetic anchor line",
    )


class SourceConfig(BaseModel):
    """Configuration for outline sources."""

    font_dir: Path = Field(
        default=Path.cwd() / "fonts",
        description="Directory holding typeface.json or TTF/OTF files",
    )
    base_url: str | None = Field(
        default=None,
        description="Base URL for fetching typeface.json resources over HTTP",
    )
    timeout: float = Field(
        default=30.0,
        gt=0.0,
        description="HTTP timeout in seconds",
    )
    fonts: dict[str, str] = Field(
        default_factory=lambda: dict(PREDEFINED_FONTS),
        description="Font name to resource identifier mapping",
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    log_file: Path | None = Field(
        default=None,
        description="Path to log file",
    )
    log_level: str = Field(
        default="WARNING",
        description="Console log level",
    )
    file_log_level: str = Field(
        default="DEBUG",
        description="File log level (more verbose)",
    )


class GlyphlineSettings(BaseModel):
    """Main application settings."""

    outline: OutlineConfig = Field(default_factory=OutlineConfig)
    placement: PlacementConfig = Field(default_factory=PlacementConfig)
    source: SourceConfig = Field(default_factory=SourceConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_settings() -> GlyphlineSettings:
    """Get default application settings."""
    return GlyphlineSettings()
