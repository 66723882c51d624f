"""Configuration management for glyphline.

This module provides configuration management using Pydantic models.
Configuration can be provided via CLI arguments or defaults.

Key classes:
- OutlineConfig: Glyph flattening, simplification and fallback settings
- PlacementConfig: Label placement settings
- SourceConfig: Outline source locations and font name mapping
- LoggingConfig: Logging settings
- GlyphlineSettings: Main application settings
"""

from glyphline.config.settings import (
    PREDEFINED_FONTS,
    GlyphlineSettings,
    LoggingConfig,
    MissingGlyphPolicy,
    OutlineConfig,
    PlacementConfig,
    SourceConfig,
    get_default_settings,
)

__all__ = [
    "PREDEFINED_FONTS",
    "GlyphlineSettings",
    "LoggingConfig",
    "MissingGlyphPolicy",
    "OutlineConfig",
    "PlacementConfig",
    "SourceConfig",
    "get_default_settings",
]
