"""Glyphline - Vector glyph labels along curved lines.

Glyphline converts typeface.json glyph outlines into polygon geometry and
places sequences of glyphs along an arbitrary reference line, producing
map-ready multi-polygons with per-glyph rotation and spacing corrected for
curvature and projection distortion.

Example:
    $ glyphline label NotoSerif-Regular.json "Main Street" --line "0,0 500,40"

This will write label.geojson with one polygon group per character, rotated
to follow the line.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
