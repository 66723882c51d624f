"""Font I/O operations for glyphline.

This module handles loading font definitions and writing placed labels:

- Outline sources for typeface.json files, TTF/OTF fonts and HTTP
- Conversion from fontTools fonts to typeface outline commands
- GeoJSON output of labels
"""

from glyphline.io.converter import (
    TypefacePen,
    font_definition_from_dict,
    label_to_geojson,
    ttfont_to_definition,
)
from glyphline.io.source import (
    FileOutlineSource,
    FontFileOutlineSource,
    HttpOutlineSource,
    OutlineSource,
    create_source,
)
from glyphline.io.writer import LabelWriter

__all__ = [
    "FileOutlineSource",
    "FontFileOutlineSource",
    "HttpOutlineSource",
    "LabelWriter",
    "OutlineSource",
    "TypefacePen",
    "create_source",
    "font_definition_from_dict",
    "label_to_geojson",
    "ttfont_to_definition",
]
