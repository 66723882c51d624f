"""Converters between external font representations and domain models.

This module handles the conversion of:
- typeface.json documents into FontDefinition models
- fontTools fonts (TTF/OTF) into typeface.json style outlines
- Placed labels into GeoJSON
"""

from typing import Any

from fontTools.pens.basePen import BasePen
from fontTools.pens.reverseContourPen import ReverseContourPen
from fontTools.ttLib import TTFont

from glyphline.domain import FontDefinition, GlyphOutline, LabelFeature
from glyphline.exceptions import FontLoadError


def font_definition_from_dict(data: Any, resource: str) -> FontDefinition:
    """Validate a typeface.json document and convert it to a FontDefinition.

    Args:
        data: Decoded JSON document
        resource: Resource identifier, for error messages

    Returns:
        FontDefinition instance

    Raises:
        FontLoadError: If the document is not a typeface font definition
    """
    if not isinstance(data, dict):
        raise FontLoadError(resource, f"expected a JSON object, got {type(data).__name__}")

    missing = [key for key in ("familyName", "ascender", "descender", "glyphs") if key not in data]
    if missing:
        raise FontLoadError(resource, f"missing field(s): {', '.join(missing)}")

    if not isinstance(data["glyphs"], dict):
        raise FontLoadError(resource, "'glyphs' must be an object")

    for char, entry in data["glyphs"].items():
        if not isinstance(entry, dict) or "ha" not in entry:
            raise FontLoadError(resource, f"glyph '{char}' has no horizontal advance")
        if not isinstance(entry.get("o", ""), str):
            raise FontLoadError(resource, f"glyph '{char}' outline is not a string")

    try:
        return FontDefinition.from_dict(data)
    except (KeyError, TypeError, ValueError) as e:
        raise FontLoadError(resource, f"malformed font definition: {e}") from e


def _format_number(value: float) -> str:
    text = f"{value:.2f}".rstrip("0").rstrip(".")
    return "0" if text == "-0" else text


class TypefacePen(BasePen):
    """Pen that records a glyph outline as a typeface.json command string.

    Quadratic and cubic segments with several off-curve points are split
    into single segments by BasePen; curve operands are written end point
    first, then control point(s).
    """

    def __init__(self, glyph_set: Any = None) -> None:
        super().__init__(glyph_set)
        self.tokens: list[str] = []

    def _emit(self, command: str, *points: tuple[float, float]) -> None:
        self.tokens.append(command)
        for x, y in points:
            self.tokens.append(_format_number(x))
            self.tokens.append(_format_number(y))

    def _moveTo(self, pt: tuple[float, float]) -> None:
        self._emit("m", pt)

    def _lineTo(self, pt: tuple[float, float]) -> None:
        self._emit("l", pt)

    def _qCurveToOne(self, pt1: tuple[float, float], pt2: tuple[float, float]) -> None:
        self._emit("q", pt2, pt1)

    def _curveToOne(
        self,
        pt1: tuple[float, float],
        pt2: tuple[float, float],
        pt3: tuple[float, float],
    ) -> None:
        self._emit("b", pt3, pt1, pt2)

    def _closePath(self) -> None:
        self.tokens.append("z")

    def _endPath(self) -> None:
        self.tokens.append("z")

    @property
    def commands(self) -> str:
        return " ".join(self.tokens)


def ttfont_to_definition(font: TTFont, family_name: str | None = None) -> FontDefinition:
    """Export every mapped character of a TTF/OTF font as typeface outlines.

    Note: CFF fonts wind outer contours counter-clockwise, opposite to
    TrueType. CFF contours are reversed while drawing so every definition
    uses the TrueType convention (clockwise outer boundaries).

    Args:
        font: Loaded fontTools font
        family_name: Override for the family name from the name table

    Returns:
        FontDefinition with one outline per cmap character
    """
    glyph_set = font.getGlyphSet()
    cmap = font.getBestCmap() or {}
    hmtx = font["hmtx"]
    is_cff = "CFF " in font or "CFF2" in font

    glyphs: dict[str, GlyphOutline] = {}
    for code_point, glyph_name in sorted(cmap.items()):
        if glyph_name not in glyph_set:
            continue
        pen = TypefacePen(glyph_set)
        glyph_set[glyph_name].draw(ReverseContourPen(pen) if is_cff else pen)
        advance, _ = hmtx.metrics.get(glyph_name, (0, 0))
        glyphs[chr(code_point)] = GlyphOutline(advance=float(advance), commands=pen.commands)

    hhea = font["hhea"]
    if family_name is None:
        family_name = font["name"].getBestFamilyName() or "Unknown"

    return FontDefinition(
        family_name=family_name,
        ascender=float(hhea.ascent),
        descender=float(hhea.descent),
        glyphs=glyphs,
        resolution=int(font["head"].unitsPerEm),
    )


def label_to_geojson(feature: LabelFeature, **properties: Any) -> dict[str, Any]:
    """Convert a placed label to a GeoJSON feature dictionary.

    Args:
        feature: Finalized label
        **properties: Extra properties merged over the label's own

    Returns:
        GeoJSON Feature dictionary
    """
    data = feature.to_dict()
    data["properties"].update(properties)
    return data
