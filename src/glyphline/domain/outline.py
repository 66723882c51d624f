"""Font definitions as delivered by outline sources.

This module defines the raw, unscaled typeface data a font instance is
built from: family metrics plus one outline command string per character.
"""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class GlyphOutline:
    """Raw outline of one character.

    Attributes:
        advance: Horizontal advance in font units ("ha")
        commands: Whitespace separated outline command string ("o")
    """

    advance: float
    commands: str = ""

    def is_empty(self) -> bool:
        """Check if the outline has no drawing commands (e.g. space)."""
        return not self.commands.strip()

    def to_dict(self) -> dict[str, Any]:
        """Serialize to typeface.json glyph entry."""
        return {"ha": self.advance, "o": self.commands}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "GlyphOutline":
        """Deserialize from a typeface.json glyph entry."""
        return cls(advance=float(data["ha"]), commands=data.get("o") or "")


@dataclass
class FontDefinition:
    """Structured font definition.

    Attributes:
        family_name: Human readable family name
        ascender: Ascender in font units
        descender: Descender in font units (usually negative)
        glyphs: Mapping from character to raw outline
        resolution: Units per em, when the source reports it
    """

    family_name: str
    ascender: float
    descender: float
    glyphs: dict[str, GlyphOutline] = field(default_factory=dict)
    resolution: int | None = None

    def __contains__(self, char: object) -> bool:
        return char in self.glyphs

    def get(self, char: str) -> GlyphOutline | None:
        """Get the raw outline for a character, or None if absent."""
        return self.glyphs.get(char)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a typeface.json document."""
        data: dict[str, Any] = {
            "familyName": self.family_name,
            "ascender": self.ascender,
            "descender": self.descender,
            "glyphs": {char: outline.to_dict() for char, outline in self.glyphs.items()},
        }
        if self.resolution is not None:
            data["resolution"] = self.resolution
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "FontDefinition":
        """Deserialize from a typeface.json document.

        Raises:
            KeyError: If a required field is missing
            ValueError: If a numeric field cannot be converted
        """
        resolution = data.get("resolution")
        return cls(
            family_name=str(data["familyName"]),
            ascender=float(data["ascender"]),
            descender=float(data["descender"]),
            glyphs={
                char: GlyphOutline.from_dict(entry)
                for char, entry in data["glyphs"].items()
            },
            resolution=int(resolution) if resolution is not None else None,
        )
