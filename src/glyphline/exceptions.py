"""Exception hierarchy for Glyphline."""


class GlyphlineError(Exception):
    """Base exception for all Glyphline errors."""

    pass


class FontError(GlyphlineError):
    """Errors related to font loading."""

    pass


class FontLoadError(FontError):
    """Error loading a font definition from an outline source.

    Covers missing resources, malformed or non-geometry content, wrong
    content types and transport failures alike.
    """

    def __init__(self, resource: str, reason: str) -> None:
        self.resource = resource
        self.reason = reason
        super().__init__(f"Failed to load font '{resource}': {reason}")


class GlyphError(GlyphlineError):
    """Errors related to glyph processing."""

    pass


class MissingGlyphError(GlyphError):
    """Character and fallback glyph are both absent from the font."""

    def __init__(self, char: str, fallback: str | None = None) -> None:
        self.char = char
        self.fallback = fallback
        detail = f" (fallback '{fallback}' also missing)" if fallback else ""
        super().__init__(f"Glyph for '{char}' not found in font{detail}")


class InvalidCommandError(GlyphError):
    """Outline command stream could not be parsed."""

    def __init__(self, token: str, position: int, reason: str) -> None:
        self.token = token
        self.position = position
        self.reason = reason
        super().__init__(f"Invalid outline token '{token}' at position {position}: {reason}")


class PlacementError(GlyphlineError):
    """Errors related to placing glyphs along a label line."""

    pass


class PlacerFinalizedError(PlacementError):
    """A glyph was offered to a placer whose label was already finalized."""

    def __init__(self, char: str) -> None:
        self.char = char
        super().__init__(f"Cannot accept glyph '{char}': label has already been finalized")


class GeometryError(GlyphlineError):
    """Errors in geometric inputs or calculations."""

    pass


class LabelLineError(GeometryError):
    """Label line is degenerate."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
