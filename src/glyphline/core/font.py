"""Font instances and their glyph geometry cache.

A FontInstance is a typeface at one fixed scale. Glyphs are vectorized on
first request (parse, classify, simplify) and cached by character for the
lifetime of the instance.
"""

import threading
import time
import uuid
from typing import TYPE_CHECKING

import structlog
from shapely.geometry import MultiPolygon

from glyphline.config import MissingGlyphPolicy, OutlineConfig
from glyphline.core.classifier import RingClassifier
from glyphline.core.parser import OutlineParser
from glyphline.core.simplifier import ShapelySimplifier, Simplifier
from glyphline.domain import FontDefinition, Glyph, GlyphLookup, LookupKind
from glyphline.exceptions import MissingGlyphError

if TYPE_CHECKING:
    from glyphline.core.placer import LabelPlacer

logger = structlog.get_logger(__name__)


class FontInstance:
    """A font definition at a fixed linear scale.

    Reading an already cached glyph needs no locking; building a new one is
    serialized per instance so a character is never vectorized twice.

    Example:
        font = FontInstance(definition, scale=0.01)
        glyph = font.get_glyph("a")
        geometry = font.get_label_geometry("abc", placer)
    """

    def __init__(
        self,
        definition: FontDefinition,
        scale: float,
        config: OutlineConfig | None = None,
        parser: OutlineParser | None = None,
        classifier: RingClassifier | None = None,
        simplifier: Simplifier | None = None,
    ) -> None:
        """Initialize the font instance.

        Args:
            definition: Raw typeface data
            scale: Linear scale from font units to output units
            config: Outline configuration
            parser: Outline parser (defaults to OutlineParser(config))
            classifier: Ring classifier
            simplifier: Polygon simplifier (defaults to ShapelySimplifier)

        Raises:
            ValueError: If scale is not positive
        """
        if scale <= 0:
            raise ValueError(f"scale must be positive, got {scale}")

        self._id = uuid.uuid4().hex
        self._definition = definition
        self._scale = float(scale)
        self.config = config or OutlineConfig()
        self.parser = parser or OutlineParser(self.config)
        self.classifier = classifier or RingClassifier()
        self.simplifier = simplifier or ShapelySimplifier()

        self._glyphs: dict[str, Glyph] = {}
        self._lock = threading.Lock()

    @property
    def id(self) -> str:
        """Opaque identifier, unique per created instance."""
        return self._id

    @property
    def definition(self) -> FontDefinition:
        return self._definition

    @property
    def name(self) -> str:
        return self._definition.family_name

    @property
    def scale(self) -> float:
        return self._scale

    @property
    def ascender(self) -> float:
        return self._definition.ascender

    @property
    def descender(self) -> float:
        return self._definition.descender

    @property
    def mid_y(self) -> float:
        """Vertical midline offset: half the ascender plus the descender, scaled."""
        return self.ascender * self._scale * 0.5 + self.descender * self._scale

    @property
    def glyph_count(self) -> int:
        """Number of glyphs vectorized so far."""
        return len(self._glyphs)

    @property
    def cached_characters(self) -> list[str]:
        return list(self._glyphs)

    def resolve(self, char: str) -> GlyphLookup:
        """Resolve a character against the glyph table.

        Args:
            char: Character to look up

        Returns:
            GlyphLookup that is FOUND, FALLBACK (the fallback glyph's outline)
            or MISSING
        """
        outline = self._definition.get(char)
        if outline is not None:
            return GlyphLookup.found(char, outline)

        fallback = self._definition.get(self.config.fallback_character)
        if fallback is not None:
            return GlyphLookup.fallback(char, fallback)

        return GlyphLookup.missing(char)

    def get_glyph(self, char: str) -> Glyph:
        """Get the vectorized glyph for a character, building it on first use.

        Args:
            char: Character to vectorize

        Returns:
            Cached or newly built Glyph

        Raises:
            MissingGlyphError: If the character and the fallback are absent
                and the missing glyph policy is ``error``
            InvalidCommandError: If the outline command stream is malformed
        """
        glyph = self._glyphs.get(char)
        if glyph is not None:
            return glyph

        with self._lock:
            glyph = self._glyphs.get(char)
            if glyph is None:
                glyph = self._build_glyph(char)
                self._glyphs[char] = glyph
        return glyph

    def get_label_geometry(self, text: str, placer: "LabelPlacer") -> MultiPolygon:
        """Place every character of ``text`` and return the label geometry.

        Args:
            text: Label text; each code point is one glyph
            placer: A fresh placer; it is finalized by this call

        Returns:
            Combined multi-polygon in the placer's line coordinate system
        """
        for char in text:
            placer.accept_glyph(self.get_glyph(char))
        return placer.get_label().geometry

    def get_label_length(self, text: str, placer: "LabelPlacer") -> float:
        """Predict the length of a label without placing it.

        Args:
            text: Label text
            placer: Placer providing the advance multiplier; not mutated

        Returns:
            Sum of the placer's advances for every character
        """
        return sum(placer.calculate_advance(self.get_glyph(char)) for char in text)

    def clear_cache(self) -> None:
        """Drop every cached glyph."""
        with self._lock:
            self._glyphs.clear()

    def _build_glyph(self, char: str) -> Glyph:
        start_time = time.time()
        lookup = self.resolve(char)

        if lookup.outline is None:
            fallback = self.config.fallback_character
            if self.config.missing_glyph == MissingGlyphPolicy.ERROR:
                logger.error("Glyph missing", font=self.name, char=char, fallback=fallback)
                raise MissingGlyphError(char, fallback)
            logger.warning("Glyph missing, using empty glyph", font=self.name, char=char)
            return Glyph(
                char=char,
                geometry=MultiPolygon(),
                advance=0.0,
                mid_y=self.mid_y,
                scale=self._scale,
                lookup=LookupKind.MISSING,
            )

        if lookup.kind == LookupKind.FALLBACK:
            logger.info(
                "Glyph not in font, using fallback",
                font=self.name,
                char=char,
                fallback=self.config.fallback_character,
            )

        rings = self.parser.parse(lookup.outline.commands, self._scale)
        geometry = self.classifier.build(rings, char=char)
        geometry = self.simplifier.simplify(
            geometry,
            self.config.get_simplify_tolerance(self._scale),
            preserve_topology=self.config.preserve_topology,
        )

        glyph = Glyph(
            char=char,
            geometry=geometry,
            advance=lookup.outline.advance * self._scale,
            mid_y=self.mid_y,
            scale=self._scale,
            lookup=lookup.kind,
        )
        logger.debug(
            "Glyph built",
            font=self.name,
            char=char,
            rings=len(rings),
            polygons=glyph.polygon_count,
            duration_ms=round((time.time() - start_time) * 1000, 2),
        )
        return glyph
