"""Label orchestration.

This module ties the registry, font instances and placers together:
1. Resolve the font (a configured name or a font file path)
2. Get the shared font instance for the requested scale
3. Build a placer along a line or from an anchor position
4. Place every character and finalize the label
5. Track statistics for the run
"""

import time
import traceback
from collections.abc import Sequence
from pathlib import Path

import structlog

from glyphline.config import GlyphlineSettings
from glyphline.core.font import FontInstance
from glyphline.core.placer import LabelPlacer
from glyphline.core.registry import FontInstanceRegistry, create_registry
from glyphline.domain import PLANAR, WGS84, Coordinate, LabelFeature, LabelLine
from glyphline.geo import LocalProjection
from glyphline.utils import LabelLogger, LabelStats, configure_logging


class Labeler:
    """Places text labels with shared font instances.

    Example:
        settings = GlyphlineSettings()
        labeler = Labeler(settings)
        label = asyncio.run(
            labeler.place_label("fonts/serif.json", "Main St", scale=0.01,
                                coordinates=[(0, 0), (10, 2), (20, 0)])
        )
    """

    def __init__(
        self,
        config: GlyphlineSettings,
        registry: FontInstanceRegistry | None = None,
        logger: structlog.stdlib.BoundLogger | None = None,
    ) -> None:
        """Initialize the labeler.

        Args:
            config: Application settings
            registry: Font registry (built from the source settings when omitted)
            logger: Logger to use (logging is configured from settings when omitted)
        """
        self.config = config
        self.logger = logger or configure_logging(
            log_file=config.logging.log_file,
            console_level=config.logging.log_level,
            file_level=config.logging.file_log_level,
            quiet=False,
        )
        self.label_logger = LabelLogger(self.logger)
        self.registry = registry or create_registry(
            settings=config.source,
            config=config.outline,
        )

    @property
    def stats(self) -> LabelStats:
        return self.label_logger.stats

    async def get_font(self, font: str, scale: float) -> FontInstance:
        """Get the font instance for a font name or font file path.

        Existing files are registered under the given string so repeated
        requests share one instance.

        Args:
            font: Configured font name, or path to a typeface.json/TTF/OTF file
            scale: Font instance scale

        Returns:
            Shared FontInstance
        """
        path = Path(font)
        if font not in self.registry.fonts and path.is_file():
            self.registry.fonts[font] = str(path.resolve())
        return await self.registry.get_instance(font, scale)

    def create_placer(
        self,
        coordinates: Sequence[Coordinate] | None = None,
        anchor: Coordinate | None = None,
        geographic: bool = False,
    ) -> LabelPlacer:
        """Create a placer along a line, or from an anchor position.

        Geographic positions are projected about the first position of the
        line (or the anchor) and composed in local metres.

        Args:
            coordinates: Line positions; takes precedence over ``anchor``
            anchor: Anchor position, (0, 0) when neither is given
            geographic: Positions are longitude/latitude

        Returns:
            A fresh LabelPlacer
        """
        system = WGS84 if geographic else PLANAR
        placement = self.config.placement

        if coordinates:
            line = LabelLine(tuple(coordinates), system)
            projection = LocalProjection(origin=line.start if geographic else (0.0, 0.0))
            return LabelPlacer.along_line(
                line,
                projection,
                render_system=PLANAR,
                advance_multiplier=placement.advance_multiplier,
            )

        position = anchor if anchor is not None else (0.0, 0.0)
        projection = LocalProjection(origin=position if geographic else (0.0, 0.0))
        return LabelPlacer.from_position(
            position,
            projection,
            system=system,
            render_system=PLANAR,
            advance_multiplier=placement.advance_multiplier,
            config=placement,
        )

    async def place_label(
        self,
        font: str,
        text: str,
        scale: float,
        coordinates: Sequence[Coordinate] | None = None,
        anchor: Coordinate | None = None,
        geographic: bool = False,
    ) -> LabelFeature:
        """Place a text label and return it in the line's coordinate system.

        Args:
            font: Font name or font file path
            text: Label text
            scale: Font instance scale
            coordinates: Line positions
            anchor: Anchor position used when no line is given
            geographic: Positions are longitude/latitude

        Returns:
            Finalized LabelFeature, with ``text`` and ``font`` properties added

        Raises:
            GlyphlineError: Any loading, glyph or placement failure, after it
                has been logged
        """
        start_time = time.time()
        if self.stats.start_time is None:
            self.stats.start_time = start_time

        try:
            instance = await self.get_font(font, scale)
            placer = self.create_placer(coordinates, anchor, geographic)
            self.label_logger.log_label_start(instance.name, text)

            for char in text:
                glyph = instance.get_glyph(char)
                placer.accept_glyph(glyph)
                self.label_logger.log_glyph_placed(glyph, placer.distance)

            label = placer.get_label()
        except Exception as e:
            self.label_logger.log_label_error(text, e, traceback.format_exc())
            raise

        label.properties.update({"text": text, "font": instance.name, "scale": instance.scale})
        self.stats.end_time = time.time()
        self.label_logger.log_label_complete(
            text,
            placer.distance,
            (self.stats.end_time - start_time) * 1000,
        )
        return label

    async def measure(self, font: str, text: str, scale: float) -> float:
        """Predict the length of a label with the configured advance multiplier."""
        instance = await self.get_font(font, scale)
        return instance.get_label_length(text, self.create_placer())

