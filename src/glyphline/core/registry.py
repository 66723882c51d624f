"""Registry of font instances keyed by font name and scale.

Font definitions are loaded through an outline source at most once per name:
concurrent requests for a font that is still loading await the same pending
task. Instances are created lazily and shared, so every caller asking for the
same (name, scale) receives the identical FontInstance and its glyph cache.

The registry is bound to one asyncio event loop; check-then-create sections
contain no await and therefore run atomically on that loop.
"""

import asyncio
from functools import partial

import structlog

from glyphline.config import PREDEFINED_FONTS, OutlineConfig, SourceConfig
from glyphline.core.font import FontInstance
from glyphline.domain import FontDefinition
from glyphline.io.source import OutlineSource, create_source

logger = structlog.get_logger(__name__)


class FontInstanceRegistry:
    """Caches font definitions and font instances.

    Example:
        registry = FontInstanceRegistry(FileOutlineSource(Path("fonts")))
        font = await registry.get_instance("noto_serif________regular", 0.01)
    """

    def __init__(
        self,
        source: OutlineSource,
        fonts: dict[str, str] | None = None,
        config: OutlineConfig | None = None,
    ) -> None:
        """Initialize the registry.

        Args:
            source: Outline source definitions are loaded from
            fonts: Font name to resource mapping (defaults to PREDEFINED_FONTS)
            config: Outline configuration passed to every instance
        """
        self.source = source
        self.fonts = dict(PREDEFINED_FONTS) if fonts is None else dict(fonts)
        self.config = config or OutlineConfig()

        self._definitions: dict[str, FontDefinition] = {}
        self._pending: dict[str, asyncio.Future[FontDefinition]] = {}
        self._instances: dict[tuple[str, float], FontInstance] = {}

    def resource_for(self, name: str) -> str:
        """Map a font name to its resource identifier (the name if unmapped)."""
        return self.fonts.get(name, name)

    @property
    def loaded_fonts(self) -> list[str]:
        return list(self._definitions)

    @property
    def instance_count(self) -> int:
        return len(self._instances)

    async def get_definition(self, name: str) -> FontDefinition:
        """Get the font definition for a name, loading it on first use.

        Args:
            name: Font name

        Returns:
            Loaded FontDefinition

        Raises:
            FontLoadError: If the outline source fails; the failure is not
                cached, a later call loads again
        """
        definition = self._definitions.get(name)
        if definition is not None:
            return definition

        task = self._pending.get(name)
        if task is None:
            resource = self.resource_for(name)
            task = asyncio.ensure_future(self._load(name, resource))
            self._pending[name] = task
            task.add_done_callback(partial(self._load_done, name))
        else:
            logger.debug("Font load coalesced", font=name)

        # Shield so a cancelled waiter does not cancel the load for the others
        return await asyncio.shield(task)

    async def get_instance(self, name: str, scale: float) -> FontInstance:
        """Get the shared font instance for a name and scale.

        Args:
            name: Font name
            scale: Linear scale, must be positive

        Returns:
            FontInstance; equal (name, scale) pairs return the same object

        Raises:
            ValueError: If scale is not positive
            FontLoadError: If the font definition cannot be loaded
        """
        if scale <= 0:
            raise ValueError(f"scale must be positive, got {scale}")

        key = (name, float(scale))
        instance = self._instances.get(key)
        if instance is not None:
            return instance

        definition = await self.get_definition(name)

        # Another waiter may have created it while we were suspended
        instance = self._instances.get(key)
        if instance is None:
            instance = FontInstance(definition, key[1], config=self.config)
            self._instances[key] = instance
            logger.debug("Font instance created", font=name, scale=key[1], id=instance.id)
        return instance

    def clear(self) -> None:
        """Forget every loaded definition and instance."""
        self._definitions.clear()
        self._instances.clear()

    async def _load(self, name: str, resource: str) -> FontDefinition:
        logger.info("Loading font", font=name, resource=resource)
        try:
            definition = await self.source.load(resource)
        except Exception as e:
            logger.error("Font load failed", font=name, resource=resource, error=str(e))
            raise
        self._definitions[name] = definition
        logger.info("Font loaded", font=name, family=definition.family_name,
                    glyphs=len(definition.glyphs))
        return definition

    def _load_done(self, name: str, task: asyncio.Future[FontDefinition]) -> None:
        if self._pending.get(name) is task:
            del self._pending[name]
        # Mark the outcome retrieved even if every waiter was cancelled
        if not task.cancelled():
            task.exception()


def create_registry(
    source: OutlineSource | None = None,
    settings: SourceConfig | None = None,
    config: OutlineConfig | None = None,
) -> FontInstanceRegistry:
    """Create a fresh registry.

    Args:
        source: Outline source (built from ``settings`` when omitted)
        settings: Source configuration providing the font mapping
        config: Outline configuration for created instances

    Returns:
        New FontInstanceRegistry
    """
    settings = settings or SourceConfig()
    return FontInstanceRegistry(
        source or create_source(settings),
        fonts=settings.fonts,
        config=config,
    )
