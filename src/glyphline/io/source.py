"""Outline sources loading font definitions.

An outline source turns a resource identifier into a FontDefinition. Loading
may suspend (disk or network I/O); every failure is reported as a single
FontLoadError regardless of its cause.

Key classes:
- OutlineSource: Protocol for asynchronous loaders
- FileOutlineSource: typeface.json (or TTF/OTF) files in a directory
- FontFileOutlineSource: TTF/OTF files exported through fontTools
- HttpOutlineSource: typeface.json documents over HTTP
"""

import asyncio
import json
from pathlib import Path
from typing import Protocol

import httpx
import structlog
from fontTools.ttLib import TTFont

from glyphline.config import SourceConfig
from glyphline.domain import FontDefinition
from glyphline.exceptions import FontLoadError
from glyphline.io.converter import font_definition_from_dict, ttfont_to_definition

logger = structlog.get_logger(__name__)

# Suffixes handled by fontTools rather than the JSON reader
FONT_FILE_SUFFIXES = {".ttf", ".otf"}


class OutlineSource(Protocol):
    """Loads the font definition behind a resource identifier."""

    async def load(self, resource: str) -> FontDefinition: ...


class FontFileOutlineSource:
    """Loads TTF/OTF fonts and exports them as typeface definitions.

    Example:
        source = FontFileOutlineSource(Path("fonts"))
        definition = await source.load("NotoSerif-Regular.ttf")
    """

    def __init__(self, directory: Path | None = None) -> None:
        """Initialize the source.

        Args:
            directory: Base directory for relative resources
        """
        self._directory = directory

    async def load(self, resource: str) -> FontDefinition:
        """Load and convert a font file off the event loop.

        Raises:
            FontLoadError: If the file does not exist or cannot be parsed
        """
        path = _resolve_path(self._directory, resource)
        if not path.exists():
            raise FontLoadError(resource, f"font file not found: {path}")
        return await asyncio.to_thread(self._read, path, resource)

    def _read(self, path: Path, resource: str) -> FontDefinition:
        try:
            with TTFont(str(path)) as font:
                return ttfont_to_definition(font)
        except FontLoadError:
            raise
        except Exception as e:
            raise FontLoadError(resource, str(e)) from e


class FileOutlineSource:
    """Loads typeface.json documents from a directory.

    Resources without a suffix get ``.json`` appended; ``.ttf``/``.otf``
    resources are delegated to FontFileOutlineSource.

    Example:
        source = FileOutlineSource(Path("fonts"))
        definition = await source.load("noto_serif________regular")
    """

    def __init__(self, directory: Path | None = None) -> None:
        """Initialize the source.

        Args:
            directory: Base directory for relative resources
        """
        self._directory = directory
        self._font_files = FontFileOutlineSource(directory)

    async def load(self, resource: str) -> FontDefinition:
        """Read and validate a typeface.json document.

        Raises:
            FontLoadError: If the file is missing, not JSON, or not a font
        """
        path = _resolve_path(self._directory, resource)
        if path.suffix.lower() in FONT_FILE_SUFFIXES:
            return await self._font_files.load(resource)
        if not path.suffix:
            path = path.with_suffix(".json")

        if not path.exists():
            raise FontLoadError(resource, f"file not found: {path}")

        try:
            text = await asyncio.to_thread(path.read_text, encoding="utf-8")
            data = json.loads(text)
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            raise FontLoadError(resource, str(e)) from e

        definition = font_definition_from_dict(data, resource)
        logger.debug("Font file read", resource=resource, glyphs=len(definition.glyphs))
        return definition


class HttpOutlineSource:
    """Fetches typeface.json documents over HTTP.

    Responses must have a 2xx status and an ``application/json`` content type.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the source.

        Args:
            base_url: URL resources are resolved against
            timeout: Request timeout in seconds
            client: Shared client (one is created per request otherwise)
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._client = client

    def url_for(self, resource: str) -> str:
        if resource.startswith(("http://", "https://")):
            return resource
        return f"{self.base_url}/{resource.lstrip('/')}"

    async def load(self, resource: str) -> FontDefinition:
        """Fetch and validate a typeface.json document.

        Raises:
            FontLoadError: On transport errors, bad status, wrong content
                type or malformed content
        """
        url = self.url_for(resource)
        try:
            if self._client is not None:
                response = await self._client.get(url, timeout=self.timeout)
            else:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    response = await client.get(url)
        except httpx.HTTPError as e:
            raise FontLoadError(resource, f"request failed: {e}") from e

        content_type = response.headers.get("content-type", "")
        if not content_type.startswith("application/json"):
            raise FontLoadError(resource, f"invalid response type {content_type or 'none'}")
        if not 200 <= response.status_code < 300:
            raise FontLoadError(resource, f"invalid status code {response.status_code}")

        try:
            data = response.json()
        except ValueError as e:
            raise FontLoadError(resource, f"invalid JSON: {e}") from e

        definition = font_definition_from_dict(data, resource)
        logger.debug("Font fetched", url=url, glyphs=len(definition.glyphs))
        return definition


def create_source(config: SourceConfig) -> OutlineSource:
    """Create the outline source described by a source configuration.

    Args:
        config: Source settings; a base URL selects HTTP, otherwise files

    Returns:
        An outline source
    """
    if config.base_url:
        return HttpOutlineSource(config.base_url, timeout=config.timeout)
    return FileOutlineSource(config.font_dir)


def _resolve_path(directory: Path | None, resource: str) -> Path:
    path = Path(resource)
    if directory is None or path.is_absolute():
        return path
    return directory / path
