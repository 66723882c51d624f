"""GeoJSON output of placed labels."""

import json
from pathlib import Path
from typing import Any

import structlog

from glyphline.domain import LabelFeature
from glyphline.io.converter import label_to_geojson

logger = structlog.get_logger(__name__)


class LabelWriter:
    """Writes placed labels as a GeoJSON FeatureCollection.

    Example:
        writer = LabelWriter()
        writer.write(Path("labels.geojson"), [label])
    """

    def __init__(self, indent: int | None = None) -> None:
        self.indent = indent

    def to_collection(self, features: list[LabelFeature], **properties: Any) -> dict[str, Any]:
        """Build the FeatureCollection dictionary.

        Args:
            features: Finalized labels
            **properties: Extra properties added to every feature

        Returns:
            GeoJSON FeatureCollection dictionary
        """
        return {
            "type": "FeatureCollection",
            "features": [label_to_geojson(feature, **properties) for feature in features],
        }

    def write(self, path: Path, features: list[LabelFeature], **properties: Any) -> Path:
        """Write labels to a GeoJSON file.

        Args:
            path: Output file path (parent directories are created)
            features: Finalized labels
            **properties: Extra properties added to every feature

        Returns:
            The written path
        """
        path.parent.mkdir(parents=True, exist_ok=True)
        collection = self.to_collection(features, **properties)
        path.write_text(json.dumps(collection, indent=self.indent), encoding="utf-8")
        logger.info("Labels written", path=str(path), features=len(features))
        return path
