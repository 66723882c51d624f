"""Core vectorization and placement logic for glyphline.

This module contains the main processing components:

- OutlineParser: Turns outline command strings into flattened rings
- RingClassifier: Groups rings into outer boundaries and holes
- ShapelySimplifier: Scale-relative polygon simplification
- FontInstance: A font at one scale with its glyph cache
- FontInstanceRegistry: Shared instances with coalesced font loading
- LabelPlacer: Places glyphs along a label line
- Labeler: Orchestrates font lookup, placement and statistics
"""

from glyphline.core.classifier import RingClassifier, RingHierarchy
from glyphline.core.font import FontInstance
from glyphline.core.labeler import Labeler
from glyphline.core.parser import COMMAND_ARITY, OutlineParser
from glyphline.core.placer import LabelPlacer, PlacerState
from glyphline.core.registry import FontInstanceRegistry, create_registry
from glyphline.core.simplifier import ShapelySimplifier, Simplifier

__all__ = [
    "COMMAND_ARITY",
    "FontInstance",
    "FontInstanceRegistry",
    "Labeler",
    "LabelPlacer",
    "OutlineParser",
    "PlacerState",
    "RingClassifier",
    "RingHierarchy",
    "ShapelySimplifier",
    "Simplifier",
    "create_registry",
]
