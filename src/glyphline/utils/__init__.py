"""Utility functions for glyphline.

This module provides logging setup and label statistics tracking.
"""

from glyphline.utils.logging import (
    LabelLogger,
    LabelStats,
    configure_logging,
)

__all__ = [
    "LabelLogger",
    "LabelStats",
    "configure_logging",
]
