"""Command-line interface for glyphline.

This module provides the CLI using Typer with rich output for
user-friendly feedback.

Key features:
- Place a label along a line or at an anchor and write GeoJSON
- Predict label lengths
- Inspect vectorized glyphs
"""

from glyphline.cli.app import cli, main

__all__ = ["cli", "main"]
