"""Merge standalone SVG icons into a single <symbol> sprite sheet."""

__version__ = "1.0.0"
