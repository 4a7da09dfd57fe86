"""Raycasting renderer for .cub scene files: scene parsing, ray casting, drawing and a pygame window."""

__version__ = "0.1.0"