"""Takopi: núcleo social (follows, likes, pins) y colecciones."""

__version__ = "0.1.0"
