"""Wireframe viewer for .fdf height maps, with an in-memory window layer and an XPM loader."""

__version__ = "0.1.0"
__all__ = ["__version__"]