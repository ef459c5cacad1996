"""Kollektif Slideshow - serve a directory of images as a browser slideshow."""

__version__ = "0.1.0"

from slideshow.core.config import SlideshowConfig

__all__ = [
    "SlideshowConfig",
]
