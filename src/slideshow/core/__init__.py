"""Core functionality for the slideshow server.

- **SlideshowConfig**: Configuration management using Pydantic Settings
- **ImageLibrary**: Filesystem access for the image directory
- **discover_title**: Page title lookup from ``.txt`` files
"""

from slideshow.core.config import SlideshowConfig
from slideshow.core.library import ImageLibrary, content_type_for, discover_title

__all__ = [
    "ImageLibrary",
    "SlideshowConfig",
    "content_type_for",
    "discover_title",
]
