"""Filesystem helpers for the slideshow image directory.

This module isolates every filesystem touch from :mod:`slideshow.api.main`
so route handlers can focus on HTTP concerns while directory listing, name
encoding, path resolution and title discovery stay testable as small units.

The image directory is never written to:

- the directory listing is recomputed on every ``GET /images`` request
- only names ending in ``.jpg``, ``.jpeg`` or ``.png`` are slideshow images
- list order is ascending by filename so the slideshow order is stable

Errors are not swallowed here.  :meth:`ImageLibrary.list_images` and file
reads raise :class:`OSError`, and the route handlers convert those into HTTP
responses.  The only exception is :func:`discover_title`, where a missing or
unreadable title source simply means "use the default title".
"""

from __future__ import annotations

import logging
import os
import unicodedata
from pathlib import Path
from urllib.parse import quote

logger = logging.getLogger(__name__)

IMAGE_EXTENSIONS: tuple[str, ...] = (".jpg", ".jpeg", ".png")
TITLE_EXTENSION = ".txt"

# Characters encodeURIComponent leaves untouched on top of quote()'s
# always-safe set (letters, digits and "_.-~").
_URI_COMPONENT_SAFE = "!*'()"

_CONTENT_TYPES: dict[str, str] = {
    ".png": "image/png",
    ".jpeg": "image/jpeg",
    ".jpg": "image/jpg",
}
DEFAULT_CONTENT_TYPE = "image/jpeg"


def is_image_name(name: str, *, case_insensitive: bool = False) -> bool:
    """Return ``True`` when *name* carries one of the slideshow image extensions.

    Args:
        name: Bare filename (no directory part).
        case_insensitive: Accept ``.JPG``, ``.Png`` and friends as well.

    Returns:
        Whether the name should appear in the slideshow.
    """
    if case_insensitive:
        name = name.lower()
    return name.endswith(IMAGE_EXTENSIONS)


def _strip_accents(name: str) -> str:
    decomposed = unicodedata.normalize("NFKD", name)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def sort_key(name: str) -> tuple[str, str, str]:
    """Collation-style ordering key for filenames.

    Compares base letters first (accents stripped, case folded), so
    ``éclair.png`` sorts before ``f.png`` and ``über.png`` before ``v.png``.
    Accents and then case break ties, which keeps the order total.
    """
    folded = name.casefold()
    return (_strip_accents(folded), folded, name)


def encode_name(name: str) -> str:
    """Percent-encode a filename the way a browser's ``encodeURIComponent`` does.

    ``/`` is always encoded, so an encoded name never contains a raw path
    separator.
    """
    # Names os.listdir could not decode carry surrogate escapes; percent-encode
    # their original bytes.
    return quote(name.encode("utf-8", "surrogateescape"), safe=_URI_COMPONENT_SAFE)


def content_type_for(filename: str) -> str:
    """Map a filename to the ``Content-Type`` sent with its bytes.

    The lookup uses the lowercased extension.  ``.jpg`` maps to
    ``image/jpg`` and unknown extensions fall back to ``image/jpeg``; clients
    of the slideshow rely on exactly these values.

    Args:
        filename: Filename or path of the image.

    Returns:
        MIME type string.
    """
    extension = os.path.splitext(filename)[1].lower()
    return _CONTENT_TYPES.get(extension, DEFAULT_CONTENT_TYPE)


class ImageLibrary:
    """Read-only view of the configured image directory.

    Args:
        image_dir: Directory holding the slideshow images.
        case_insensitive: Match image extensions case-insensitively.
    """

    def __init__(self, image_dir: Path, *, case_insensitive: bool = False):
        self.image_dir = Path(image_dir)
        self.case_insensitive = case_insensitive

    def list_images(self) -> list[str]:
        """Enumerate, filter and sort the image filenames.

        Returns:
            Raw (unencoded) image filenames in slideshow order.

        Raises:
            OSError: If the directory is missing or cannot be read.
        """
        names = os.listdir(self.image_dir)
        images = [
            name for name in names if is_image_name(name, case_insensitive=self.case_insensitive)
        ]
        images.sort(key=sort_key)
        return images

    def list_encoded_images(self) -> list[str]:
        """Return :meth:`list_images` with every name percent-encoded.

        Raises:
            OSError: If the directory is missing or cannot be read.
        """
        return [encode_name(name) for name in self.list_images()]

    def resolve(self, name: str) -> Path | None:
        """Resolve a decoded filename against the image directory.

        The check is lexical: ``..`` segments and absolute names that would
        leave the image directory are rejected, while symlinks living inside
        the directory keep working.

        Args:
            name: Already URL-decoded filename taken from the request path.

        Returns:
            The candidate path, or ``None`` if the name escapes the image
            directory or cannot be represented as a path.
        """
        if "\x00" in name:
            return None

        root = os.path.normpath(os.path.abspath(self.image_dir))
        candidate = os.path.normpath(os.path.join(root, name))

        if candidate != root and not candidate.startswith(root.rstrip(os.sep) + os.sep):
            logger.warning(f"Rejected image path outside {root}: {name!r}")
            return None

        return Path(candidate)

    def locate(self, name: str) -> Path | None:
        """Return the on-disk path for *name* if it exists inside the directory.

        Args:
            name: Already URL-decoded filename.

        Returns:
            Existing path, or ``None`` when the image is absent.
        """
        path = self.resolve(name)
        if path is None or not os.path.exists(path):
            return None
        return path

    def read(self, path: Path) -> bytes:
        """Read the raw bytes of an image located with :meth:`locate`.

        Raises:
            OSError: On permission errors, directories, or files removed
                between :meth:`locate` and the read.
        """
        return path.read_bytes()


def discover_title(title_dir: Path, default: str, *, sort: bool = False) -> str:
    """Derive the page title from the first ``.txt`` file in *title_dir*.

    The file's contents are ignored; only its name matters.  ``notes.txt``
    yields ``notes`` and ``a.b.txt`` yields ``a.b``.

    By default the first file in directory-iteration order wins, which is
    filesystem dependent when several ``.txt`` files exist.  Pass
    ``sort=True`` to pick the alphabetically first one instead.

    Args:
        title_dir: Directory to search.
        default: Title returned when no ``.txt`` file exists or the directory
            cannot be listed.
        sort: Use sorted order instead of iteration order.

    Returns:
        The page title.
    """
    try:
        names = os.listdir(title_dir)
    except OSError as e:
        logger.warning(f"Could not list title directory {title_dir}: {e}")
        return default

    candidates = [name for name in names if name.endswith(TITLE_EXTENSION)]
    if not candidates:
        return default

    if sort:
        candidates.sort(key=sort_key)

    first = candidates[0]
    stem, _ = os.path.splitext(first)
    return stem
