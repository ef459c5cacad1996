"""Shared pytest fixtures for slideshow tests."""

from __future__ import annotations

import shutil
import tempfile
from collections.abc import Generator
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from PIL import Image

from slideshow.api.main import create_app
from slideshow.core.config import SlideshowConfig


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files.

    Yields:
        Path to temporary directory

    Cleanup:
        Directory is removed after test completes
    """
    temp_path = Path(tempfile.mkdtemp())
    try:
        yield temp_path
    finally:
        shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def image_dir(temp_dir: Path) -> Path:
    """Empty image directory."""
    path = temp_dir / "images"
    path.mkdir()
    return path


@pytest.fixture
def title_dir(temp_dir: Path) -> Path:
    """Empty directory searched for the ``.txt`` title file."""
    path = temp_dir / "site"
    path.mkdir()
    return path


@pytest.fixture
def test_config(image_dir: Path, title_dir: Path) -> SlideshowConfig:
    """Configuration pointing at the temporary directories.

    ``_env_file=None`` keeps a developer's ``.env`` out of the tests.
    """
    return SlideshowConfig(
        image_dir=image_dir,
        title_dir=title_dir,
        _env_file=None,
    )


@pytest.fixture
def test_client(test_config: SlideshowConfig) -> Generator[TestClient, None, None]:
    """FastAPI TestClient for an app built from :func:`test_config`.

    Entering the client as a context manager runs the lifespan handler.
    """
    app = create_app(test_config)
    with TestClient(app) as client:
        yield client


def _write_image(path: Path, color: str = "red", size: tuple[int, int] = (4, 4)) -> bytes:
    """Save a tiny real image at *path* and return its bytes.

    The format is chosen from the extension so ``.png`` files really are PNG
    and ``.jpg``/``.jpeg`` files really are JPEG.
    """
    fmt = "PNG" if path.suffix.lower() == ".png" else "JPEG"
    Image.new("RGB", size, color=color).save(path, format=fmt)
    return path.read_bytes()


@pytest.fixture
def sample_images(image_dir: Path) -> dict[str, bytes]:
    """Populate the image directory with images plus files that must be ignored.

    Returns:
        Mapping of image filename to its bytes (non-image files excluded).
    """
    images = {
        "b.png": _write_image(image_dir / "b.png", "blue"),
        "a.jpg": _write_image(image_dir / "a.jpg", "red"),
        "c.jpeg": _write_image(image_dir / "c.jpeg", "green"),
        "my photo.jpg": _write_image(image_dir / "my photo.jpg", "yellow"),
        "über.png": _write_image(image_dir / "über.png", "white"),
    }

    (image_dir / "notes.txt").write_text("not an image")
    (image_dir / "clip.gif").write_bytes(b"GIF89a")
    (image_dir / "UPPER.JPG").write_bytes(b"\xff\xd8\xff")

    return images


@pytest.fixture
def make_image():
    """Factory fixture: ``make_image(path, color="red")`` writes a real image."""
    return _write_image
