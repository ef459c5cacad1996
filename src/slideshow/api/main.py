"""Kollektif Slideshow: FastAPI Application.

This module defines the application factory, every route, and the ``main()``
CLI function that launches the uvicorn server.

Architecture
------------
The application is stateless:

- **Configuration** is a :class:`~slideshow.core.config.SlideshowConfig`
  injected into :func:`create_app` and stored on ``app.state``.
- **Images** are listed and read through
  :class:`~slideshow.core.library.ImageLibrary` on every request; nothing is
  cached between requests.
- **Client assets** (CSS, JS, HTML skeleton) are loaded once per application
  by :class:`~slideshow.api.assets.Assets`.
- **Errors** from the filesystem are caught at the route boundary and turned
  into HTTP responses.  No filesystem failure escapes a handler.

Endpoints
---------
========  =====================  ==========================================
Method    Path                   Purpose
========  =====================  ==========================================
GET       ``/style.css``         Slideshow stylesheet
GET       ``/script.js``         Client script that builds the slideshow
GET       ``/images``            JSON array of percent-encoded image names
GET       ``/images/{name}``     Raw image bytes
GET       anything else          HTML page with the discovered title
========  =====================  ==========================================

The OpenAPI and docs routes are disabled so that ``/docs`` and friends fall
through to the slideshow page like any other unknown path.

Usage
-----
CLI (installed entry point)::

    slideshow

Direct invocation::

    python -m slideshow.api.main
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import APIRouter, Depends, FastAPI, Request
from fastapi.responses import HTMLResponse, JSONResponse, PlainTextResponse, Response

from slideshow import __version__
from slideshow.api.assets import Assets
from slideshow.api.models import ErrorResponse
from slideshow.core.config import SlideshowConfig
from slideshow.core.library import ImageLibrary, content_type_for, discover_title

logger = logging.getLogger(__name__)

IMAGE_LIST_ERROR = "Could not read image directory"
IMAGE_NOT_FOUND = "Image not found"
SERVER_ERROR = "Server error"

router = APIRouter()


# ---------------------------------------------------------------------------
# Dependencies: pull per-application objects off ``app.state``.
# ---------------------------------------------------------------------------


def get_config(request: Request) -> SlideshowConfig:
    return request.app.state.config


def get_library(request: Request) -> ImageLibrary:
    return request.app.state.library


def get_assets(request: Request) -> Assets:
    return request.app.state.assets


# ---------------------------------------------------------------------------
# Routes.  Registration order matters: the catch-all page route must come
# last so the fixed paths win.
# ---------------------------------------------------------------------------


@router.get("/style.css")
async def stylesheet(assets: Assets = Depends(get_assets)) -> Response:
    """Serve the fixed slideshow stylesheet."""
    return Response(content=assets.stylesheet, media_type="text/css")


@router.get("/script.js")
async def script(assets: Assets = Depends(get_assets)) -> Response:
    """Serve the client script that fetches ``/images`` and builds the slides."""
    return Response(content=assets.script, media_type="application/javascript")


@router.get("/images")
async def list_images(library: ImageLibrary = Depends(get_library)) -> JSONResponse:
    """Return the slideshow images as a JSON array of encoded filenames.

    The directory is listed fresh on every call.  Entries are filtered to
    ``.jpg``/``.jpeg``/``.png``, sorted by filename, and percent-encoded so
    the client can drop them straight into an ``img.src``.

    Returns:
        ``200`` with e.g. ``["a.jpg","b%20c.png"]``, or ``500`` with
        ``{"error": "..."}`` when the directory cannot be read.
    """
    try:
        images = library.list_encoded_images()
    except (OSError, UnicodeError) as e:
        logger.error(f"Error listing image directory {library.image_dir}: {e}", exc_info=True)
        return JSONResponse(
            status_code=500,
            content=ErrorResponse(error=IMAGE_LIST_ERROR).model_dump(),
        )

    return JSONResponse(content=images)


@router.get("/images/{name:path}")
async def get_image(name: str, library: ImageLibrary = Depends(get_library)) -> Response:
    """Stream the raw bytes of one image.

    *name* arrives already URL-decoded, so ``/images/my%20photo.jpg`` reads
    ``my photo.jpg`` from the image directory.

    Args:
        name: Decoded filename relative to the image directory.

    Returns:
        ``200`` with the image bytes and an extension-based content type,
        ``404`` if the file does not exist (or lies outside the image
        directory), ``500`` if it exists but cannot be read.
    """
    path = library.locate(name)
    if path is None:
        logger.debug(f"Image not found: {name!r}")
        return PlainTextResponse(IMAGE_NOT_FOUND, status_code=404)

    try:
        data = library.read(path)
    except OSError as e:
        logger.error(f"Error reading image {path}: {e}", exc_info=True)
        return PlainTextResponse(SERVER_ERROR, status_code=500)

    return Response(content=data, media_type=content_type_for(path.name))


@router.get("/{full_path:path}", response_class=HTMLResponse)
async def page(
    full_path: str,
    config: SlideshowConfig = Depends(get_config),
    assets: Assets = Depends(get_assets),
) -> HTMLResponse:
    """Serve the slideshow page for any path without a dedicated route.

    The ``<title>`` is taken from the first ``.txt`` file in the title
    directory, recomputed on every request.
    """
    title = discover_title(
        config.title_dir,
        config.default_title,
        sort=config.sort_title_files,
    )
    return HTMLResponse(content=assets.render_page(title))


# ---------------------------------------------------------------------------
# Application factory.
# ---------------------------------------------------------------------------


def create_app(config: SlideshowConfig | None = None, assets: Assets | None = None) -> FastAPI:
    """Build the FastAPI application.

    Args:
        config: Server configuration.  Loaded from ``SLIDESHOW_*``
            environment variables when omitted.
        assets: Pre-loaded client assets.  Read from the package data
            directory when omitted.

    Returns:
        Configured :class:`FastAPI` instance.
    """
    if config is None:
        config = SlideshowConfig()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if not config.image_dir.is_dir():
            logger.warning(
                f"Image directory {config.image_dir} does not exist or is not a directory"
            )
        logger.info(
            f"Slideshow server started on port {config.server_port} "
            f"(images: {config.image_dir})"
        )
        yield
        logger.info("Slideshow server stopped.")

    app = FastAPI(
        title="Kollektif Slideshow",
        version=__version__,
        lifespan=lifespan,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )

    app.state.config = config
    app.state.library = ImageLibrary(
        config.image_dir,
        case_insensitive=config.case_insensitive_extensions,
    )
    app.state.assets = assets if assets is not None else Assets()

    app.include_router(router)
    return app


# ---------------------------------------------------------------------------
# CLI entry point.
# ---------------------------------------------------------------------------


def main() -> None:
    """Launch the uvicorn ASGI server.

    Reads host, port and log level from :class:`SlideshowConfig` (which
    loads ``SLIDESHOW_SERVER_HOST``, ``SLIDESHOW_SERVER_PORT`` and friends
    from the environment).  Defaults to ``0.0.0.0:3000``.

    This function is registered as the ``slideshow`` console script in
    ``pyproject.toml``.
    """
    import uvicorn

    config = SlideshowConfig()
    logging.basicConfig(
        level=config.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    uvicorn.run(
        create_app(config),
        host=config.server_host,
        port=config.server_port,
        log_level=config.log_level,
    )


if __name__ == "__main__":
    main()
