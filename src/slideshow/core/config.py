"""Configuration management for the slideshow server.

This module provides centralized configuration management using Pydantic Settings.
All configuration is loaded from environment variables with the SLIDESHOW_ prefix,
allowing easy customization without code changes.

Environment Variable Loading
-----------------------------
Configuration values are loaded in the following priority order:
1. Environment variables (SLIDESHOW_* prefix)
2. .env file in the working directory
3. Default values defined in SlideshowConfig

Example .env file:
    SLIDESHOW_SERVER_PORT=3000
    SLIDESHOW_IMAGE_DIR=/srv/photos
    SLIDESHOW_DEFAULT_TITLE=Holiday 2024

Usage Example
-------------
    from slideshow.api.main import create_app
    from slideshow.core.config import SlideshowConfig

    app = create_app(SlideshowConfig(image_dir="/srv/photos"))

There is no global configuration instance.  The application factory in
:mod:`slideshow.api.main` receives a config object, and every route reads it
back from ``app.state``.

Directory Handling
------------------
The image directory is read-only from the server's point of view and is NOT
created on initialisation.  A missing directory is reported when the server
starts and surfaces to clients as a 500 response on ``GET /images``.
"""

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class SlideshowConfig(BaseSettings):
    """Main configuration for the slideshow server.

    Attributes
    ----------
    Server Settings:
        server_host : str
            Server bind address (0.0.0.0 for local network)
        server_port : int
            Server port (1-65535)
        log_level : Literal["critical", "error", "warning", "info", "debug"]
            Log level for the application and uvicorn

    Paths:
        image_dir : Path
            Directory scanned for slideshow images
        title_dir : Path
            Directory searched for the ``.txt`` title file

    Slideshow Settings:
        default_title : str
            Page title used when no ``.txt`` file is found
        case_insensitive_extensions : bool
            Match ``.JPG``/``.PNG`` etc. as images
        sort_title_files : bool
            Pick the alphabetically first ``.txt`` file instead of the first
            one the filesystem returns

    Examples
    --------
        >>> cfg = SlideshowConfig(image_dir="photos", server_port=8080)
        >>> cfg.server_port
        8080
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="SLIDESHOW_",
        case_sensitive=False,
        extra="ignore",
    )

    # Server settings
    server_host: str = Field(
        default="0.0.0.0",
        description="Server bind address (0.0.0.0 for local network)",
    )
    server_port: int = Field(
        default=3000,
        description="Server port",
        ge=1,
        le=65535,
    )
    log_level: Literal["critical", "error", "warning", "info", "debug"] = Field(
        default="info",
        description="Log level for the application and uvicorn",
    )

    # Paths
    image_dir: Path = Field(
        default=Path("images"),
        description="Directory scanned for slideshow images",
    )
    title_dir: Path = Field(
        default=Path("."),
        description="Directory searched for the .txt title file",
    )

    # Slideshow settings
    default_title: str = Field(
        default="Kollektif Karga",
        description="Page title used when no .txt file is present",
    )
    case_insensitive_extensions: bool = Field(
        default=False,
        description="Treat image extensions case-insensitively (.JPG, .Png, ...)",
    )
    sort_title_files: bool = Field(
        default=False,
        description="Choose the alphabetically first .txt file for the title",
    )
