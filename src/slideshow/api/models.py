"""Pydantic response models for the slideshow API.

Models
------
ErrorResponse
    Body of the ``500`` response from ``GET /images`` when the image
    directory cannot be listed.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """JSON error body: ``{"error": "<message>"}``.

    Attributes:
        error: Human-readable description of what went wrong.
    """

    error: str = Field(..., description="Human-readable error message.")
