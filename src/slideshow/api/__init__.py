"""Kollektif Slideshow: FastAPI HTTP layer.

This package contains the FastAPI application factory, the static client
assets and the Pydantic response models.

Modules
-------
main
    FastAPI application factory with all route handlers and the ``main()``
    CLI entry point.
assets
    Stylesheet, client script and HTML page template.
models
    Pydantic models for JSON response bodies.
"""
