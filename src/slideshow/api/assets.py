"""Static client assets for the slideshow page.

The stylesheet, client script and HTML skeleton ship as package data in
``slideshow/assets``.  They never change while the server runs, so an
:class:`Assets` instance reads them once and the route handlers serve the
cached strings.

The HTML skeleton is a :class:`string.Template` with a single ``$title``
placeholder.  The title comes from a filename on disk and is HTML-escaped
before interpolation.
"""

from __future__ import annotations

import html
from pathlib import Path
from string import Template

ASSETS_DIR: Path = Path(__file__).resolve().parent.parent / "assets"

STYLESHEET_NAME = "style.css"
SCRIPT_NAME = "script.js"
PAGE_TEMPLATE_NAME = "index.html"


class Assets:
    """Stylesheet, script and page template loaded from *assets_dir*."""

    def __init__(self, assets_dir: Path = ASSETS_DIR):
        self.assets_dir = Path(assets_dir)
        self.stylesheet = self._read(STYLESHEET_NAME)
        self.script = self._read(SCRIPT_NAME)
        self._page_template = Template(self._read(PAGE_TEMPLATE_NAME))

    def _read(self, name: str) -> str:
        return (self.assets_dir / name).read_text(encoding="utf-8")

    def render_page(self, title: str) -> str:
        """Render the slideshow page with *title* in the ``<title>`` element."""
        return self._page_template.substitute(title=html.escape(title))
