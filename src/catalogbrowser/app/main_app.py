"""Catalog browser Textual application."""

from __future__ import annotations

import functools
from pathlib import Path
from typing import Optional

from textual.app import App

from catalogbrowser.app.screens.catalog_screen import CatalogScreen
from catalogbrowser.config.settings import Settings
from catalogbrowser.engine.catalog_loader import load_catalog
from catalogbrowser.engine.session import CatalogSession


class CatalogApp(App):
    """Interactive course catalog browser."""

    TITLE = "Course Catalog"
    SUB_TITLE = "Search and filter courses"

    CSS_PATH = Path(__file__).parent / "css" / "catalog.tcss"

    BINDINGS = [
        ("q", "quit", "Quit"),
    ]

    def __init__(
        self,
        settings: Optional[Settings] = None,
        source: Optional[str] = None,
        **kwargs,
    ) -> None:
        super().__init__(**kwargs)
        self.settings = settings or Settings.load()
        self.source = source or self.settings.data_source
        self.session = CatalogSession(
            loader=functools.partial(load_catalog, timeout=self.settings.fetch_timeout),
        )

    def on_mount(self) -> None:
        self.push_screen(CatalogScreen(session=self.session, source=self.source))
