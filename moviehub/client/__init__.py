"""
Python client for MovieHub: the state a browser page would hold.

``Page`` wires the session controller and the catalog view to one HTTP
client and one storage file, and ``load()`` does what a page load does:
restore the session, then fill every genre section. Logging out reloads the
whole page, the same as a browser reload.
"""

from typing import Optional

import httpx

from moviehub.config import Settings, get_settings
from moviehub.client.catalog_view import CatalogSection, CatalogView, MoviePreview, SectionState
from moviehub.client.session import SessionController, NavState
from moviehub.client.storage import FileStorage

__all__ = [
    "CatalogSection",
    "CatalogView",
    "FileStorage",
    "MoviePreview",
    "NavState",
    "Page",
    "SectionState",
    "SessionController",
]


class Page:
    def __init__(
        self,
        http: Optional[httpx.Client] = None,
        storage: Optional[FileStorage] = None,
        settings: Optional[Settings] = None,
    ):
        self.settings = settings or get_settings()
        self.http = http or httpx.Client(base_url=self.settings.API_BASE_URL, timeout=30)
        self.storage = storage or FileStorage(self.settings.CLIENT_STORAGE_PATH)
        self.session = SessionController(self.http, self.storage, on_reload=self.reload)
        self.catalog = CatalogView(self.http, self.settings)

    def load(self) -> "Page":
        self.session.restore()
        self.catalog.load_all()
        return self

    def reload(self) -> "Page":
        self.session = SessionController(self.http, self.storage, self.session.clock, on_reload=self.reload)
        self.catalog = CatalogView(self.http, self.settings)
        return self.load()
