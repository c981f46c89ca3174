"""Small persisted user preferences: colour theme and search history."""

import json

import structlog

from storefront.observable import Observable
from storefront.storage.port import SEARCH_HISTORY_KEY, THEME_KEY, StoragePort

logger = structlog.get_logger(__name__)

LIGHT = "light"
DARK = "dark"

MAX_SEARCH_HISTORY = 10


class ThemePreference(Observable):
    def __init__(self, storage: StoragePort, default: str = LIGHT):
        super().__init__()
        self._storage = storage
        stored = storage.get_item(THEME_KEY)
        self.theme = stored if stored in (LIGHT, DARK) else default

    def snapshot(self) -> str:
        return self.theme

    @property
    def is_dark(self) -> bool:
        return self.theme == DARK

    def set(self, theme: str) -> None:
        if theme not in (LIGHT, DARK):
            raise ValueError(f"Unknown theme: {theme}")
        self.theme = theme
        self._storage.set_item(THEME_KEY, theme)
        self._notify()

    def toggle(self) -> str:
        self.set(LIGHT if self.is_dark else DARK)
        return self.theme


class SearchHistory:
    """Recent search keywords, newest first, without duplicates."""

    def __init__(self, storage: StoragePort, limit: int = MAX_SEARCH_HISTORY):
        self._storage = storage
        self._limit = limit

    @property
    def entries(self) -> list[str]:
        raw = self._storage.get_item(SEARCH_HISTORY_KEY)
        if not raw:
            return []
        try:
            entries = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("search_history_unreadable")
            return []
        if not isinstance(entries, list):
            return []
        return [e for e in entries if isinstance(e, str)]

    def record(self, keyword: str) -> list[str]:
        keyword = (keyword or "").strip()
        if not keyword:
            return self.entries
        entries = [keyword, *[e for e in self.entries if e != keyword]][: self._limit]
        self._storage.set_item(SEARCH_HISTORY_KEY, json.dumps(entries, ensure_ascii=False))
        return entries

    def clear(self) -> None:
        self._storage.remove_item(SEARCH_HISTORY_KEY)
