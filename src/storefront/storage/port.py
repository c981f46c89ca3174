"""Durable client storage port (abstract interface).

A string key/value store with the semantics of a browser's localStorage:
values are opaque strings, callers do their own JSON encoding.
"""

from abc import ABC, abstractmethod

# Keys shared by every storefront component
CART_KEY = "luxury-mall-cart"
TOKEN_KEY = "auth_token"
USER_KEY = "user"
THEME_KEY = "app_theme"
SEARCH_HISTORY_KEY = "luxury-mall-search-history"


class StoragePort(ABC):
    """Abstract interface for durable client storage adapters."""

    @abstractmethod
    def get_item(self, key: str) -> str | None:
        """Return the stored value, or None when the key is absent."""
        ...

    @abstractmethod
    def set_item(self, key: str, value: str) -> None:
        ...

    @abstractmethod
    def remove_item(self, key: str) -> None:
        """Delete the key. Removing an absent key is a no-op."""
        ...
