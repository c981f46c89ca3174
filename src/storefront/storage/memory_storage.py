"""In-memory storage: records values for testing."""

from storefront.storage.port import StoragePort


class MemoryStorage(StoragePort):
    """Storage adapter that keeps values in a dict for test assertions."""

    def __init__(self, initial: dict[str, str] | None = None):
        self.items: dict[str, str] = dict(initial or {})
        self.write_count = 0

    def get_item(self, key: str) -> str | None:
        return self.items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self.items[key] = value
        self.write_count += 1

    def remove_item(self, key: str) -> None:
        self.items.pop(key, None)

    def reset(self):
        """Clear stored values (useful between tests)."""
        self.items.clear()
        self.write_count = 0
