"""Client storage factory.

Provides get_storage() / set_storage() to swap implementations:
- FileStorage under LUXMALL_STORAGE_DIR by default
- MemoryStorage for testing
"""

from storefront.config import ClientSettings
from storefront.storage.file_storage import FileStorage
from storefront.storage.port import StoragePort

_current_storage: StoragePort | None = None


def get_storage() -> StoragePort:
    """Return the current storage. Defaults to FileStorage."""
    global _current_storage
    if _current_storage is None:
        _current_storage = FileStorage(ClientSettings.from_env().storage_dir)
    return _current_storage


def set_storage(storage: StoragePort) -> None:
    """Override the active storage (useful for tests)."""
    global _current_storage
    _current_storage = storage


def reset_storage() -> None:
    """Reset to default storage."""
    global _current_storage
    _current_storage = None
