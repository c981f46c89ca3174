"""File-backed storage: one document per key under a directory."""

import os
import re
import tempfile
from pathlib import Path

import structlog

from storefront.storage.port import StoragePort

logger = structlog.get_logger(__name__)

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]")


class FileStorage(StoragePort):
    """Persists each key as `<directory>/<key>.json`.

    Writes go to a temporary file in the same directory and are moved into
    place with `os.replace`, so a crash never leaves a half-written value.
    """

    def __init__(self, directory):
        self.directory = Path(directory)

    def _path_for(self, key: str) -> Path:
        return self.directory / f"{_UNSAFE_CHARS.sub('_', key)}.json"

    def get_item(self, key: str) -> str | None:
        path = self._path_for(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except UnicodeDecodeError as exc:
            logger.warning("storage_value_undecodable", key=key, error=str(exc))
            return None

    def set_item(self, key: str, value: str) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=self.directory, prefix=".tmp-", suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(value)
            os.replace(tmp_path, self._path_for(key))
        except OSError:
            logger.exception("storage_write_failed", key=key)
            Path(tmp_path).unlink(missing_ok=True)
            raise

    def remove_item(self, key: str) -> None:
        self._path_for(key).unlink(missing_ok=True)
