"""Storefront client settings, read from the environment."""

import os
from dataclasses import dataclass

DEFAULT_API_BASE_URL = "http://localhost:3001"
DEFAULT_API_TIMEOUT = 10.0
DEFAULT_STORAGE_DIR = ".luxmall"


@dataclass(frozen=True)
class ClientSettings:
    api_base_url: str = DEFAULT_API_BASE_URL
    api_timeout: float = DEFAULT_API_TIMEOUT  # seconds
    storage_dir: str = DEFAULT_STORAGE_DIR

    @classmethod
    def from_env(cls) -> "ClientSettings":
        return cls(
            api_base_url=os.getenv("LUXMALL_API_BASE_URL", DEFAULT_API_BASE_URL).rstrip("/"),
            api_timeout=float(os.getenv("LUXMALL_API_TIMEOUT", DEFAULT_API_TIMEOUT)),
            storage_dir=os.getenv("LUXMALL_STORAGE_DIR", DEFAULT_STORAGE_DIR),
        )
