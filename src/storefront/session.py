"""Signed-in state: the bearer token and the user profile, kept in storage."""

import json

import pydantic
import structlog

from storefront.models import UserProfile
from storefront.observable import Observable
from storefront.storage.port import TOKEN_KEY, USER_KEY, StoragePort

logger = structlog.get_logger(__name__)


class Session(Observable):
    def __init__(self, storage: StoragePort):
        super().__init__()
        self._storage = storage
        self.token: str | None = storage.get_item(TOKEN_KEY) or None
        self.user: UserProfile | None = self._read_user()

    def _read_user(self) -> UserProfile | None:
        raw = self._storage.get_item(USER_KEY)
        if not raw:
            return None
        try:
            return UserProfile.model_validate(json.loads(raw))
        except (json.JSONDecodeError, pydantic.ValidationError) as exc:
            logger.warning("stored_user_unreadable", error=str(exc))
            return None

    def snapshot(self):
        return {"user": self.user, "is_authenticated": self.is_authenticated}

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token) and self.user is not None

    def sign_in(self, token: str, user: UserProfile) -> None:
        self.token = token
        self._storage.set_item(TOKEN_KEY, token)
        self.update_user(user)

    def update_user(self, user: UserProfile) -> None:
        self.user = user
        self._storage.set_item(USER_KEY, user.model_dump_json())
        self._notify()

    def clear(self) -> None:
        self.token = None
        self.user = None
        self._storage.remove_item(TOKEN_KEY)
        self._storage.remove_item(USER_KEY)
        self._notify()
