import json

from storefront.models import UserProfile
from storefront.session import Session
from storefront.storage.file_storage import FileStorage
from storefront.storage.memory_storage import MemoryStorage
from storefront.storage.port import TOKEN_KEY, USER_KEY


def _user():
    return UserProfile(id="u-1", username="Lin Yue", phone="13812345678")


class TestSession:
    def test_starts_signed_out(self, session):
        assert session.is_authenticated is False
        assert session.token is None
        assert session.user is None

    def test_sign_in_persists_token_and_user(self, session, storage):
        session.sign_in("tok-1", _user())

        assert session.is_authenticated
        assert storage.items[TOKEN_KEY] == "tok-1"
        assert json.loads(storage.items[USER_KEY])["username"] == "Lin Yue"

    def test_restores_from_storage(self, storage):
        Session(storage).sign_in("tok-1", _user())

        restored = Session(storage)

        assert restored.is_authenticated
        assert restored.user == _user()

    def test_token_without_user_is_not_authenticated(self):
        session = Session(MemoryStorage({TOKEN_KEY: "tok-1"}))
        assert session.is_authenticated is False

    def test_unreadable_user_is_ignored(self):
        session = Session(MemoryStorage({TOKEN_KEY: "tok-1", USER_KEY: "{broken"}))
        assert session.user is None

    def test_undecodable_user_file_is_ignored(self, tmp_path):
        (tmp_path / "auth_token.json").write_text("tok-1", encoding="utf-8")
        (tmp_path / "user.json").write_bytes(b"\xff\xfe\x00garbage")

        session = Session(FileStorage(tmp_path))

        assert session.user is None
        assert session.is_authenticated is False

    def test_clear_removes_both_keys(self, session, storage):
        session.sign_in("tok-1", _user())

        session.clear()

        assert TOKEN_KEY not in storage.items
        assert USER_KEY not in storage.items
        assert session.is_authenticated is False

    def test_listeners_follow_auth_changes(self, session):
        seen = []
        session.subscribe(lambda state: seen.append(state["is_authenticated"]))

        session.sign_in("tok-1", _user())
        session.clear()

        assert seen == [False, True, False]
