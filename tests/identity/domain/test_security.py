from datetime import UTC, datetime, timedelta

import jwt
import pytest
from identity.shared.phone import ensure_mobile_number, is_mobile_number
from identity.shared.security import (
    decode_token,
    ensure_password_strength,
    hash_password,
    issue_token,
    verify_password,
)
from protean.exceptions import ValidationError


class TestMobileNumber:
    @pytest.mark.parametrize("number", ["13812345678", "19900000000", "15555555555"])
    def test_valid_numbers(self, number):
        assert is_mobile_number(number)
        ensure_mobile_number(number)

    @pytest.mark.parametrize(
        "number", [None, "", "12812345678", "1381234567a", "1381234567", "138 1234 5678", "13812345678\n"]
    )
    def test_invalid_numbers(self, number):
        assert not is_mobile_number(number)

    def test_error_is_keyed_by_field(self):
        with pytest.raises(ValidationError) as exc:
            ensure_mobile_number("123", field="contact")
        assert "contact" in exc.value.messages


class TestPasswords:
    def test_hash_is_not_the_password(self):
        hashed = hash_password("s3cret-pass")
        assert hashed != "s3cret-pass"
        assert hashed.startswith("$pbkdf2-sha256$")

    def test_verify_password(self):
        hashed = hash_password("s3cret-pass")
        assert verify_password("s3cret-pass", hashed)
        assert not verify_password("other-pass", hashed)

    def test_verify_against_garbage_hash_is_false(self):
        assert not verify_password("s3cret-pass", "not-a-hash")

    def test_short_password_is_rejected(self):
        with pytest.raises(ValidationError) as exc:
            ensure_password_strength("12345")
        assert "password" in exc.value.messages

    def test_six_characters_is_enough(self):
        ensure_password_strength("123456")


class TestTokens:
    def test_round_trip_subject(self):
        token = issue_token("customer-1")
        assert decode_token(token) == "customer-1"

    def test_expired_token_is_rejected(self):
        token = issue_token("customer-1", expires_in=-1)
        assert decode_token(token) is None

    def test_token_signed_with_another_secret_is_rejected(self):
        now = datetime.now(UTC)
        forged = jwt.encode(
            {"sub": "customer-1", "iat": now, "exp": now + timedelta(days=1)}, "not-the-secret", algorithm="HS256"
        )
        assert decode_token(forged) is None

    def test_garbage_is_rejected(self):
        assert decode_token("not.a.token") is None
