"""Form checks that run before anything is sent to the server.

Each check raises `ValidationError` with a `{field: [message]}` payload on
the first problem it finds, in the order the form shows its fields.
"""

import re

from protean.exceptions import ValidationError

MOBILE_NUMBER_PATTERN = re.compile(r"1[3-9]\d{9}")
RECIPIENT_NAME_PATTERN = re.compile(r"[\u4e00-\u9fa5a-zA-Z0-9]{2,20}")
MIN_PASSWORD_LENGTH = 6


def first_error(exc: ValidationError) -> str:
    """The first message of a ValidationError, for showing in a toast."""
    messages = exc.messages
    if isinstance(messages, dict):
        for msgs in messages.values():
            if msgs:
                return msgs[0] if isinstance(msgs, list | tuple) else str(msgs)
    return str(messages)


def _check_phone(phone):
    if not phone or not MOBILE_NUMBER_PATTERN.fullmatch(phone):
        raise ValidationError({"phone": ["Please enter a valid 11-digit mobile number"]})


def _check_password(password):
    if not password or len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError({"password": [f"Password must be at least {MIN_PASSWORD_LENGTH} characters"]})


def validate_address_form(name, phone, province, city, district, detail, tag=None):
    if not name or not RECIPIENT_NAME_PATTERN.fullmatch(name):
        raise ValidationError({"name": ["Recipient name must be 2-20 letters, digits or Chinese characters"]})

    _check_phone(phone)

    if not province or not city or not district:
        raise ValidationError({"region": ["Please select a complete province, city and district"]})

    detail = (detail or "").strip()
    if len(detail) < 5:
        raise ValidationError({"detail": ["Detailed address must be at least 5 characters"]})
    if len(detail) > 100:
        raise ValidationError({"detail": ["Detailed address cannot exceed 100 characters"]})

    if tag and len(tag.strip()) > 10:
        raise ValidationError({"tag": ["Address tag cannot exceed 10 characters"]})


def validate_registration(username, phone, password, confirm_password):
    username = (username or "").strip()
    if not 2 <= len(username) <= 20:
        raise ValidationError({"username": ["Username must be 2-20 characters"]})

    _check_phone(phone)
    _check_password(password)

    if password != confirm_password:
        raise ValidationError({"confirm_password": ["The two passwords do not match"]})


def validate_login(phone, password):
    _check_phone(phone)
    _check_password(password)
