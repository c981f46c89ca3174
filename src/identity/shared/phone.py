"""Mainland China mobile number rules shared by customer accounts and addresses."""

import re

from protean.exceptions import ValidationError

# 11 digits, leading 1, second digit 3-9
MOBILE_NUMBER_PATTERN = re.compile(r"1[3-9]\d{9}")


def is_mobile_number(number) -> bool:
    return bool(number) and MOBILE_NUMBER_PATTERN.fullmatch(number) is not None


def ensure_mobile_number(number, field="phone"):
    """Raise a ValidationError keyed by `field` unless `number` is a valid mobile number."""
    if not is_mobile_number(number):
        raise ValidationError({field: ["Please enter a valid 11-digit mobile number"]})
