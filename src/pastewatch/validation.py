"""Secondary checks applied after a raw pattern match.

The regexes alone cannot reject everything that merely looks right:
card numbers must pass Luhn, phone numbers need enough digits, and a few
well-known addresses are never worth redacting.
"""

from __future__ import annotations
import re
from typing import Callable

from .types import SensitiveDataType

# Values excluded for every type (only meaningful for IPs today)
EXCLUSION_PATTERNS: tuple[re.Pattern, ...] = (
    re.compile(r"^(127\.0\.0\.1|0\.0\.0\.0)$"),
)

_NON_SENSITIVE_IPS = frozenset({"0.0.0.0", "127.0.0.1", "255.255.255.255"})

MIN_PHONE_DIGITS = 10
MIN_CARD_DIGITS = 13


def _digits(value: str) -> list[int]:
    return [int(c) for c in value if c.isdecimal()]


def is_excluded(value: str) -> bool:
    """True if the matched text hits any exclusion pattern."""
    return any(p.search(value) for p in EXCLUSION_PATTERNS)


def luhn_checksum(value: str) -> bool:
    """Luhn mod-10 check over the decimal digits in *value*.

    Separators (spaces, dashes) are ignored.  Fewer than 13 digits fails.
    """
    digits = _digits(value)
    if len(digits) < MIN_CARD_DIGITS:
        return False

    total = 0
    for index, digit in enumerate(reversed(digits)):
        if index % 2 == 1:
            doubled = digit * 2
            total += doubled - 9 if doubled > 9 else doubled
        else:
            total += digit
    return total % 10 == 0


def _valid_ip(value: str) -> bool:
    return value not in _NON_SENSITIVE_IPS


def _valid_phone(value: str) -> bool:
    return len(_digits(value)) >= MIN_PHONE_DIGITS


def _valid_email(value: str) -> bool:
    return "@" in value and "." in value


_VALIDATORS: dict[SensitiveDataType, Callable[[str], bool]] = {
    SensitiveDataType.IP_ADDRESS: _valid_ip,
    SensitiveDataType.PHONE: _valid_phone,
    SensitiveDataType.CREDIT_CARD: luhn_checksum,
    SensitiveDataType.EMAIL: _valid_email,
}


def is_valid_match(value: str, data_type: SensitiveDataType) -> bool:
    """Type-specific validation.  Types without a validator always pass."""
    validator = _VALIDATORS.get(data_type)
    return validator(value) if validator else True
