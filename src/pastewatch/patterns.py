"""Rule registry and scanner.

Deterministic rules only: each rule is a regex for one high-confidence
shape of sensitive data.  False negatives are preferred over false
positives.  Rule order is priority: when two rules match overlapping
text, the one registered first keeps it.
"""

from __future__ import annotations
import logging
import re
import threading
from dataclasses import dataclass
from typing import Callable, Iterable, Sequence

from .types import DetectedMatch, SensitiveDataType
from .validation import is_excluded, is_valid_match

logger = logging.getLogger(__name__)

T = SensitiveDataType

# Each definition: (data_type, pattern, flags).  Most specific first.
RULE_DEFINITIONS: list[tuple[SensitiveDataType, str, int]] = [
    # SSH private key header
    (T.SSH_PRIVATE_KEY, r"-----BEGIN\s+(RSA|DSA|EC|OPENSSH)\s+PRIVATE\s+KEY-----", 0),

    # AWS access key id, then the 40-char secret access key shape
    (T.AWS_KEY, r"\b(AKIA|ABIA|ACCA|ASIA)[0-9A-Z]{16}\b", 0),
    (T.AWS_KEY, r"\b[A-Za-z0-9/+=]{40}\b", 0),

    # JWT: three base64url segments, header and payload start with eyJ
    (T.JWT_TOKEN, r"\beyJ[A-Za-z0-9_-]+\.eyJ[A-Za-z0-9_-]+\.[A-Za-z0-9_-]+\b", 0),

    (T.DB_CONNECTION_STRING,
     r"(postgres|postgresql|mysql|mongodb|redis)://[^\s]+", re.IGNORECASE),

    # Generic prefixed keys, GitHub tokens, Stripe keys
    (T.GENERIC_API_KEY,
     r"\b(sk|pk|api|key|token|secret|bearer)[_-][A-Za-z0-9]{20,}\b", re.IGNORECASE),
    (T.GENERIC_API_KEY, r"\b(ghp|gho|ghu|ghs|ghr)_[A-Za-z0-9]{36}\b", 0),
    (T.GENERIC_API_KEY, r"\b(sk|pk|rk)_(test|live)_[A-Za-z0-9]{24,}\b", 0),

    (T.UUID,
     r"\b[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}\b", re.IGNORECASE),

    # Visa, Mastercard, Amex, Discover with optional separators (Luhn-checked later)
    (T.CREDIT_CARD,
     r"\b(?:4[0-9]{3}|5[1-5][0-9]{2}|3[47][0-9]{2}|6(?:011|5[0-9]{2}))"
     r"[- ]?[0-9]{4}[- ]?[0-9]{4}[- ]?[0-9]{4}\b", 0),

    # IPv4, every octet 0-255
    (T.IP_ADDRESS,
     r"\b(?:(?:25[0-5]|2[0-4][0-9]|[01]?[0-9][0-9]?)\.){3}"
     r"(?:25[0-5]|2[0-4][0-9]|[01]?[0-9][0-9]?)\b", 0),

    (T.EMAIL, r"\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b", 0),

    # Phone: international with flexible grouping (+60, +91, +7, +44, ...)
    (T.PHONE,
     r"\+[1-9][0-9]{0,2}[-.\s]?[0-9]{1,4}[-.\s]?[0-9]{2,4}"
     r"[-.\s]?[0-9]{2,4}[-.\s]?[0-9]{0,4}", 0),
    # US with parenthesised area code: (XXX) XXX-XXXX
    (T.PHONE, r"\([0-9]{3}\)\s?[0-9]{3}[-.\s]?[0-9]{4}", 0),
    # Compact E.164: + and 10-15 digits
    (T.PHONE, r"\+[1-9][0-9]{9,14}\b", 0),
    # Malaysian mobile: 01X-XXXXXXX with or without separators
    (T.PHONE, r"\b01[0-9][-.\s]?[0-9]{3,4}[-.\s]?[0-9]{4}\b", 0),
    (T.PHONE, r"\b01[0-9]{8,9}\b", 0),
    # Russian local: 8 XXX XXX XX XX
    (T.PHONE, r"\b8[-.\s]?[0-9]{3}[-.\s]?[0-9]{3}[-.\s]?[0-9]{2}[-.\s]?[0-9]{2}\b", 0),
    # International dial prefix: 00X ...
    (T.PHONE, r"\b00[0-9]{1,3}[-.\s]?[0-9]{2,4}[-.\s]?[0-9]{3,4}[-.\s]?[0-9]{3,4}\b", 0),
]


@dataclass(frozen=True, slots=True)
class Rule:
    """One registry entry."""
    data_type: SensitiveDataType
    pattern: re.Pattern


def build_rules(
    definitions: Iterable[tuple[SensitiveDataType, str, int]],
) -> tuple[Rule, ...]:
    """Compile rule definitions in order.  Bad patterns are dropped, not raised."""
    rules: list[Rule] = []
    for data_type, pattern, flags in definitions:
        try:
            compiled = re.compile(pattern, flags)
        except re.error as e:
            logger.debug("Dropping %s rule %r: %s", data_type.label, pattern, e)
            continue
        rules.append(Rule(data_type, compiled))
    return tuple(rules)


# Lazy singleton, built on first scan
_rules: tuple[Rule, ...] | None = None
_rules_lock = threading.Lock()


def get_rules() -> tuple[Rule, ...]:
    """Return the process-wide registry, building it once."""
    global _rules
    if _rules is None:
        with _rules_lock:
            if _rules is None:
                _rules = build_rules(RULE_DEFINITIONS)
                logger.debug("Built rule registry with %d rules", len(_rules))
    return _rules


def scan(
    text: str,
    is_type_enabled: Callable[[SensitiveDataType], bool] | None = None,
    *,
    rules: Sequence[Rule] | None = None,
) -> list[DetectedMatch]:
    """Run enabled rules against text.  Returns non-overlapping matches.

    Order is acceptance order: registry order first, then position within
    each rule.  It is not sorted by position across rules.
    """
    if rules is None:
        rules = get_rules()

    accepted: list[DetectedMatch] = []
    for rule in rules:
        if is_type_enabled is not None and not is_type_enabled(rule.data_type):
            continue

        for m in rule.pattern.finditer(text):
            start, end = m.span()
            # First registered rule wins; later rules never take claimed text
            if any(a.overlaps(start, end) for a in accepted):
                continue

            value = m.group()
            if is_excluded(value):
                continue
            if not is_valid_match(value, rule.data_type):
                continue

            accepted.append(DetectedMatch(
                data_type=rule.data_type,
                value=value,
                start=start,
                end=end,
            ))

    logger.debug("Scanned %d chars: %d matches", len(text), len(accepted))
    return accepted
