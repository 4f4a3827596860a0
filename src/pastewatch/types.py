"""Core types."""

from __future__ import annotations
import uuid
from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class SensitiveDataType(Enum):
    """Detected sensitive data categories.  Value is the display label."""

    EMAIL = "Email"
    PHONE = "Phone"
    IP_ADDRESS = "IP"
    AWS_KEY = "AWS Key"
    GENERIC_API_KEY = "API Key"
    UUID = "UUID"
    DB_CONNECTION_STRING = "DB Connection"
    SSH_PRIVATE_KEY = "SSH Key"
    JWT_TOKEN = "JWT"
    CREDIT_CARD = "Card"

    @property
    def label(self) -> str:
        return self.value

    @property
    def placeholder_name(self) -> str:
        """Label as used inside placeholders, e.g. "AWS Key" → "AWS_KEY"."""
        return self.value.upper().replace(" ", "_")

    @classmethod
    def from_label(cls, label: str) -> SensitiveDataType:
        for member in cls:
            if member.value == label:
                return member
        raise ValueError(f"unknown sensitive data type label: {label!r}")


def _new_id() -> str:
    return uuid.uuid4().hex


@dataclass(frozen=True, slots=True)
class DetectedMatch:
    """A single accepted match.  Span is half-open: text[start:end] == value."""
    data_type: SensitiveDataType = field(compare=False)
    value: str = field(compare=False)
    start: int = field(compare=False)
    end: int = field(compare=False)
    id: str = field(default_factory=_new_id)

    @property
    def span(self) -> tuple[int, int]:
        return (self.start, self.end)

    def overlaps(self, start: int, end: int) -> bool:
        return self.start < end and start < self.end


@dataclass(frozen=True, slots=True)
class ScanResult:
    """Result of scanning one piece of content."""
    original_content: str
    matches: tuple[DetectedMatch, ...]
    obfuscated_content: str
    timestamp: datetime

    @property
    def has_matches(self) -> bool:
        return bool(self.matches)

    @property
    def summary(self) -> str:
        """e.g. "Email (2), IP (1)", types in order of first detection."""
        if not self.matches:
            return ""
        counts = Counter(m.data_type for m in self.matches)
        return ", ".join(f"{t.label} ({n})" for t, n in counts.items())
