"""Redactor: the main API.  Scan, then replace matches with placeholders.

Usage:
    from pastewatch import Redactor

    redactor = Redactor()        # reusable, thread-safe

    result = redactor.scan("Email me at john@acme.com")
    print(result.obfuscated_content)   # "Email me at <EMAIL_1>"
    print(result.summary)              # "Email (1)"

Placeholders are numbered per type in order of appearance and exist only
in the returned text.  There is no way back to the original values.
"""

from __future__ import annotations
import logging
import threading
from collections import defaultdict
from datetime import datetime, timezone
from typing import Sequence

from .config import PastewatchConfig
from .patterns import scan as scan_text
from .types import DetectedMatch, ScanResult, SensitiveDataType

logger = logging.getLogger(__name__)


def make_placeholder(data_type: SensitiveDataType, number: int) -> str:
    return f"<{data_type.placeholder_name}_{number}>"


def obfuscate(text: str, matches: Sequence[DetectedMatch]) -> str:
    """Replace every match span in text with its placeholder.

    Numbering and substitution are separate passes: numbers follow
    left-to-right appearance per type, substitution runs right-to-left so
    earlier offsets stay valid.
    """
    if not matches:
        return text

    # Pass 1: number by appearance, per type
    counters: dict[SensitiveDataType, int] = defaultdict(int)
    numbers: dict[int, int] = {}
    for idx in sorted(range(len(matches)), key=lambda i: matches[i].start):
        data_type = matches[idx].data_type
        counters[data_type] += 1
        numbers[idx] = counters[data_type]

    # Pass 2: replace right-to-left to preserve offsets
    result = text
    for idx in sorted(range(len(matches)), key=lambda i: matches[i].start, reverse=True):
        match = matches[idx]
        token = make_placeholder(match.data_type, numbers[idx])
        result = result[:match.start] + token + result[match.end:]
    return result


class Redactor:
    """Scans content with the configured types and assembles ScanResults."""

    def __init__(self, config: PastewatchConfig | None = None) -> None:
        self.config = config or PastewatchConfig()
        self.obfuscation_count = 0
        self._count_lock = threading.Lock()

    def scan(self, text: str) -> ScanResult:
        """Scan and obfuscate text, regardless of the enabled flag."""
        matches = scan_text(text, self.config.is_type_enabled)
        return ScanResult(
            original_content=text,
            matches=tuple(matches),
            obfuscated_content=obfuscate(text, matches),
            timestamp=datetime.now(timezone.utc),
        )

    def process(self, text: str) -> ScanResult | None:
        """Scan text the way a clipboard watcher would.

        Returns None when there is nothing to do: empty text, redaction
        disabled, or no matches.
        """
        if not text:
            return None
        if not self.config.enabled:
            logger.debug("Redaction disabled, skipping %d chars", len(text))
            return None

        result = self.scan(text)
        if not result.has_matches:
            return None

        with self._count_lock:
            self.obfuscation_count += len(result.matches)
        logger.info("Obfuscated %s", result.summary)
        return result
