"""Pastewatch: deterministic detection and redaction of sensitive data in text."""

from .types import SensitiveDataType, DetectedMatch, ScanResult
from .patterns import Rule, build_rules, get_rules, scan
from .redactor import Redactor, obfuscate
from .config import PastewatchConfig, load, load_config, load_from_json, load_from_yaml

__all__ = [
    "SensitiveDataType", "DetectedMatch", "ScanResult",
    "Rule", "build_rules", "get_rules", "scan",
    "Redactor", "obfuscate",
    "PastewatchConfig", "load", "load_config", "load_from_json", "load_from_yaml",
]
__version__ = "0.1.0"
