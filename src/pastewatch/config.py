"""JSON/YAML/dict config loader for pastewatch.

The on-disk format is the JSON file the clipboard app reads from
~/.config/pastewatch/config.json:

    {
      "enabled": true,
      "enabledTypes": ["Email", "Phone", "IP", "AWS Key", "API Key",
                       "UUID", "DB Connection", "SSH Key", "JWT", "Card"],
      "showNotifications": true,
      "soundEnabled": false
    }

The same keys may be given in YAML, in snake_case, or nested under a
"pastewatch" key when embedded in a larger config.
"""

from __future__ import annotations
import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .types import SensitiveDataType

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path.home() / ".config" / "pastewatch" / "config.json"


def _all_labels() -> list[str]:
    return [t.label for t in SensitiveDataType]


@dataclass
class PastewatchConfig:
    """Configuration consumed by the Redactor."""
    enabled: bool = True
    enabled_types: list[str] = field(default_factory=_all_labels)
    show_notifications: bool = True
    sound_enabled: bool = False

    def is_type_enabled(self, data_type: SensitiveDataType) -> bool:
        return data_type.label in self.enabled_types

    def to_dict(self) -> dict[str, Any]:
        """camelCase dict, as written to disk."""
        return {
            "enabled": self.enabled,
            "enabledTypes": list(self.enabled_types),
            "showNotifications": self.show_notifications,
            "soundEnabled": self.sound_enabled,
        }

    def save(self, path: str | Path | None = None) -> None:
        """Write the config as JSON.  I/O errors propagate."""
        path = Path(path) if path is not None else config_path()
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(self.to_dict(), indent=2) + "\n")


def _get(data: dict[str, Any], camel: str, snake: str, default: Any) -> Any:
    if camel in data:
        return data[camel]
    return data.get(snake, default)


def _flag(name: str, value: Any) -> bool:
    if not isinstance(value, bool):
        raise ValueError(f"{name} must be a boolean, got {value!r}")
    return value


def load_config(data: dict[str, Any]) -> PastewatchConfig:
    """Normalize a config dict (from JSON, YAML or inline).

    Raises ValueError for wrongly typed values instead of coercing them.
    """
    # Support nested under "pastewatch" key or flat
    if "pastewatch" in data:
        data = data["pastewatch"]
    if not isinstance(data, dict):
        raise ValueError(f"config must be a mapping, got {type(data).__name__}")

    enabled_types = _get(data, "enabledTypes", "enabled_types", None)
    if enabled_types is None:
        enabled_types = _all_labels()
    elif not (isinstance(enabled_types, list)
              and all(isinstance(t, str) for t in enabled_types)):
        raise ValueError(f"enabledTypes must be a list of labels, got {enabled_types!r}")

    return PastewatchConfig(
        enabled=_flag("enabled", data.get("enabled", True)),
        enabled_types=list(enabled_types),
        show_notifications=_flag(
            "showNotifications", _get(data, "showNotifications", "show_notifications", True)),
        sound_enabled=_flag(
            "soundEnabled", _get(data, "soundEnabled", "sound_enabled", False)),
    )


def load_from_json(path: str | Path) -> PastewatchConfig:
    """Load config from a JSON file."""
    with open(path) as f:
        return load_config(json.load(f))


def load_from_yaml(path: str | Path) -> PastewatchConfig:
    """Load config from a YAML file."""
    import yaml
    with open(path) as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"invalid YAML in {path}: {e}") from e
    return load_config(data or {})


def config_path() -> Path:
    """Config file location, overridable with PASTEWATCH_CONFIG."""
    env = os.environ.get("PASTEWATCH_CONFIG")
    return Path(env).expanduser() if env else DEFAULT_CONFIG_PATH


def load(path: str | Path | None = None) -> PastewatchConfig:
    """Load the config file, falling back to defaults.

    A missing file gives defaults.  An unreadable or malformed file also
    gives defaults, with a warning.
    """
    path = Path(path).expanduser() if path is not None else config_path()
    if not path.exists():
        return PastewatchConfig()

    try:
        if path.suffix in (".yaml", ".yml"):
            return load_from_yaml(path)
        return load_from_json(path)
    except (OSError, ValueError, TypeError, AttributeError) as e:
        logger.warning("Ignoring unreadable config %s: %s", path, e)
        return PastewatchConfig()
