"""CLI interface for pastewatch.

Usage:
    # Redact text (stdin: text, stdout: redacted text)
    echo 'Mail john@acme.com' | python -m pastewatch.cli redact

    # Scan text (stdin: text, stdout: JSON with matches and redacted text)
    echo 'Mail john@acme.com' | python -m pastewatch.cli scan

    # Only look for some types
    python -m pastewatch.cli --types Email,Phone redact < notes.txt

    # List known types and their placeholders
    python -m pastewatch.cli types
"""

from __future__ import annotations
import argparse
import json
import logging
import sys

from . import config as config_mod
from .config import PastewatchConfig
from .redactor import Redactor, make_placeholder
from .types import SensitiveDataType


def _build_config(args: argparse.Namespace, parser: argparse.ArgumentParser) -> PastewatchConfig:
    cfg = config_mod.load(args.config)
    if args.types:
        labels = [t.strip() for t in args.types.split(",") if t.strip()]
        if not labels:
            parser.error("--types needs at least one type label")
        for label in labels:
            try:
                SensitiveDataType.from_label(label)
            except ValueError as e:
                parser.error(str(e))
        cfg.enabled_types = labels
    return cfg


def cmd_scan(args: argparse.Namespace, cfg: PastewatchConfig) -> None:
    """Scan stdin and emit matches plus redacted text as JSON."""
    text = sys.stdin.read()
    result = Redactor(cfg).scan(text)

    output = {
        "text": result.obfuscated_content,
        "matches": [
            {
                "type": m.data_type.label,
                "value": m.value,
                "start": m.start,
                "end": m.end,
            }
            for m in result.matches
        ],
        "summary": result.summary,
    }
    json.dump(output, sys.stdout, ensure_ascii=False)
    sys.stdout.write("\n")


def cmd_redact(args: argparse.Namespace, cfg: PastewatchConfig) -> None:
    """Redact stdin to stdout.  Disabled config passes text through."""
    text = sys.stdin.read()
    result = Redactor(cfg).process(text)
    sys.stdout.write(result.obfuscated_content if result else text)


def cmd_types(args: argparse.Namespace, cfg: PastewatchConfig) -> None:
    for t in SensitiveDataType:
        mark = "*" if cfg.is_type_enabled(t) else " "
        sys.stdout.write(f"{mark} {t.label:<14} {make_placeholder(t, 1)}\n")


def cmd_config(args: argparse.Namespace, cfg: PastewatchConfig) -> None:
    """Print the effective config as JSON."""
    json.dump(cfg.to_dict(), sys.stdout, indent=2)
    sys.stdout.write("\n")


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="pastewatch",
        description="Detect and redact sensitive data in text",
    )
    parser.add_argument("--config", default=None, help="Config file (JSON or YAML)")
    parser.add_argument("--types", default="", help="Comma-separated type labels to enable")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging to stderr")

    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("scan", help="Scan text (stdin), print JSON")
    sub.add_parser("redact", help="Redact text (stdin)")
    sub.add_parser("types", help="List detectable types")
    sub.add_parser("config", help="Print effective config")

    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            stream=sys.stderr,
            format="%(asctime)s %(name)s %(levelname)s %(message)s",
        )

    cfg = _build_config(args, parser)

    cmds = {
        "scan": cmd_scan,
        "redact": cmd_redact,
        "types": cmd_types,
        "config": cmd_config,
    }
    cmds[args.command](args, cfg)


if __name__ == "__main__":
    main()
