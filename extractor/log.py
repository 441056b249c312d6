# extractor/log.py

"""Prefixed diagnostics on stderr; per-file lines go to stdout via print."""
from __future__ import annotations
import sys


def debug(enabled: bool, msg: str) -> None:
    if enabled:
        print(f"[DEBUG] {msg}", file=sys.stderr, flush=True)


def warn(msg: str) -> None:
    print(f"[WARN] {msg}", file=sys.stderr, flush=True)


def error(msg: str) -> None:
    print(f"[ERR] {msg}", file=sys.stderr, flush=True)
