# extractor/filetype.py

from __future__ import annotations
import enum
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional

from .model import FormatRule, SniffError

PLAIN_TEXT_PHRASE = "ASCII text"


class Kind(enum.Enum):
    """Outcome of classifying a sniffer description."""
    COMPRESSED = "compressed"
    PLAIN_TEXT = "plain-text"
    UNSUPPORTED = "unsupported"


@dataclass(frozen=True)
class Classification:
    kind: Kind
    rule: Optional[FormatRule] = None
    description: str = ""


# --- sniffer --------------------------------------------------------------------


def sniff_file(path: Path) -> str:
    """Describe a file's content using the `file` utility.

    Args:
        path (Path): File to inspect.

    Returns:
        str: The brief description printed by `file -b`, e.g.
        "gzip compressed data, was "a.txt", ...".

    Raises:
        SniffError: If `file` is not installed or exits with an error.
    """
    try:
        proc = subprocess.run(
            ["file", "-b", "--", str(path)],
            capture_output=True,
            text=True,
            check=False,
        )
    except FileNotFoundError as exc:
        raise SniffError("the 'file' utility is not installed") from exc
    if proc.returncode != 0:
        raise SniffError(proc.stderr.strip() or f"file exited with {proc.returncode}")
    return proc.stdout.strip()


# --- policy ---------------------------------------------------------------------


def classify(description: str, rules: Iterable[FormatRule]) -> Classification:
    """Map a sniffer description to a format rule, plain text, or unsupported.

    Matching is a case-sensitive substring test, tried in rule order. The
    plain-text check only applies when no compression rule matched.
    """
    for rule in rules:
        if rule.matches(description):
            return Classification(Kind.COMPRESSED, rule, description)
    if PLAIN_TEXT_PHRASE in description:
        return Classification(Kind.PLAIN_TEXT, None, description)
    return Classification(Kind.UNSUPPORTED, None, description)
