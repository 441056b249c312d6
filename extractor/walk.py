# extractor/walk.py

from __future__ import annotations
import fnmatch
from pathlib import Path
from typing import List

GLOB_CHARS = "*?["


def iter_files(root: Path) -> List[Path]:
    """List all regular files beneath a directory, at any depth.

    Args:
        root (Path): Directory to scan.

    Returns:
        List[Path]: Sorted paths of each regular file found.
    """
    return sorted(p for p in root.rglob("*") if p.is_file())


def match_siblings(operand: Path) -> List[Path]:
    """List regular files next to `operand` whose names match its base name.

    The base name is used as a glob pattern and only the operand's own
    directory is searched, not its subdirectories.
    """
    parent = operand.parent
    if not parent.is_dir():
        return []
    pattern = operand.name
    return sorted(
        p for p in parent.iterdir()
        if p.is_file() and fnmatch.fnmatchcase(p.name, pattern)
    )


def expand_operand(operand: Path, recursive: bool) -> List[Path]:
    """Expand one command-line operand into the files to process.

    Directories yield nothing unless `recursive` is set; the caller reports
    them as skipped. A recursive operand without glob characters that does
    not exist is returned as is, so it is reported as a missing file.
    Results are materialised so files created while decompressing are not
    picked up by the same walk.
    """
    if operand.is_dir():
        return iter_files(operand) if recursive else []
    if recursive:
        if not operand.exists() and not any(c in operand.name for c in GLOB_CHARS):
            return [operand]
        return match_siblings(operand)
    return [operand]
