# extractor/report.py

from __future__ import annotations
import csv
from pathlib import Path
from typing import Iterable

from .model import Counters, FileResult

MAX_EXIT_STATUS = 255


def print_summary(counters: Counters) -> None:
    """Print the two closing summary lines to stdout."""
    print(f"Number of archives decompressed: {counters.decompressed}")
    print(f"Number of files NOT decompressed: {counters.not_decompressed}")


def exit_status(counters: Counters) -> int:
    """Exit code for a normal run: the number of files not decompressed.

    Capped at 255, the widest value a process exit status can carry.
    """
    return min(counters.not_decompressed, MAX_EXIT_STATUS)


def write_csv(out_path: Path, rows: Iterable[FileResult]) -> None:
    """Write per-file outcomes to a CSV file.

    Args:
        out_path (Path): Destination CSV file path.
        rows (Iterable[FileResult]): Outcome of each processed path.

    Returns:
        None
    """
    out_path.parent.mkdir(parents=True, exist_ok=True)
    with out_path.open("w", encoding="utf-8", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(["path", "method", "outcome", "detail"])
        for r in rows:
            writer.writerow([r.path, r.method, r.outcome, r.detail])
