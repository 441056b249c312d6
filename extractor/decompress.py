# extractor/decompress.py

"""
Invoke the external decompressor selected by a FormatRule.

Extension-based tools (gunzip, bunzip2, uncompress) get the file staged under
its canonical extension first; directory-based tools (unzip) are pointed at
the file's containing directory.
"""
from __future__ import annotations
import shlex
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from . import log
from .model import FormatRule
from .rename import discard, finish, restore, stage


@dataclass
class Outcome:
    ok: bool
    detail: str = ""
    output: Optional[Path] = None  # decompressed file, when the tool produces a single one


def build_command(rule: FormatRule, target: Path, options: str) -> List[str]:
    """Build the argv for `rule`'s tool acting on `target`."""
    argv = [rule.command, rule.force_flag, *shlex.split(options), str(target)]
    if rule.destination_flag:
        argv += [rule.destination_flag, str(target.parent)]
    return argv


def run_tool(argv: List[str], debug: bool = False) -> Outcome:
    """Run an external decompressor to completion and report success."""
    log.debug(debug, f"Running: {shlex.join(argv)}")
    try:
        proc = subprocess.run(
            argv,
            stdin=subprocess.DEVNULL,
            capture_output=True,
            text=True,
            check=False,
        )
    except FileNotFoundError:
        return Outcome(False, f"{argv[0]}: command not found")

    if proc.stdout.strip():
        log.debug(debug, proc.stdout.strip())
    if proc.returncode != 0:
        detail = proc.stderr.strip() or f"{argv[0]} exited with status {proc.returncode}"
        log.debug(debug, detail)
        return Outcome(False, detail)
    return Outcome(True)


def decompress(path: Path, rule: FormatRule, options: str, debug: bool = False) -> Outcome:
    """Decompress `path` in place with the tool described by `rule`.

    Args:
        path (Path): Compressed file, whatever its current name.
        rule (FormatRule): Format matched by the sniffer.
        options (str): Extra options passed after the rule's force flag,
            split shell-style.
        debug (bool): Emit trace lines on stderr.

    Returns:
        Outcome: Whether the tool succeeded, plus its error text if not.
    """
    if not rule.uses_rename:
        return run_tool(build_command(rule, path, options), debug)

    try:
        staged = stage(path, rule.extension)
    except OSError as exc:
        return Outcome(False, f"{type(exc).__name__}: {exc}")
    if staged.renamed:
        log.debug(debug, f"Renamed {staged.original} -> {staged.work}")

    outcome = run_tool(build_command(rule, staged.work, options), debug)
    if not outcome.ok:
        discard(staged)
        if staged.renamed:
            log.debug(debug, f"Removed {staged.work}")
        return outcome

    if not staged.output.exists():
        restore(staged)
        return Outcome(False, f"{rule.command} reported success but wrote no {staged.output}")
    if staged.renamed and staged.work.exists():
        discard(staged)
        log.debug(debug, f"Removed {staged.work}")

    try:
        result = finish(staged)
    except OSError as exc:
        return Outcome(False, f"{type(exc).__name__}: {exc}")
    log.debug(debug, f"Decompressed to {result}")
    return Outcome(True, output=result)
