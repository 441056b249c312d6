# extractor/rename.py

from __future__ import annotations
import os
import stat
from dataclasses import dataclass
from pathlib import Path


@dataclass
class StagedFile:
    """A file prepared for an extension-based decompressor.

    `work` is the path handed to the tool; `renamed` tells whether `work`
    is a temporary name we created by appending the canonical extension.
    """
    original: Path
    work: Path
    extension: str
    mode: int
    renamed: bool

    @property
    def output(self) -> Path:
        """Where the tool leaves its result: `work` without the extension."""
        return self.work.with_name(self.work.name[: -len(self.extension)])


def stage(path: Path, extension: str) -> StagedFile:
    """Give `path` the canonical extension if it lacks one.

    The file's permission bits are captured before any rename. An existing
    file at the temporary name is overwritten.

    Args:
        path (Path): File to decompress.
        extension (str): Canonical extension with its dot, e.g. ".gz".

    Returns:
        StagedFile: Description of the staged file.
    """
    mode = stat.S_IMODE(path.stat().st_mode)
    if path.name.endswith(extension) and len(path.name) > len(extension):
        return StagedFile(path, path, extension, mode, renamed=False)

    work = path.with_name(path.name + extension)
    os.replace(path, work)
    return StagedFile(path, work, extension, mode, renamed=True)


def finish(staged: StagedFile) -> Path:
    """Move the tool's output back to the original name and restore its mode.

    Returns:
        Path: The decompressed file.
    """
    result = staged.output
    if staged.renamed and result != staged.original and result.exists():
        os.replace(result, staged.original)
        result = staged.original
    if result.exists():
        os.chmod(result, staged.mode)
    return result


def restore(staged: StagedFile) -> None:
    """Put a staged file back under its original name, untouched."""
    if staged.renamed and staged.work.exists():
        os.replace(staged.work, staged.original)


def discard(staged: StagedFile) -> None:
    """Remove the temporary artifact left by a failed run.

    Files the caller supplied under their own name are never removed.
    """
    if not staged.renamed:
        return
    try:
        staged.work.unlink()
    except FileNotFoundError:
        pass
