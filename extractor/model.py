# extractor/model.py

from __future__ import annotations
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, List, Mapping, Set, Tuple


class ExtractError(Exception):
    """Base error for the extractor."""


class SniffError(ExtractError):
    """Raised when the content-inspection tool cannot classify a file."""


@dataclass(frozen=True)
class RunConfig:
    """Effective run configuration (CLI flags merged over the JSON config)."""
    recursive: bool = False
    verbose: bool = False
    debug: bool = False
    extra_options: Mapping[str, str] = field(default_factory=dict)  # rule name -> option string
    report: str = ""  # optional CSV report path


@dataclass(frozen=True)
class FileIdentity:
    """Device + inode pair naming a file independently of its path."""
    device: int
    inode: int

    @classmethod
    def of(cls, path: Path) -> "FileIdentity":
        st = os.stat(path)
        return cls(device=st.st_dev, inode=st.st_ino)


@dataclass
class Counters:
    decompressed: int = 0
    failed: int = 0
    skipped_directories: int = 0

    @property
    def not_decompressed(self) -> int:
        return self.failed + self.skipped_directories


@dataclass(frozen=True)
class FormatRule:
    """One entry of the dispatch table."""
    name: str                 # key used for --NAME-opts and config "options"
    method: str               # label shown in messages (tool name)
    phrase: str               # substring expected in the sniffer output
    command: str              # external decompressor
    force_flag: str           # always passed, makes the tool overwrite existing output
    extension: str = ""       # canonical extension, "" when no rename is needed
    destination_flag: str = ""  # flag naming the output directory, e.g. unzip's -d

    @property
    def uses_rename(self) -> bool:
        return bool(self.extension)

    def matches(self, sniff_output: str) -> bool:
        return self.phrase in sniff_output


@dataclass
class FileResult:
    """Represents a row in the optional CSV report."""
    path: str
    method: str
    outcome: str      # one of: decompressed | failed | plain-text | unsupported | missing | skipped-directory
    detail: str = ""


@dataclass
class RunContext:
    """State owned by a single run, passed explicitly to each step."""
    config: RunConfig
    sniffer: Callable[[Path], str]
    rules: Tuple[FormatRule, ...]
    counters: Counters = field(default_factory=Counters)
    seen: Set[FileIdentity] = field(default_factory=set)
    seen_paths: Set[Path] = field(default_factory=set)  # absolute paths already handled
    results: List[FileResult] = field(default_factory=list)

    def options_for(self, rule: FormatRule) -> str:
        opts: Dict[str, str] = dict(self.config.extra_options)
        return opts.get(rule.name, "")
