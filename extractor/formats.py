# extractor/formats.py

"""
Dispatch table of supported compression formats.

Order matters: the first rule whose phrase appears in the sniffer output wins.
Adding a format means appending a FormatRule here; the CLI options and the
dispatcher are driven by this table.
"""
from __future__ import annotations
from typing import Tuple

from .model import FormatRule


GZIP = FormatRule(
    name="gunzip",
    method="gunzip",
    phrase="gzip compressed",
    command="gunzip",
    force_flag="-f",
    extension=".gz",
)

BZIP2 = FormatRule(
    name="bunzip2",
    method="bunzip2",
    phrase="bzip2 compressed",
    command="bunzip2",
    force_flag="-f",
    extension=".bz2",
)

ZIP = FormatRule(
    name="unzip",
    method="unzip",
    phrase="Zip archive",
    command="unzip",
    force_flag="-o",
    destination_flag="-d",
)

COMPRESS = FormatRule(
    name="compress",
    method="uncompress",
    phrase="compress'd",
    command="uncompress",
    force_flag="-f",
    extension=".Z",
)

FORMAT_RULES: Tuple[FormatRule, ...] = (GZIP, BZIP2, ZIP, COMPRESS)
