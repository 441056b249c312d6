"""
Shared fixtures: archive builders, a content sniffer that mimics `file -b`,
and in-process stand-ins for the external decompressors.
"""

import bz2
import gzip
import shutil
import subprocess
import zipfile
import zlib
from pathlib import Path

import pytest

from extractor import decompress as decompress_module
from extractor.decompress import Outcome


def make_gzip(path, text="hello gzip\n"):
    path.write_bytes(gzip.compress(text.encode()))
    return path


def make_bzip2(path, text="hello bzip2\n"):
    path.write_bytes(bz2.compress(text.encode()))
    return path


def make_zip(path, member="inner.txt", text="hello zip\n"):
    with zipfile.ZipFile(path, "w") as zf:
        zf.writestr(member, text)
    return path


def fake_sniff(path):
    """Return `file -b` style descriptions based on magic bytes."""
    data = Path(path).read_bytes()
    if not data:
        return "empty"
    if data.startswith(b"\x1f\x8b"):
        return "gzip compressed data, from Unix"
    if data.startswith(b"BZh"):
        return "bzip2 compressed data, block size = 900k"
    if data.startswith(b"PK\x03\x04"):
        return "Zip archive data, at least v2.0 to extract, compression method=deflate"
    if data.startswith(b"\x1f\x9d"):
        return "compress'd data 16 bits"
    try:
        data.decode("ascii")
    except UnicodeDecodeError:
        return "data"
    return "ASCII text"


def _emulate(argv):
    """Decompress like gunzip/bunzip2/unzip would, using the stdlib codecs.

    Existing output is only replaced when the force flag is given; `-k`
    keeps the input and `-c` writes no file, as the real tools do.
    """
    tool = argv[0]
    if tool == "unzip":
        archive = Path(argv[argv.index("-d") - 1])
        dest = Path(argv[argv.index("-d") + 1])
        options = argv[1 : argv.index("-d") - 1]
        try:
            with zipfile.ZipFile(archive) as zf:
                if "-o" not in options and any((dest / n).exists() for n in zf.namelist()):
                    return Outcome(False, "replace? [y]es, [n]o: NULL (EOF or read error)")
                zf.extractall(dest)
        except (OSError, zipfile.BadZipFile) as exc:
            return Outcome(False, str(exc))
        return Outcome(True)

    target = Path(argv[-1])
    options = argv[1:-1]
    ext, opener = {"gunzip": (".gz", gzip.open), "bunzip2": (".bz2", bz2.open)}[tool]
    if not target.name.endswith(ext):
        return Outcome(False, f"{tool}: {target}: unknown suffix -- ignored")
    out = target.with_name(target.name[: -len(ext)])
    try:
        with opener(target, "rb") as src:
            data = src.read()
    except (OSError, EOFError, zlib.error) as exc:
        return Outcome(False, str(exc))
    if "-c" in options:
        return Outcome(True)
    if out.exists() and "-f" not in options:
        return Outcome(False, f"{tool}: {out} already exists")
    out.write_bytes(data)
    shutil.copymode(target, out)
    if "-k" not in options:
        target.unlink()
    return Outcome(True)


@pytest.fixture
def fake_tools(monkeypatch):
    """Replace the external decompressors with in-process equivalents.

    Yields the list of argv vectors the code tried to run.
    """
    calls = []

    def run_tool(argv, debug=False):
        calls.append(list(argv))
        return _emulate(argv)

    monkeypatch.setattr(decompress_module, "run_tool", run_tool)
    yield calls


@pytest.fixture
def archive_tree(tmp_path):
    """Mixed archives with correct, wrong and missing extensions, one format per directory."""
    root = tmp_path / "test_files"
    gz_dir = root / "gunzip_files"
    bz_dir = root / "bunzip2_files"
    zip_dir = root / "unzip_files"
    for d in (gz_dir, bz_dir, zip_dir):
        d.mkdir(parents=True)

    make_gzip(gz_dir / "file1_no_ext", "file1\n")
    make_gzip(gz_dir / "file2.txt.gz", "file2\n")
    make_bzip2(bz_dir / "file3.tar.z", "file3\n")
    make_bzip2(bz_dir / "file4.txt.bz2", "file4\n")
    make_zip(zip_dir / "file5_wrong.txt", "file5.txt", "file5\n")
    make_zip(zip_dir / "file6.zip", "file6.txt", "file6\n")
    return root


def have_tool(name):
    return shutil.which(name) is not None


def make_compress(path, text="hello compress\n"):
    """Create a .Z file with the `compress` tool (caller must check it exists)."""
    src = path.with_name(path.name + ".src")
    src.write_text(text)
    with open(path, "wb") as out:
        subprocess.run(["compress", "-c", "-f", str(src)], stdout=out, check=False)
    src.unlink()
    return path
