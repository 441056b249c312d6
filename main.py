# main.py

"""
Orchestrator: parse flags (CLI + JSON), expand operands, sniff each file,
decompress it in place with the matching external tool, print a summary.

The exit status is the number of files NOT decompressed; usage errors exit
with EXIT_USAGE instead.
"""
from __future__ import annotations
import argparse
import sys
from pathlib import Path
from typing import Callable, List, NoReturn, Optional, Sequence

from extractor import log
from extractor.config import build_run_config, load_config, resolve_config_path
from extractor.decompress import decompress
from extractor.filetype import Kind, classify, sniff_file
from extractor.formats import FORMAT_RULES
from extractor.model import FileIdentity, FileResult, RunConfig, RunContext, SniffError
from extractor.report import exit_status, print_summary, write_csv
from extractor.walk import expand_operand

EXIT_USAGE = 64


class _ArgumentParser(argparse.ArgumentParser):
    """ArgumentParser whose usage errors use EXIT_USAGE."""

    def error(self, message: str) -> NoReturn:
        self.print_usage(sys.stderr)
        log.error(message)
        raise SystemExit(EXIT_USAGE)


def build_argparser() -> argparse.ArgumentParser:
    p = _ArgumentParser(
        prog="extract",
        description="Decompress files in place, detecting the format from file content.",
        allow_abbrev=False,
    )
    p.add_argument("-r", dest="recursive", action="store_true",
                   help="Unpack directories recursively.")
    p.add_argument("-v", dest="verbose", action="store_true",
                   help="Print each file as it is decompressed.")
    p.add_argument("-x", dest="debug", action="store_true",
                   help="Print debug trace on stderr.")
    for rule in FORMAT_RULES:
        p.add_argument(f"--{rule.name}-opts", dest=f"{rule.name}_opts", metavar="OPTS",
                       help=f"Extra options for {rule.command}, passed after {rule.force_flag}.")
    p.add_argument("--config", type=str, help="Optional JSON config (flags override).")
    p.add_argument("--report", type=str, help="Write a CSV of per-file outcomes.")
    p.add_argument("files", nargs="*", metavar="file", help="Files or directories to decompress.")
    return p


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse CLI arguments, exiting with EXIT_USAGE when no operands are given."""
    parser = build_argparser()
    args = parser.parse_args(argv)
    if not args.files:
        log.error("no files provided")
        parser.print_help(sys.stderr)
        raise SystemExit(EXIT_USAGE)
    return args


def _record(ctx: RunContext, path: Path, method: str, outcome: str, detail: str = "") -> None:
    ctx.results.append(FileResult(str(path), method, outcome, detail))


def _mark_seen(ctx: RunContext, path: Path) -> None:
    """Keep a decompressed result from being picked up again by a later operand."""
    ctx.seen_paths.add(path.resolve())
    try:
        ctx.seen.add(FileIdentity.of(path))
    except OSError:
        log.debug(ctx.config.debug, f"Output not found: {path}")


def process_file(ctx: RunContext, path: Path) -> None:
    """Sniff one file and decompress it if its format is supported.

    Every failure is counted and reported; nothing here stops the run.
    """
    cfg = ctx.config
    counters = ctx.counters

    key = path.resolve()
    if key in ctx.seen_paths:
        log.debug(cfg.debug, f"Already processed, skipping: {path}")
        return

    try:
        identity = FileIdentity.of(path)
    except OSError as exc:
        print(f"Error: file not found: {path}")
        log.debug(cfg.debug, f"{type(exc).__name__}: {exc}")
        counters.failed += 1
        _record(ctx, path, "", "missing", str(exc))
        return

    if identity in ctx.seen:
        log.debug(cfg.debug, f"Already processed, skipping: {path}")
        return
    ctx.seen.add(identity)
    ctx.seen_paths.add(key)

    try:
        description = ctx.sniffer(path)
    except SniffError as exc:
        print(f"Error: cannot determine file type: {path}")
        log.debug(cfg.debug, str(exc))
        counters.failed += 1
        _record(ctx, path, "", "failed", str(exc))
        return
    log.debug(cfg.debug, f"{path}: {description}")

    result = classify(description, ctx.rules)
    if result.kind is Kind.PLAIN_TEXT:
        print(f"Skipping already decompressed file: {path}")
        counters.failed += 1
        _record(ctx, path, "", result.kind.value, description)
        return
    if result.kind is Kind.UNSUPPORTED:
        print(f"Skipping: Unsupported compression type: {path}")
        counters.failed += 1
        _record(ctx, path, "", result.kind.value, description)
        return

    rule = result.rule
    if cfg.verbose:
        print(f"Decompressing ({rule.method}): {path}")
    outcome = decompress(path, rule, ctx.options_for(rule), cfg.debug)
    if outcome.ok:
        counters.decompressed += 1
        if outcome.output is not None:
            _mark_seen(ctx, outcome.output)
        _record(ctx, path, rule.method, "decompressed")
    else:
        print(f"Error decompressing ({rule.method}): {path}")
        counters.failed += 1
        _record(ctx, path, rule.method, "failed", outcome.detail)


def process_operand(ctx: RunContext, operand: Path) -> None:
    """Expand one operand and process each file it names."""
    cfg = ctx.config
    if operand.is_dir() and not cfg.recursive:
        print(f"Skipping directory: {operand} (use -r for recursive unpacking)")
        ctx.counters.skipped_directories += 1
        _record(ctx, operand, "", "skipped-directory")
        return

    paths = expand_operand(operand, cfg.recursive)
    if not paths:
        log.debug(cfg.debug, f"No files found for {operand}")
    for path in paths:
        process_file(ctx, path)


def run(cfg: RunConfig, operands: List[str], sniffer: Callable[[Path], str] = sniff_file) -> RunContext:
    """Process every operand in order and return the finished run context."""
    ctx = RunContext(config=cfg, sniffer=sniffer, rules=FORMAT_RULES)
    log.debug(cfg.debug, f"Config: {cfg}")
    for operand in operands:
        process_operand(ctx, Path(operand))
    return ctx


def main(argv: Optional[Sequence[str]] = None, sniffer: Callable[[Path], str] = sniff_file) -> int:
    """Main orchestration function.

    Returns:
        int: Exit code (number of files not decompressed).
    """
    args = parse_args(argv)
    config_path = resolve_config_path(args.config, Path.cwd())
    cfg = build_run_config(args, load_config(config_path), FORMAT_RULES)

    ctx = run(cfg, args.files, sniffer)

    if cfg.report:
        write_csv(Path(cfg.report), ctx.results)
        log.debug(cfg.debug, f"Report: {Path(cfg.report).resolve()}")
    print_summary(ctx.counters)
    return exit_status(ctx.counters)


if __name__ == "__main__":
    raise SystemExit(main())
