# extractor/config.py

from __future__ import annotations
import argparse
import json
from pathlib import Path
from typing import Any, Dict, Iterable, Optional

from . import log
from .model import FormatRule, RunConfig

DEFAULT_CONFIG_NAME = "extract.json"


def load_config(path: Optional[Path]) -> Dict[str, Any]:
    """Load configuration from a JSON file.

    Args:
        path (Path | None): Path to the JSON configuration file.

    Returns:
        Dict[str, Any]: Configuration dictionary. Empty if no file is provided or read fails.
    """
    if not path:
        return {}
    try:
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as exc:
        log.warn(f"Failed to read config {path}: {exc}")
        return {}
    if not isinstance(data, dict):
        log.warn(f"Ignoring config {path}: top level must be an object")
        return {}
    return data


def resolve_config_path(arg: Optional[str], search_dir: Path) -> Optional[Path]:
    """Pick the explicit --config file, else `extract.json` in `search_dir` if present."""
    if arg:
        return Path(arg)
    default = search_dir / DEFAULT_CONFIG_NAME
    return default if default.exists() else None


def build_run_config(
    args: argparse.Namespace,
    cfg: Dict[str, Any],
    rules: Iterable[FormatRule],
) -> RunConfig:
    """Merge CLI flags over the JSON config, giving precedence to CLI flags."""
    cfg_options = cfg.get("options") or {}
    if not isinstance(cfg_options, dict):
        log.warn("Ignoring config 'options': expected an object")
        cfg_options = {}

    extra: Dict[str, str] = {}
    known = set()
    for rule in rules:
        known.add(rule.name)
        cli_value = getattr(args, f"{rule.name}_opts", None)
        if cli_value is not None:
            extra[rule.name] = cli_value
        elif rule.name in cfg_options:
            extra[rule.name] = str(cfg_options[rule.name])

    for name in sorted(set(cfg_options) - known):
        log.warn(f"Ignoring options for unknown format: {name}")

    return RunConfig(
        recursive=bool(args.recursive or cfg.get("recursive", False)),
        verbose=bool(args.verbose or cfg.get("verbose", False)),
        debug=bool(args.debug or cfg.get("debug", False)),
        extra_options=extra,
        report=args.report or str(cfg.get("report", "") or ""),
    )
