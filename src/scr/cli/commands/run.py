"""`scr run` command implementation."""

from __future__ import annotations

import argparse
import dataclasses
import runpy
import sys
from pathlib import Path

from scr.errors import ConfigError, load_config, run_script
from scr.errors.config import ScriptConfig, parse_level


def add_subparser(subparsers: argparse._SubParsersAction) -> None:
    """Register the `run` command."""
    parser = subparsers.add_parser("run", help="Run a Python script; any uncaught error stops it.")
    parser.add_argument("script", help="Path to the Python script.")
    parser.add_argument("script_args", nargs=argparse.REMAINDER, help="Arguments passed to the script.")
    parser.add_argument("--log-level", default=None, help="Console log level (e.g. DEBUG, INFO).")
    parser.add_argument("--log-file", default=None, help="Append a plain-text log to this file.")
    parser.add_argument(
        "--no-rich-tracebacks",
        action="store_true",
        help="Print plain tracebacks on failure.",
    )
    parser.set_defaults(command="run")


def _resolve_config(args: argparse.Namespace) -> ScriptConfig:
    cfg = load_config(Path.cwd())
    overrides: dict[str, object] = {}
    if getattr(args, "log_level", None):
        level = parse_level(args.log_level)
        if level is None:
            raise ConfigError(f"Invalid --log-level: {args.log_level!r}")
        overrides["console_level"] = level
    if getattr(args, "log_file", None):
        overrides["log_file"] = Path(args.log_file)
    if getattr(args, "no_rich_tracebacks", False):
        overrides["rich_tracebacks"] = False
    return dataclasses.replace(cfg, **overrides)


def _run_path(path: Path, argv: list[str]) -> None:
    saved_argv = sys.argv
    sys.argv = [str(path), *argv]
    try:
        runpy.run_path(str(path), run_name="__main__")
    finally:
        sys.argv = saved_argv


def run(args: argparse.Namespace) -> int:
    """Execute the `run` command and return the script's exit status."""
    path = Path(args.script)
    cfg = _resolve_config(args)
    return run_script(_run_path, path, list(args.script_args or []), cfg=cfg)
