from __future__ import annotations

from dataclasses import dataclass, field
import logging
import os
from pathlib import Path
from typing import Any, Optional

import yaml


class ConfigError(ValueError):
    """Raised when runtime configuration is missing or invalid."""


_FILE_KEYS = ("log_level", "log_file", "rich_tracebacks", "exit_code")


def parse_level(raw: Any) -> Optional[int]:
    """Accept a level number or a name such as "debug"; None when unrecognised."""
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    text = str(raw).strip()
    if not text:
        return None
    if text.isdigit():
        return int(text)
    level = logging.getLevelName(text.upper())
    return level if isinstance(level, int) else None


def _parse_flag(raw: str) -> bool:
    return raw.strip() not in ("0", "false", "False", "no", "")


@dataclass(frozen=True)
class ScriptConfig:
    """
    Configuration for script logging and failure reporting.

    Parameters
    ----------
    console_level
        Logging level for the Rich console handler.
    log_file
        If set, a plain-text log of the run is appended to this file.
    file_level
        Logging level for the file handler.
    rich_tracebacks
        Render uncaught failures with Rich tracebacks instead of plain text.
    exit_code
        Process status used when a script fails with an uncaught exception.
    env_prefix
        Prefix for environment-variable overrides.

    Usage example
    -------------
        cfg = ScriptConfig(console_level=logging.DEBUG, log_file=Path("build.log"))
    """

    console_level: int = logging.WARNING
    log_file: Optional[Path] = None
    file_level: int = logging.DEBUG
    rich_tracebacks: bool = True
    exit_code: int = 1

    env_prefix: str = field(default="SCR_", repr=False)

    def __post_init__(self) -> None:
        if self.exit_code == 0:
            raise ConfigError("exit_code must be non-zero")

    @classmethod
    def from_env(cls, *, default: Optional["ScriptConfig"] = None) -> "ScriptConfig":
        """
        Create config from environment variables.

        Supported variables (prefix controlled by env_prefix on `default`):
        - <PFX>LOG_LEVEL: level name or number
        - <PFX>LOG_FILE: path
        - <PFX>RICH_TRACEBACKS: "1"/"0"
        - <PFX>EXIT_CODE: non-zero integer

        Invalid values fall back to the values of `default`.
        """
        base = default if default is not None else cls()
        pfx = base.env_prefix

        console_level = parse_level(os.getenv(f"{pfx}LOG_LEVEL", ""))
        if console_level is None:
            console_level = base.console_level

        log_file_raw = os.getenv(f"{pfx}LOG_FILE", "").strip()
        log_file = Path(log_file_raw) if log_file_raw else base.log_file

        rich_raw = os.getenv(f"{pfx}RICH_TRACEBACKS")
        rich_tracebacks = base.rich_tracebacks if rich_raw is None else _parse_flag(rich_raw)

        exit_code = base.exit_code
        exit_raw = os.getenv(f"{pfx}EXIT_CODE", "")
        if exit_raw.strip():
            try:
                exit_code = int(exit_raw)
            except ValueError:
                exit_code = base.exit_code
            if exit_code == 0:
                exit_code = base.exit_code

        return cls(
            console_level=console_level,
            log_file=log_file,
            file_level=base.file_level,
            rich_tracebacks=rich_tracebacks,
            exit_code=exit_code,
            env_prefix=pfx,
        )

    @classmethod
    def from_file(cls, path: Path, *, default: Optional["ScriptConfig"] = None) -> "ScriptConfig":
        """
        Load config from a YAML mapping.

        Keys: ``log_level``, ``log_file``, ``rich_tracebacks``, ``exit_code``.
        Missing keys keep the values of `default`.
        """
        base = default if default is not None else cls()
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
        if raw is None:
            return base
        if not isinstance(raw, dict):
            raise ConfigError(f"{path}: config must be a YAML mapping at top level.")

        unknown = sorted(set(raw) - set(_FILE_KEYS))
        if unknown:
            raise ConfigError(f"{path}: unknown config keys: {', '.join(map(str, unknown))}")

        console_level = base.console_level
        if "log_level" in raw:
            level = parse_level(raw["log_level"])
            if level is None:
                raise ConfigError(f"{path}: invalid log_level {raw['log_level']!r}")
            console_level = level

        log_file = base.log_file
        if raw.get("log_file"):
            log_file = Path(str(raw["log_file"]))

        rich_tracebacks = base.rich_tracebacks
        if "rich_tracebacks" in raw:
            if not isinstance(raw["rich_tracebacks"], bool):
                raise ConfigError(f"{path}: rich_tracebacks must be true or false")
            rich_tracebacks = raw["rich_tracebacks"]

        exit_code = base.exit_code
        if "exit_code" in raw:
            if isinstance(raw["exit_code"], bool) or not isinstance(raw["exit_code"], int):
                raise ConfigError(f"{path}: exit_code must be an integer")
            if raw["exit_code"] == 0:
                raise ConfigError(f"{path}: exit_code must be non-zero")
            exit_code = raw["exit_code"]

        return cls(
            console_level=console_level,
            log_file=log_file,
            file_level=base.file_level,
            rich_tracebacks=rich_tracebacks,
            exit_code=exit_code,
            env_prefix=base.env_prefix,
        )


def load_config(root: Path) -> ScriptConfig:
    """
    Load config from `root` if present, else from the environment.

    Search order:
    1) ``scr.yaml``
    2) ``.scr.yaml``

    Environment variables are applied on top of the file values.
    """

    for filename in ("scr.yaml", ".scr.yaml"):
        config_path = root / filename
        if config_path.exists():
            return ScriptConfig.from_env(default=ScriptConfig.from_file(config_path))
    return ScriptConfig.from_env()
