"""
errors subpackage: "set -e" error handling for short scripts.

Key primitives
--------------
- err() / must(): raise an error value if it is present
- close() / closing(): close a resource and raise on error
- panicf(): raise a formatted ScriptError
- wrapf(): prefix context onto a failure as it propagates
- ScriptConfig: logging + failure reporting config (env and YAML)
- configure_logging(): Rich console logging, optional log file
- run_script() / script(): turn an uncaught failure into a non-zero exit status
"""

from .config import ConfigError, ScriptConfig, load_config
from .guards import close, closing, err, format_message, must, panicf, wrapf
from .logging import configure_logging
from .reporter import report_failure, run_script, script
from .types import ExitStatusError, FailureRecord, ScriptError

__all__ = [
    "ConfigError",
    "ExitStatusError",
    "FailureRecord",
    "ScriptConfig",
    "ScriptError",
    "close",
    "closing",
    "configure_logging",
    "err",
    "format_message",
    "load_config",
    "must",
    "panicf",
    "report_failure",
    "run_script",
    "script",
    "wrapf",
]
