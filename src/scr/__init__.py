"""
scr: helpers for short automation scripts that simply raise on errors.

Similar to shell scripting with the "set -e" option.

Usage example
-------------
    import re
    import scr

    @scr.script
    def main() -> None:
        # grep "abc" example
        pattern = re.compile("abc")
        with scr.closing(open("example", encoding="utf-8")) as f:
            for line in f:
                if pattern.search(line):
                    print(line, end="")
        scr.run("git", "status")

    if __name__ == "__main__":
        main()
"""

from .errors import (
    ConfigError,
    ExitStatusError,
    FailureRecord,
    ScriptConfig,
    ScriptError,
    close,
    closing,
    configure_logging,
    err,
    format_message,
    load_config,
    must,
    panicf,
    report_failure,
    run_script,
    script,
    wrapf,
)
from .process import Cmd, command, run
from .version import __version__

__all__ = [
    "Cmd",
    "ConfigError",
    "ExitStatusError",
    "FailureRecord",
    "ScriptConfig",
    "ScriptError",
    "__version__",
    "close",
    "closing",
    "command",
    "configure_logging",
    "err",
    "format_message",
    "load_config",
    "must",
    "panicf",
    "report_failure",
    "run",
    "run_script",
    "script",
    "wrapf",
]
