from __future__ import annotations

import functools
import logging
import sys
from typing import Any, Callable, NoReturn, Optional, TypeVar

from rich.console import Console
from rich.traceback import Traceback

from .config import ScriptConfig
from .logging import configure_logging
from .types import FailureRecord

F = TypeVar("F", bound=Callable[..., Any])

INTERRUPTED_EXIT_CODE = 130


def report_failure(
    exc: BaseException,
    *,
    cfg: ScriptConfig,
    logger: logging.Logger,
    console: Optional[Console] = None,
) -> FailureRecord:
    """
    Log an uncaught failure and print its traceback to stderr.

    The one-line message goes to the logger at ERROR, the full traceback at DEBUG
    (so it lands in the log file). The console gets a Rich traceback, or the
    plain-text record when `cfg.rich_tracebacks` is off.
    """
    rec = FailureRecord.from_exception(exc)
    logger.error("Script failed: %s (%s)", rec.message, rec.exc_type)
    logger.debug("Traceback:\n%s", rec.traceback)

    out = console if console is not None else Console(stderr=True)
    if cfg.rich_tracebacks:
        out.print(Traceback.from_exception(type(exc), exc, exc.__traceback__))
    else:
        out.print(rec.render(), markup=False, highlight=False)
    return rec


def run_script(
    fn: Callable[..., Any],
    *args: Any,
    cfg: Optional[ScriptConfig] = None,
    console: Optional[Console] = None,
    **kwargs: Any,
) -> int:
    """
    Call `fn` with "set -e" semantics and return a process exit status.

    Returns
    -------
    status
        0 on success, `cfg.exit_code` on an uncaught exception, the SystemExit code
        if `fn` exits explicitly, 130 on KeyboardInterrupt.

    Usage example
    -------------
        sys.exit(run_script(main, cfg=ScriptConfig.from_env()))
    """
    cfg = cfg if cfg is not None else ScriptConfig.from_env()
    logger = configure_logging(cfg=cfg, console=console)
    try:
        fn(*args, **kwargs)
    except SystemExit as exc:
        return _system_exit_status(exc)
    except KeyboardInterrupt:
        logger.warning("Interrupted")
        return INTERRUPTED_EXIT_CODE
    except Exception as exc:
        report_failure(exc, cfg=cfg, logger=logger, console=console)
        return cfg.exit_code
    return 0


def _system_exit_status(exc: SystemExit) -> int:
    code = exc.code
    if code is None:
        return 0
    if isinstance(code, int):
        return code
    print(code, file=sys.stderr)
    return 1


def script(fn: F) -> Callable[..., NoReturn]:
    """
    Decorator: run `fn` through `run_script` and exit the interpreter with its status.

    Usage example
    -------------
        @scr.script
        def main() -> None:
            scr.run("git", "status")

        if __name__ == "__main__":
            main()
    """

    @functools.wraps(fn)
    def wrapper(*args: Any, **kwargs: Any) -> NoReturn:
        sys.exit(run_script(fn, *args, **kwargs))

    return wrapper
