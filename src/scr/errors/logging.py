from __future__ import annotations

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

from .config import ScriptConfig

LOGGER_NAME = "scr"


def configure_logging(*, cfg: ScriptConfig, console: Optional[Console] = None) -> logging.Logger:
    """
    Configure Rich console logging, plus an optional plain log file.

    Calling this again replaces the handlers installed by a previous call.
    Library modules only log through ``logging.getLogger(__name__)``; this is the
    one place where handlers are attached.

    Returns
    -------
    logger
        The configured "scr" logger.

    Usage example
    -------------
        logger = configure_logging(cfg=ScriptConfig(console_level=logging.DEBUG))
        logger.info("Hello")
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = False

    console_handler = RichHandler(
        console=console if console is not None else Console(stderr=True),
        rich_tracebacks=cfg.rich_tracebacks,
        show_path=False,
    )
    console_handler.setLevel(cfg.console_level)
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(console_handler)

    if cfg.log_file is not None:
        cfg.log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(cfg.log_file, encoding="utf-8")
        file_handler.setLevel(cfg.file_level)
        file_handler.setFormatter(
            logging.Formatter(
                fmt="%(asctime)sZ | %(name)s | %(levelname)s | %(message)s",
                datefmt="%Y-%m-%dT%H:%M:%S",
            )
        )
        logger.addHandler(file_handler)

    logger.debug("Logging configured (console_level=%s, log_file=%s)", cfg.console_level, cfg.log_file)
    return logger
