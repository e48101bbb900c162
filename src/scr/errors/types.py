from __future__ import annotations

from dataclasses import dataclass, field
import signal
import traceback as _traceback
from typing import Optional, Sequence


class ScriptError(Exception):
    """Failure raised by `panicf` and `wrapf`."""


class ExitStatusError(ScriptError):
    """
    A subprocess ran to completion but reported a failure status.

    The message mirrors what a shell reports: ``exit status N`` for a normal
    exit, ``signal: killed`` (the lower-cased signal description) when the child
    was terminated by a signal.

    Usage example
    -------------
        try:
            scr.run("sh", "-c", "exit 3")
        except ExitStatusError as exc:
            assert exc.returncode == 3
    """

    def __init__(self, returncode: int, argv: Optional[Sequence[str]] = None) -> None:
        self.returncode = returncode
        self.argv = list(argv) if argv is not None else []
        super().__init__(_describe_status(returncode))


def _describe_status(returncode: int) -> str:
    if returncode >= 0:
        return f"exit status {returncode}"
    try:
        description = signal.strsignal(-returncode)
    except ValueError:
        description = None
    if not description:
        description = f"signal {-returncode}"
    return f"signal: {description.lower()}"


def _cause_chain(exc: BaseException) -> tuple[str, ...]:
    chain: list[str] = []
    seen: set[int] = set()
    current: Optional[BaseException] = exc
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        chain.append(f"{type(current).__name__}: {current}")
        current = current.__cause__ or current.__context__
    return tuple(chain)


@dataclass(frozen=True)
class FailureRecord:
    """
    A structured record of an uncaught script failure.

    Usage example
    -------------
        rec = FailureRecord.from_exception(exc)
        print(rec.render())
    """
    message: str
    exc_type: str
    traceback: str = ""
    cause_chain: tuple[str, ...] = field(default_factory=tuple)

    @staticmethod
    def from_exception(exc: BaseException) -> "FailureRecord":
        tb = "".join(_traceback.format_exception(type(exc), exc, exc.__traceback__))
        return FailureRecord(
            message=str(exc),
            exc_type=type(exc).__name__,
            traceback=tb,
            cause_chain=_cause_chain(exc),
        )

    def render(self) -> str:
        """Render the record as plain text: traceback first, then a one-line summary."""
        lines = [self.traceback.rstrip()] if self.traceback else []
        lines.append(f"{self.exc_type}: {self.message}")
        return "\n".join(lines)
