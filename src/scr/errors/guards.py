from __future__ import annotations

from contextlib import contextmanager
import logging
import re
from typing import Any, Iterator, NoReturn, Optional, Protocol, TypeVar

from .types import ScriptError

T = TypeVar("T")
C = TypeVar("C", bound="Closable")

logger = logging.getLogger(__name__)

_VERB = re.compile(r"%(%|v)")


class Closable(Protocol):
    def close(self) -> Any: ...


def format_message(fmt: str, *args: Any) -> str:
    """
    Format `fmt` with printf-style `args`.

    ``%v`` is accepted as an alias of ``%s``. ``%%`` stays a literal percent sign.

    Usage example
    -------------
        format_message("%v: %d", "count", 3)  # "count: 3"
        format_message("disk 100% full")      # "disk 100% full"
    """
    try:
        return _VERB.sub(lambda m: "%%" if m.group(1) == "%" else "%s", fmt) % args
    except (TypeError, ValueError):
        # Mismatched verbs never hide the message: keep the raw text and list the arguments.
        if not args:
            return fmt
        return f"{fmt}%!(EXTRA {', '.join(str(a) for a in args)})"


def err(error: Optional[BaseException]) -> None:
    """
    Raise `error` if it is not None.

    Usage example
    -------------
        scr.err(validate(path))
    """
    if error is None:
        return
    if not isinstance(error, BaseException):
        raise TypeError(f"expected an exception or None, got {type(error).__name__}")
    raise error


def must(value: T, error: Optional[BaseException] = None) -> T:
    """
    Raise `error` if it is not None, otherwise return `value` unchanged.

    Usage example
    -------------
        data = scr.must(*read_with_status(path))
    """
    err(error)
    return value


def close(resource: Closable) -> None:
    """
    Close `resource` and raise on error.

    ``close()`` may raise, or return an exception instance; both are raised here.
    """
    result = resource.close()
    if isinstance(result, BaseException):
        logger.debug("close() of %r returned %s", resource, type(result).__name__)
        raise result


@contextmanager
def closing(resource: C) -> Iterator[C]:
    """
    Yield `resource` and `close` it on every exit path.

    Usage example
    -------------
        with scr.closing(open_db()) as db:
            db.write(...)
    """
    try:
        yield resource
    finally:
        close(resource)


def panicf(fmt: str, *args: Any) -> NoReturn:
    """
    Raise ScriptError with the formatted message.

    Usage example
    -------------
        scr.panicf("invalid argument: %v", arg)
    """
    raise ScriptError(format_message(fmt, *args))


@contextmanager
def wrapf(fmt: str, *args: Any) -> Iterator[None]:
    """
    Prefix context onto any exception raised inside the block.

    The new message is ``format_message(fmt, *args) + ": " + str(exc)`` and the
    original exception becomes its ``__cause__``. Works as a decorator too.

    Usage example
    -------------
        with scr.wrapf("file: %v", fn):
            scr.panicf("invalid argument: %v", arg)  # file: <fn>: invalid argument: <arg>
    """
    try:
        yield
    except Exception as exc:
        raise ScriptError(f"{format_message(fmt, *args)}: {exc}") from exc
