from __future__ import annotations

from typing import Optional

import pytest

from scr.errors.guards import close, closing, err, format_message, must, panicf, wrapf
from scr.errors.types import ScriptError


class _Closer:
    def __init__(self, error: Optional[BaseException] = None, *, raises: bool = False) -> None:
        self.error = error
        self.raises = raises
        self.calls = 0

    def close(self) -> Optional[BaseException]:
        self.calls += 1
        if self.raises and self.error is not None:
            raise self.error
        return self.error


def _must_func(s: str, error: Optional[BaseException]) -> tuple[str, Optional[BaseException]]:
    return s, error


def test_err_raises_the_exact_error() -> None:
    boom = ValueError("err")
    with pytest.raises(ValueError) as excinfo:
        err(boom)
    assert excinfo.value is boom


def test_err_none_is_noop() -> None:
    assert err(None) is None


def test_err_rejects_non_exception() -> None:
    with pytest.raises(TypeError, match="expected an exception or None"):
        err("err")  # type: ignore[arg-type]


def test_must_returns_value_on_success() -> None:
    value = object()
    assert must(value, None) is value
    assert must(*_must_func("str", None)) == "str"


def test_must_raises_error_instead_of_returning() -> None:
    boom = OSError("err")
    with pytest.raises(OSError) as excinfo:
        must(*_must_func("str", boom))
    assert excinfo.value is boom


def test_close_ok() -> None:
    c = _Closer()
    close(c)
    assert c.calls == 1


def test_close_returned_error_is_raised() -> None:
    boom = RuntimeError("err")
    c = _Closer(boom)
    with pytest.raises(RuntimeError) as excinfo:
        close(c)
    assert excinfo.value is boom
    assert c.calls == 1


def test_close_raised_error_propagates() -> None:
    c = _Closer(OSError("disk full"), raises=True)
    with pytest.raises(OSError, match="disk full"):
        close(c)


def test_close_ignores_non_error_return_value() -> None:
    class _ReturnsTrue:
        def close(self) -> bool:
            return True

    close(_ReturnsTrue())


def test_closing_closes_on_normal_exit() -> None:
    c = _Closer()
    with closing(c) as got:
        assert got is c
        assert c.calls == 0
    assert c.calls == 1


def test_closing_closes_when_block_raises() -> None:
    c = _Closer()
    with pytest.raises(KeyError):
        with closing(c):
            raise KeyError("inner")
    assert c.calls == 1


def test_closing_raises_close_error() -> None:
    c = _Closer(RuntimeError("err"))
    with pytest.raises(RuntimeError, match="err"):
        with closing(c):
            pass


def test_format_message_supports_v_and_printf_verbs() -> None:
    assert format_message("%v: %v", "err", "123") == "err: 123"
    assert format_message("%s=%d", "n", 3) == "n=3"
    assert format_message("%v", ("a", 1)) == "('a', 1)"
    assert format_message("100%%") == "100%"
    assert format_message("%%v is literal") == "%v is literal"


def test_panicf() -> None:
    with pytest.raises(ScriptError) as excinfo:
        panicf("%v: %v", "err", "123")
    assert str(excinfo.value) == "err: 123"


def test_wrapf_prefixes_inner_failure() -> None:
    with pytest.raises(ScriptError) as excinfo:
        with wrapf("%v: %v", "err", "123"):
            panicf("456")
    assert str(excinfo.value) == "err: 123: 456"
    assert isinstance(excinfo.value.__cause__, ScriptError)
    assert str(excinfo.value.__cause__) == "456"


def test_wrapf_composes_outward() -> None:
    with pytest.raises(ScriptError) as excinfo:
        with wrapf("outer"):
            with wrapf("file: %v", "a.txt"):
                raise ValueError("bad line")
    assert str(excinfo.value) == "outer: file: a.txt: bad line"


def test_wrapf_without_failure_is_noop() -> None:
    ran: list[str] = []
    with wrapf("%v: %v", "err", "123"):
        ran.append("body")
    assert ran == ["body"]


def test_wrapf_as_decorator() -> None:
    @wrapf("job %v", 7)
    def job() -> None:
        raise OSError("boom")

    with pytest.raises(ScriptError, match="^job 7: boom$"):
        job()


def test_wrapf_lets_keyboard_interrupt_through() -> None:
    with pytest.raises(KeyboardInterrupt):
        with wrapf("ctx"):
            raise KeyboardInterrupt


def test_panicf_keeps_literal_percent_without_arguments() -> None:
    with pytest.raises(ScriptError) as excinfo:
        panicf("disk 100% full")
    assert str(excinfo.value) == "disk 100% full"


def test_format_message_mismatched_arguments_keeps_text() -> None:
    assert format_message("no verbs", "a", 1) == "no verbs%!(EXTRA a, 1)"
    assert format_message("%d items", "many") == "%d items%!(EXTRA many)"


def test_wrapf_with_literal_percent_keeps_context() -> None:
    with pytest.raises(ScriptError) as excinfo:
        with wrapf("100% done"):
            raise ValueError("then failed")
    assert str(excinfo.value) == "100% done: then failed"
