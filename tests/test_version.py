import re

import scr
from scr import version


def test_version_string_is_semverish() -> None:
    assert isinstance(version.__version__, str)
    assert re.fullmatch(r"\d+\.\d+\.\d+([.-][0-9A-Za-z.]+)?", version.__version__) is not None


def test_public_api_is_exported() -> None:
    assert scr.__version__ == version.__version__
    for name in ("err", "must", "close", "closing", "command", "run", "panicf", "wrapf", "script"):
        assert name in scr.__all__
        assert callable(getattr(scr, name))
