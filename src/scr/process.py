"""Subprocess helpers that inherit the caller's standard streams.

A `Cmd` is only a description: nothing is launched until `run()` or `start()`.
Output is never captured; the child reads and writes the streams it was given,
which default to this process's own stdin, stdout and stderr.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
import os
import shlex
import subprocess
from pathlib import Path
from typing import IO, Any, Mapping, Optional, Union

from scr.errors.types import ExitStatusError

logger = logging.getLogger(__name__)

# None inherits the parent's stream; otherwise anything subprocess.Popen accepts.
Stream = Union[None, int, IO[Any]]


@dataclass
class Cmd:
    """
    An unexecuted subprocess description.

    Usage example
    -------------
        c = scr.command("go", "build", "-v", ".")
        c.setenv(GOOS="linux", GOARCH="amd64")
        c.run()
    """

    name: str
    args: list[str] = field(default_factory=list)
    stdin: Stream = None
    stdout: Stream = None
    stderr: Stream = None
    env: Optional[dict[str, str]] = None
    cwd: Optional[Path] = None

    @property
    def argv(self) -> list[str]:
        return [self.name, *self.args]

    def setenv(self, **overrides: str) -> "Cmd":
        """Set environment overrides on top of the current environment; returns self."""
        base = self.env if self.env is not None else os.environ
        self.env = {**base, **overrides}
        return self

    def start(self) -> subprocess.Popen:
        """Launch without waiting. Launch failures raise OSError."""
        logger.debug("+ %s", shlex.join(self.argv))
        return subprocess.Popen(
            self.argv,
            stdin=self.stdin,
            stdout=self.stdout,
            stderr=self.stderr,
            env=self.env,
            cwd=self.cwd,
        )

    def run(self) -> None:
        """Launch, wait for exit and raise ExitStatusError on a failure status."""
        with self.start() as proc:
            returncode = proc.wait()
        if returncode != 0:
            raise ExitStatusError(returncode, self.argv)


def command(
    name: str,
    *args: str,
    stdin: Stream = None,
    stdout: Stream = None,
    stderr: Stream = None,
    env: Optional[Mapping[str, str]] = None,
    cwd: Optional[Path] = None,
) -> Cmd:
    """
    Build a `Cmd` for `name` with `args`, inheriting standard streams by default.

    Usage example
    -------------
        c = scr.command("git", "log", "-1")
        c.cwd = repo
        c.run()
    """
    return Cmd(
        name=name,
        args=list(args),
        stdin=stdin,
        stdout=stdout,
        stderr=stderr,
        env=dict(env) if env is not None else None,
        cwd=cwd,
    )


def run(name: str, *args: str, **kwargs: Any) -> None:
    """
    Run `name` with `args` to completion; raise on launch failure or non-zero exit.

    Usage example
    -------------
        scr.run("git", "status")
    """
    command(name, *args, **kwargs).run()
