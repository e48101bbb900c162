"""scr command-line interface entrypoint."""

from __future__ import annotations

import argparse
from collections.abc import Sequence

from scr.cli.commands import run


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="scr",
        description="Run Python automation scripts with \"set -e\" failure reporting.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True, metavar="<command>")
    run.add_subparser(subparsers)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Parse args and return the exit status of the `run` command."""
    args = build_arg_parser().parse_args(argv)
    return run.run(args)


def app() -> None:
    """Console script entrypoint."""
    raise SystemExit(main())


if __name__ == "__main__":
    app()
