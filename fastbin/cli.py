"""Command-line interface of the binary manager."""

from __future__ import annotations

import argparse
import sys

import requests

from fastbin.errors import AppError
from fastbin.install import install
from fastbin.store import DB_FILE, init_store

VERSION = "v0.0.1"


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with its subcommands."""
    parser = argparse.ArgumentParser(
        prog="fastbin", description="Fastbin is a binary manager"
    )
    parser.add_argument(
        "-v", "--version", action="version", version=f"%(prog)s version {VERSION}"
    )
    parser.set_defaults(command=None)
    commands = parser.add_subparsers(dest="command", metavar="<command>")
    install_parser = commands.add_parser(
        "install",
        aliases=["i"],
        help="install <url>",
        description="Install a binary from a URL",
    )
    install_parser.add_argument("url", help="URL of a binary or an archive")
    install_parser.set_defaults(command="install")
    return parser


def _exit_code(exc: SystemExit) -> int:
    if isinstance(exc.code, int):
        return exc.code
    return 0 if exc.code is None else 1


def _report(exc: BaseException) -> int:
    print(f"fastbin: {exc}", file=sys.stderr)
    return 1


def main(argv: list[str] | None = None) -> int:
    """Run the command line and return the process exit status."""
    try:
        store = init_store(DB_FILE)
    except AppError as exc:
        return _report(exc)

    with store:
        parser = build_parser()
        try:
            args = parser.parse_args(argv)
        except SystemExit as exc:
            return _exit_code(exc)

        if args.command == "install":
            try:
                install(args.url)
            except (AppError, OSError, requests.RequestException) as exc:
                return _report(exc)
    return 0