from __future__ import annotations

"""
Longboard, the easy way to surf: a command-line HTTP request tool.
Copyright (C) 2025  Theori Inc.

This program is free software: you can redistribute it and/or modify
it under the terms of the GNU Affero General Public License as published
by the Free Software Foundation, either version 3 of the License, or
(at your option) any later version.

This program is distributed in the hope that it will be useful,
but WITHOUT ANY WARRANTY; without even the implied warranty of
MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
GNU Affero General Public License for more details.

You should have received a copy of the GNU Affero General Public License
along with this program.  If not, see <https://www.gnu.org/licenses/>.
"""

"""Longboard CLI."""

import argparse
import logging
import os
import re
import sys
from pathlib import Path

import anyio
import httpx

from ..errors import LongboardError, categorize_exception, error_category_to_reason
from ..log import level_for_verbosity, setup_logging
from ..models.request import BACKEND_ALIASES, Backend, BodySource, Method, RequestDescription
from ..output import is_terminal
from ..runtime import Longboard
from ..version import __version__

logger = logging.getLogger(__name__)

_URL_SCHEMES = {"http", "https"}
_HEADER_NAME = re.compile(r"[!#$%&'*+\-.^_`|~0-9A-Za-z]+")
_HEADER_VALUE = re.compile(r"[\t\x20-\x7e]*")


def parse_header(value: str) -> tuple[str, str]:
    """Split a KEY=value pair at the first `=`; names must be tokens, values printable ASCII."""
    key, sep, rest = value.partition("=")
    if not sep:
        raise argparse.ArgumentTypeError(f"invalid KEY=value: no `=` found in `{value}`")
    if not _HEADER_NAME.fullmatch(key):
        raise argparse.ArgumentTypeError(f"invalid KEY=value: `{key}` is not a valid header name")
    if not _HEADER_VALUE.fullmatch(rest):
        raise argparse.ArgumentTypeError(f"invalid KEY=value: header value in `{value}` must be printable ASCII")
    return key, rest


def parse_method(value: str) -> Method:
    try:
        return Method.parse(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid HTTP method `{value}`") from None


def parse_url(value: str) -> str:
    try:
        url = httpx.URL(value)
    except httpx.InvalidURL as exc:
        raise argparse.ArgumentTypeError(f"invalid URL `{value}`: {exc}") from None
    if url.scheme not in _URL_SCHEMES:
        raise argparse.ArgumentTypeError(f"invalid URL `{value}`: expected an http or https URL")
    if not url.host:
        raise argparse.ArgumentTypeError(f"invalid URL `{value}`: missing host")
    return str(url)


def parse_backend(value: str) -> Backend:
    try:
        return BACKEND_ALIASES[value]
    except KeyError:
        raise argparse.ArgumentTypeError(f"unrecognized backend {value}") from None


def build_parser() -> argparse.ArgumentParser:
    # -h is taken by --headers, so help is only available as --help
    parser = argparse.ArgumentParser(prog="longboard", description="the easy way to surf", add_help=False)
    parser.add_argument("method", type=parse_method, help="HTTP method (case-insensitive)")
    parser.add_argument("url", type=parse_url, help="absolute http or https URL")
    parser.add_argument(
        "-f",
        "--file",
        type=Path,
        default=None,
        help="provide the path to a file to use as the request body",
    )
    parser.add_argument("-b", "--body", default=None, help="provide a request body on the command line")
    parser.add_argument(
        "-h",
        "--headers",
        type=parse_header,
        nargs="+",
        action="extend",
        default=None,
        metavar="KEY=VALUE",
        help="provide headers in the form -h KEY1=VALUE1 KEY2=VALUE2",
    )
    parser.add_argument(
        "-c",
        "--client",
        type=parse_backend,
        default=Backend.H1,
        metavar="BACKEND",
        help="http backend. options: h1, curl, hyper",
    )
    parser.add_argument(
        "-j",
        "--jar",
        type=Path,
        default=None,
        help="persist cookies with an explicit expiration in this file",
    )
    parser.add_argument("-v", "--verbose", action="count", default=0, help="log more (repeatable)")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--help", action="help", help="show this help message and exit")
    return parser


def description_from_args(args: argparse.Namespace, *, stdin_is_tty: bool) -> RequestDescription:
    return RequestDescription(
        method=args.method,
        url=args.url,
        headers=list(args.headers or []),
        body=BodySource.select(file=args.file, body=args.body, stdin_is_tty=stdin_is_tty),
        backend=args.client,
        jar=args.jar,
    )


def parse_args(argv: list[str] | None = None, *, stdin_is_tty: bool | None = None) -> RequestDescription:
    args = build_parser().parse_args(argv)
    if stdin_is_tty is None:
        stdin_is_tty = is_terminal(sys.stdin)
    return description_from_args(args, stdin_is_tty=stdin_is_tty)


async def _run(description: RequestDescription) -> None:
    async with Longboard(description) as board:
        await board.run()


def _report(exc: BaseException) -> None:
    reason = error_category_to_reason(categorize_exception(exc))
    print(f"longboard: {reason}: {exc}", file=sys.stderr)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(level_for_verbosity(args.verbose))
    description = description_from_args(args, stdin_is_tty=is_terminal(sys.stdin))
    logger.debug("parsed %s", description)

    try:
        anyio.run(_run, description)
    except BrokenPipeError:
        # the reader went away; keep the interpreter from complaining at exit
        devnull = os.open(os.devnull, os.O_WRONLY)
        os.dup2(devnull, sys.stdout.fileno())
        return 1
    except (LongboardError, OSError) as exc:
        logger.debug("request failed", exc_info=True)
        _report(exc)
        return 1

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
