# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Response rendering.

With a terminal attached the whole body is buffered and shown as three titled
panels (response headers, status, response body) with syntax highlighting chosen
from a display filename. Otherwise the body bytes are copied to stdout untouched.
"""

from __future__ import annotations

import json
import logging
import os
import sys
from dataclasses import dataclass
from http import HTTPStatus
from typing import Any, BinaryIO

import anyio
import httpx
from rich.console import Console, Group, RenderableType
from rich.panel import Panel
from rich.syntax import Syntax

from .config import OutputSettings, load_output_settings
from .http.headers import headers_as_mapping
from .http.models import HttpResponse

logger = logging.getLogger(__name__)

JSON_BODY_NAME = "body.json"


@dataclass(frozen=True)
class Section:
    """One titled block of terminal output; `name` drives lexer detection."""

    name: str
    title: str
    text: str


def is_terminal(stream: Any) -> bool:
    isatty = getattr(stream, "isatty", None)
    if not callable(isatty):
        return False
    try:
        return bool(isatty())
    except (OSError, ValueError):
        return False


def canonical_reason(status_code: int, fallback: str = "") -> str:
    try:
        return HTTPStatus(status_code).phrase
    except ValueError:
        return fallback or "Unknown"


def _mime_essence(content_type: str | None) -> str:
    return (content_type or "").split(";")[0].strip().lower()


def is_json_content_type(content_type: str | None) -> bool:
    essence = _mime_essence(content_type)
    return essence == "application/json" or essence.endswith("+json")


def _charset(content_type: str | None) -> str | None:
    for param in (content_type or "").split(";")[1:]:
        key, _, value = param.partition("=")
        if key.strip().lower() == "charset" and value.strip():
            return value.strip().strip('"')
    return None


def decode_body(body: bytes, content_type: str | None) -> str:
    encoding = _charset(content_type) or "utf-8"
    try:
        return body.decode(encoding, errors="replace")
    except LookupError:
        return body.decode("utf-8", errors="replace")


def body_display_name(content_type: str | None, url: str) -> str:
    """
    Pick the filename used for lexer detection.

    JSON is named explicitly since it is not reliably sniffed from the content;
    everything else borrows the request URL path (`/feed.xml`, `/app.js`, ...).
    """
    if is_json_content_type(content_type):
        return JSON_BODY_NAME
    try:
        path = httpx.URL(url).path
    except httpx.InvalidURL:
        path = ""
    return path or "/"


def build_sections(response: HttpResponse, body: bytes, url: str) -> list[Section]:
    """Build the headers, status and body sections for a buffered response."""
    content_type = response.content_type
    headers_text = json.dumps(headers_as_mapping(response.headers), indent=4, ensure_ascii=False)
    status_text = f"{response.status_code}: {canonical_reason(response.status_code, response.reason_phrase)}"
    body_title = f"response body ({content_type})" if content_type else "response body"
    return [
        Section(name="headers.json", title="response headers", text=headers_text),
        Section(name="status", title="status", text=status_text),
        Section(name=body_display_name(content_type, url), title=body_title, text=decode_body(body, content_type)),
    ]


def section_renderable(section: Section, theme: str) -> RenderableType:
    lexer = Syntax.guess_lexer(section.name, section.text)
    syntax = Syntax(section.text, lexer, theme=theme, word_wrap=True)
    return Panel(syntax, title=section.title, title_align="left", subtitle=section.name, subtitle_align="right")


def _exceeds_screen(console: Console, renderable: RenderableType) -> bool:
    lines = console.render_lines(renderable, console.options.update(height=None), pad=False)
    return len(lines) > console.height


def print_sections(
    sections: list[Section],
    *,
    console: Console | None = None,
    settings: OutputSettings | None = None,
) -> None:
    """Print sections, paging only when they do not fit on one screen."""
    console = console or Console()
    settings = settings or load_output_settings()
    group = Group(*(section_renderable(section, settings.theme) for section in sections))

    if settings.pager and console.is_terminal and _exceeds_screen(console, group):
        # colors survive `less` only in raw-control-chars mode
        os.environ.setdefault("LESS", "-R")
        with console.pager(styles=True):
            console.print(group)
    else:
        console.print(group)


async def copy_body(response: HttpResponse, out: BinaryIO) -> int:
    """Copy body chunks verbatim, flushing after each one; returns bytes written."""
    stream = anyio.wrap_file(out)
    total = 0
    async for chunk in response.aiter_bytes():
        await stream.write(chunk)
        await stream.flush()
        total += len(chunk)
    return total


async def render_response(
    response: HttpResponse,
    url: str,
    *,
    stdout: Any = None,
    console: Console | None = None,
    settings: OutputSettings | None = None,
) -> None:
    """Pretty-print to a terminal, or stream raw bytes when output is redirected."""
    stdout = stdout if stdout is not None else sys.stdout
    if is_terminal(stdout):
        body = await response.aread()
        logger.debug("rendering %d byte body for terminal", len(body))
        print_sections(build_sections(response, body, url), console=console, settings=settings)
    else:
        written = await copy_body(response, getattr(stdout, "buffer", stdout))
        logger.debug("copied %d body bytes to stdout", written)


__all__ = [
    "JSON_BODY_NAME",
    "Section",
    "body_display_name",
    "build_sections",
    "canonical_reason",
    "copy_body",
    "decode_body",
    "is_json_content_type",
    "is_terminal",
    "print_sections",
    "render_response",
]
