# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Turn a RequestDescription into a ready-to-send HttpRequest."""

from __future__ import annotations

import logging
import mimetypes
import sys
from collections.abc import AsyncIterator
from pathlib import Path
from typing import BinaryIO

import anyio

from .config import HttpSettings, load_http_settings
from .http.headers import has_header
from .http.models import HttpRequest
from .models.request import BodyKind, RequestDescription

logger = logging.getLogger(__name__)

TEXT_PLAIN = "text/plain;charset=utf-8"
OCTET_STREAM = "application/octet-stream"


async def read_file_body(path: Path) -> bytes:
    return await anyio.Path(path).read_bytes()


async def read_stdin(stdin: BinaryIO) -> bytes:
    """Read all of stdin into memory."""
    stream = anyio.wrap_file(stdin)
    return await stream.read()


async def stream_stdin(stdin: BinaryIO, chunk_size: int) -> AsyncIterator[bytes]:
    """Yield stdin in chunks as it arrives."""
    stream = anyio.wrap_file(stdin)
    while True:
        chunk = await stream.read1(chunk_size) if hasattr(stdin, "read1") else await stream.read(chunk_size)
        if not chunk:
            break
        yield chunk


def _guess_file_type(path: Path) -> str:
    content_type, _ = mimetypes.guess_type(path.name)
    return content_type or OCTET_STREAM


async def build_request(
    description: RequestDescription,
    *,
    stdin: BinaryIO | None = None,
    settings: HttpSettings | None = None,
) -> HttpRequest:
    """
    Assemble the outgoing request.

    Body precedence is file, then inline text, then standard input; the parser has
    already resolved which one applies. The h1 backend cannot stream a body, so
    stdin is buffered for it and streamed for every other backend.
    """
    settings = settings or load_http_settings()
    request = HttpRequest(
        url=description.url,
        method=description.method.value,
        headers=list(description.headers),
    )

    source = description.body
    default_type: str | None = None
    if source.kind is BodyKind.FILE and source.path is not None:
        request.body = await read_file_body(source.path)
        default_type = _guess_file_type(source.path)
        logger.debug("body from file %s (%d bytes)", source.path, len(request.body))
    elif source.kind is BodyKind.INLINE and source.text is not None:
        request.body = source.text.encode("utf-8")
        default_type = TEXT_PLAIN
    elif source.kind is BodyKind.STDIN:
        if stdin is None and sys.stdin is not None:
            stdin = getattr(sys.stdin, "buffer", sys.stdin)
        if stdin is None:
            logger.debug("stdin is closed; sending no body")
        elif description.backend.streams_body:
            request.body = stream_stdin(stdin, settings.chunk_size)
            default_type = OCTET_STREAM
            logger.debug("streaming body from stdin")
        else:
            # buffered stdin goes out as text, like an inline body
            request.body = await read_stdin(stdin)
            default_type = TEXT_PLAIN
            logger.debug("buffered %d bytes from stdin", len(request.body))

    if default_type and not has_header(request.headers, "content-type"):
        request.headers.append(("Content-Type", default_type))
    return request


__all__ = ["build_request", "read_file_body", "read_stdin", "stream_stdin"]
