# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP request/response data models shared by every backend."""

from __future__ import annotations

from collections.abc import AsyncIterable, AsyncIterator, Awaitable, Callable
from dataclasses import dataclass, field

from .headers import header_value

HeaderList = list[tuple[str, str]]
RequestBody = bytes | AsyncIterable[bytes] | None


@dataclass
class HttpRequest:
    """Ready-to-send request consumed by HttpClient implementations."""

    url: str
    method: str = "GET"
    headers: HeaderList = field(default_factory=list)
    body: RequestBody = None

    def header(self, name: str, default: str = "") -> str:
        return header_value(self.headers, name, default)

    @property
    def is_streaming(self) -> bool:
        return self.body is not None and not isinstance(self.body, (bytes, bytearray))


@dataclass
class HttpResponse:
    """
    Normalized HTTP response.

    The body is either already buffered (`content`) or pending behind `stream`.
    `closer` releases the backend's connection once the body has been consumed.
    """

    status_code: int
    headers: HeaderList = field(default_factory=list)
    url: str = ""
    reason_phrase: str = ""
    http_version: str = "HTTP/1.1"
    content: bytes | None = None
    stream: AsyncIterable[bytes] | None = field(default=None, repr=False)
    closer: Callable[[], Awaitable[None]] | None = field(default=None, repr=False)

    def header(self, name: str, default: str = "") -> str:
        return header_value(self.headers, name, default)

    @property
    def content_type(self) -> str | None:
        return self.header("content-type") or None

    async def aiter_bytes(self) -> AsyncIterator[bytes]:
        """Yield the body chunk by chunk without buffering it."""
        if self.content is not None:
            if self.content:
                yield self.content
            return
        if self.stream is None:
            return
        async for chunk in self.stream:
            if chunk:
                yield chunk

    async def aread(self) -> bytes:
        """Buffer the whole body and return it."""
        if self.content is None:
            buffer = bytearray()
            async for chunk in self.aiter_bytes():
                buffer.extend(chunk)
            self.content = bytes(buffer)
            self.stream = None
        return self.content

    async def aclose(self) -> None:
        closer, self.closer = self.closer, None
        if closer is not None:
            await closer()
