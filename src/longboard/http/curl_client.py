# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""libcurl-backed HttpClient implementation (curl_cffi)."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterable, AsyncIterator
from typing import Any

from curl_cffi import CurlError
from curl_cffi.requests import AsyncSession
from curl_cffi.requests import exceptions as curl_exceptions

from ..config import HttpSettings, load_http_settings
from ..errors import TransportError
from .client import BaseHttpClient
from .headers import has_header, header_pairs
from .models import HttpRequest, HttpResponse

logger = logging.getLogger(__name__)

_CURL_ERRORS = (CurlError, curl_exceptions.RequestException)

# CURL_HTTP_VERSION_* values reported by libcurl
_HTTP_VERSIONS = {1: "HTTP/1.0", 2: "HTTP/1.1", 3: "HTTP/2", 30: "HTTP/3"}


class CurlClient(BaseHttpClient):
    """Async curl_cffi session wrapper."""

    def __init__(self, settings: HttpSettings | None = None, session: AsyncSession | None = None):
        self.settings = settings or load_http_settings()
        if session is None:
            # timeout=None disables curl_cffi's 30s default
            session = AsyncSession(
                allow_redirects=self.settings.follow_redirects,
                verify=self.settings.verify_ssl,
                timeout=self.settings.timeout,
            )
        self._session = session

    async def send(self, request: HttpRequest) -> HttpResponse:
        headers = list(request.headers)
        if not has_header(headers, "user-agent"):
            headers.append(("User-Agent", self.settings.user_agent))

        body = request.body
        if request.is_streaming:
            # the binding hands libcurl a complete buffer
            body = await _drain(body)  # type: ignore[arg-type]
            logger.debug("drained streamed body into %d bytes", len(body))

        try:
            resp = await self._session.request(
                request.method,
                request.url,
                headers=headers,
                data=body,
                stream=True,
                # no default Accept-Encoding; libcurl leaves the body encoded
                accept_encoding=None,
            )
        except _CURL_ERRORS as exc:
            raise TransportError.from_exception(exc) from exc

        http_version = _HTTP_VERSIONS.get(int(getattr(resp, "http_version", 0) or 0), "HTTP/1.1")
        logger.info("%s %s -> %s %s", request.method, request.url, http_version, resp.status_code)
        return HttpResponse(
            status_code=resp.status_code,
            headers=header_pairs(resp.headers),
            url=str(resp.url),
            reason_phrase=resp.reason or "",
            http_version=http_version,
            stream=_iter_body(resp),
            closer=resp.aclose,
        )

    async def aclose(self) -> None:
        await self._session.close()


async def _drain(body: AsyncIterable[bytes]) -> bytes:
    buffer = bytearray()
    async for chunk in body:
        buffer.extend(chunk)
    return bytes(buffer)


async def _iter_body(resp: Any) -> AsyncIterator[bytes]:
    try:
        async for chunk in resp.aiter_content():
            yield chunk
    except _CURL_ERRORS as exc:
        raise TransportError.from_exception(exc) from exc


__all__ = ["CurlClient"]
