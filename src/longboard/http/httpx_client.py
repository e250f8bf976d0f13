# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""httpx-backed HttpClient implementations (HTTP/1.1 and HTTP/2)."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator

import httpx

from ..config import HttpSettings, load_http_settings
from ..errors import TransportError
from .client import BaseHttpClient
from .headers import has_header, header_pairs
from .models import HttpRequest, HttpResponse

logger = logging.getLogger(__name__)


class HttpxClient(BaseHttpClient):
    """Async httpx client wrapper; subclasses pick the protocol versions."""

    http1: bool = True
    http2: bool = False

    def __init__(self, settings: HttpSettings | None = None, client: httpx.AsyncClient | None = None):
        self.settings = settings or load_http_settings()
        self._client = client or httpx.AsyncClient(
            http1=self.http1,
            http2=self.http2,
            follow_redirects=self.settings.follow_redirects,
            timeout=self.settings.timeout,
            verify=self.settings.verify_ssl,
        )
        # only send Accept-Encoding when the caller asks for it; bodies are passed on undecoded
        self._client.headers.pop("Accept-Encoding", None)

    async def send(self, request: HttpRequest) -> HttpResponse:
        headers = list(request.headers)
        if not has_header(headers, "user-agent"):
            headers.append(("User-Agent", self.settings.user_agent))

        try:
            outgoing = self._client.build_request(
                request.method,
                request.url,
                headers=headers,
                content=request.body,
            )
            resp = await self._client.send(outgoing, stream=True)
        except httpx.HTTPError as exc:
            raise TransportError.from_exception(exc) from exc

        logger.info("%s %s -> %s %s", request.method, request.url, resp.http_version, resp.status_code)
        return HttpResponse(
            status_code=resp.status_code,
            headers=header_pairs(resp.headers),
            url=str(resp.url),
            reason_phrase=resp.reason_phrase,
            http_version=resp.http_version,
            stream=_iter_body(resp),
            closer=resp.aclose,
        )

    async def aclose(self) -> None:
        await self._client.aclose()


async def _iter_body(resp: httpx.Response) -> AsyncIterator[bytes]:
    try:
        async for chunk in resp.aiter_raw():
            yield chunk
    except httpx.HTTPError as exc:
        raise TransportError.from_exception(exc) from exc


class H1Client(HttpxClient):
    """HTTP/1.1 only. Request bodies are sent buffered."""

    http1 = True
    http2 = False


class HyperClient(HttpxClient):
    """HTTP/2 when the server negotiates it, HTTP/1.1 otherwise; streams request bodies."""

    http1 = True
    http2 = True


__all__ = ["H1Client", "HttpxClient", "HyperClient"]
