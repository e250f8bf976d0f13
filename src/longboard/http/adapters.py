# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Middleware and test adapters layered over the HttpClient protocol."""

from __future__ import annotations

import logging
from dataclasses import replace
from http.cookiejar import CookieJar
from os import PathLike
from pathlib import Path

from .client import BaseHttpClient, HttpClient
from .cookies import cookie_header_for, extract_cookies, load_jar, save_jar
from .headers import has_header
from .models import HttpRequest, HttpResponse

logger = logging.getLogger(__name__)


class CookieJarClient(BaseHttpClient):
    """
    Wrap any HttpClient with a file-backed cookie jar.

    Persisted cookies are loaded when the wrapper is created (unless a loaded jar is
    passed in); persistent cookies are written back when it is closed.
    """

    def __init__(self, client: HttpClient, jar_path: str | PathLike[str], *, jar: CookieJar | None = None):
        self._client = client
        self.jar_path = Path(jar_path)
        self.jar = jar if jar is not None else load_jar(self.jar_path)

    async def send(self, request: HttpRequest) -> HttpResponse:
        if not has_header(request.headers, "cookie"):
            cookie = cookie_header_for(self.jar, request)
            if cookie:
                request = replace(request, headers=[*request.headers, ("Cookie", cookie)])
        response = await self._client.send(request)
        extract_cookies(self.jar, request, response)
        return response

    async def aclose(self) -> None:
        try:
            await self._client.aclose()
        finally:
            saved = save_jar(self.jar, self.jar_path)
            logger.info("persisted %d cookies to %s", saved, self.jar_path)


class StubHttpClient(BaseHttpClient):
    """Deterministic, programmable HttpClient for tests."""

    def __init__(self, responses: dict[str, HttpResponse] | None = None):
        self._responses = responses or {}
        self.requests: list[HttpRequest] = []
        self.closed = False

    def add(self, url: str, response: HttpResponse) -> None:
        self._responses[url] = response

    async def send(self, request: HttpRequest) -> HttpResponse:
        self.requests.append(request)
        if request.url in self._responses:
            return self._responses[request.url]
        return HttpResponse(status_code=404, reason_phrase="Not Found", url=request.url, content=b"")

    async def aclose(self) -> None:
        self.closed = True
