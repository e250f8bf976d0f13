# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP client abstraction and backend selector."""

from __future__ import annotations

import logging
from os import PathLike
from typing import Protocol

from ..config import HttpSettings, load_http_settings
from ..models.request import Backend
from .models import HttpRequest, HttpResponse

logger = logging.getLogger(__name__)


class HttpClient(Protocol):
    """Minimal protocol for issuing one HTTP request asynchronously."""

    async def send(self, request: HttpRequest) -> HttpResponse: ...

    async def aclose(self) -> None: ...


class BaseHttpClient:
    """Async context manager plumbing shared by the concrete backends."""

    async def send(self, request: HttpRequest) -> HttpResponse:  # pragma: no cover - abstract
        raise NotImplementedError

    async def aclose(self) -> None:
        return None

    async def __aenter__(self):
        return self

    async def __aexit__(self, _exc_type, _exc, _tb) -> None:  # noqa: ANN001
        await self.aclose()


def create_http_client(
    backend: Backend,
    settings: HttpSettings | None = None,
    *,
    jar_path: str | PathLike[str] | None = None,
) -> HttpClient:
    """Map a backend to its transport, optionally wrapped in cookie-jar middleware."""
    settings = settings or load_http_settings()

    jar = None
    if jar_path is not None:
        from .cookies import load_jar

        # a bad jar fails before any transport is opened
        jar = load_jar(jar_path)

    client: HttpClient
    if backend is Backend.H1:
        from .httpx_client import H1Client

        client = H1Client(settings)
    elif backend is Backend.CURL:
        from .curl_client import CurlClient

        client = CurlClient(settings)
    elif backend is Backend.HYPER:
        from .httpx_client import HyperClient

        client = HyperClient(settings)
    else:  # pragma: no cover - closed enum
        raise ValueError(f"unrecognized backend {backend!r}")
    logger.debug("using %s backend (%s)", backend.value, type(client).__name__)

    if jar_path is not None:
        from .adapters import CookieJarClient

        client = CookieJarClient(client, jar_path, jar=jar)
    return client
