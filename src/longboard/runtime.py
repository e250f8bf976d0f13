# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""High-level Longboard facade: build, send and render one request."""

from __future__ import annotations

import logging
from typing import Any, BinaryIO

from rich.console import Console

from .config import HttpSettings, OutputSettings, load_http_settings
from .http.client import HttpClient, create_http_client
from .http.models import HttpRequest, HttpResponse
from .models.request import RequestDescription
from .output import render_response
from .request import build_request

logger = logging.getLogger(__name__)


class Longboard:
    """
    Wires one RequestDescription to the client it selected.

    Closing the facade closes the client, which is also when a cookie jar (if any)
    is written back to disk.
    """

    def __init__(
        self,
        description: RequestDescription,
        *,
        http_settings: HttpSettings | None = None,
        http_client: HttpClient | None = None,
    ):
        self.description = description
        self.http_settings = http_settings or load_http_settings()
        self.http_client = http_client or create_http_client(
            description.backend,
            self.http_settings,
            jar_path=description.jar,
        )

    @property
    def url(self) -> str:
        return self.description.url

    async def request(self, *, stdin: BinaryIO | None = None) -> HttpRequest:
        return await build_request(self.description, stdin=stdin, settings=self.http_settings)

    async def send(self, *, stdin: BinaryIO | None = None) -> HttpResponse:
        request = await self.request(stdin=stdin)
        logger.info("sending %s %s via %s", request.method, request.url, self.description.backend.value)
        return await self.http_client.send(request)

    async def run(
        self,
        *,
        stdin: BinaryIO | None = None,
        stdout: Any = None,
        console: Console | None = None,
        output_settings: OutputSettings | None = None,
    ) -> HttpResponse:
        """Send the request and render the response."""
        response = await self.send(stdin=stdin)
        try:
            await render_response(response, self.url, stdout=stdout, console=console, settings=output_settings)
        finally:
            await response.aclose()
        return response

    async def aclose(self) -> None:
        await self.http_client.aclose()

    async def __aenter__(self) -> Longboard:
        return self

    async def __aexit__(self, _exc_type, _exc, _tb) -> None:  # noqa: ANN001
        await self.aclose()
