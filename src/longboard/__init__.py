# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Longboard package entrypoint.

Longboard sends a single HTTP request described on the command line through one
of several interchangeable transports and renders the response for a terminal
or a pipe. Transports sit behind an injectable client protocol, and request and
response records are modeled with typed dataclasses.
"""

from .config import HttpSettings, OutputSettings, load_http_settings, load_output_settings
from .errors import CookieJarError, ErrorCategory, LongboardError, TransportError
from .http import (
    CookieJarClient,
    HttpClient,
    HttpRequest,
    HttpResponse,
    create_http_client,
)
from .log import setup_logging
from .models import Backend, BodyKind, BodySource, RequestDescription
from .request import build_request
from .runtime import Longboard
from .version import __version__

__all__ = [
    "Backend",
    "BodyKind",
    "BodySource",
    "CookieJarClient",
    "CookieJarError",
    "ErrorCategory",
    "HttpClient",
    "HttpRequest",
    "HttpResponse",
    "HttpSettings",
    "Longboard",
    "LongboardError",
    "OutputSettings",
    "RequestDescription",
    "TransportError",
    "build_request",
    "create_http_client",
    "load_http_settings",
    "load_output_settings",
    "setup_logging",
    "__version__",
]
