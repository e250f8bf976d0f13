# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP client exports."""

from .adapters import CookieJarClient, StubHttpClient
from .client import BaseHttpClient, HttpClient, create_http_client
from .headers import header_pairs, header_value, header_values, headers_as_mapping
from .models import HeaderList, HttpRequest, HttpResponse

__all__ = [
    "BaseHttpClient",
    "CookieJarClient",
    "HeaderList",
    "HttpClient",
    "HttpRequest",
    "HttpResponse",
    "StubHttpClient",
    "create_http_client",
    "header_pairs",
    "header_value",
    "header_values",
    "headers_as_mapping",
]
