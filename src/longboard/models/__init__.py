# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Dataclass exports for Longboard."""

from ..http.models import HeaderList, HttpRequest, HttpResponse
from .request import BACKEND_ALIASES, Backend, BodyKind, BodySource, Method, RequestDescription

__all__ = [
    "BACKEND_ALIASES",
    "Backend",
    "BodyKind",
    "BodySource",
    "HeaderList",
    "HttpRequest",
    "HttpResponse",
    "Method",
    "RequestDescription",
]
