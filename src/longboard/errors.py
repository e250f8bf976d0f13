# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Error taxonomy and exception helpers."""

from __future__ import annotations

import socket
import ssl as ssl_module
from enum import Enum

import httpx
from curl_cffi.requests import exceptions as curl_exceptions


class ErrorCategory(str, Enum):
    TIMEOUT = "TIMEOUT"
    SSL_ERROR = "SSL_ERROR"
    CONNECTION_ERROR = "CONNECTION_ERROR"
    DNS_ERROR = "DNS_ERROR"
    PROTOCOL_ERROR = "PROTOCOL_ERROR"
    IO_ERROR = "IO_ERROR"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"


class LongboardError(Exception):
    """Base class for failures surfaced to the command line."""

    category: ErrorCategory = ErrorCategory.UNKNOWN_ERROR


class TransportError(LongboardError):
    """A backend failed to send the request or read the response."""

    def __init__(self, category: ErrorCategory, message: str):
        super().__init__(message)
        self.category = category

    @classmethod
    def from_exception(cls, exc: Exception) -> TransportError:
        message = str(exc) or type(exc).__name__
        return cls(categorize_exception(exc), message)


class CookieJarError(LongboardError):
    """The cookie jar file could not be read, parsed or written."""

    category = ErrorCategory.IO_ERROR


def categorize_exception(exc: BaseException) -> ErrorCategory:
    """
    Map httpx/curl_cffi/OS exceptions to ErrorCategory.
    """
    if isinstance(exc, LongboardError):
        return exc.category

    if isinstance(exc, (httpx.TimeoutException, curl_exceptions.Timeout)):
        return ErrorCategory.TIMEOUT

    if isinstance(exc, (ssl_module.SSLError, ssl_module.CertificateError, curl_exceptions.SSLError)):
        return ErrorCategory.SSL_ERROR

    if isinstance(exc, (socket.gaierror, socket.herror, curl_exceptions.DNSError)):
        return ErrorCategory.DNS_ERROR

    if isinstance(exc, (httpx.RemoteProtocolError, httpx.LocalProtocolError, httpx.DecodingError)):
        return ErrorCategory.PROTOCOL_ERROR

    if isinstance(
        exc,
        (
            httpx.ConnectError,
            httpx.NetworkError,
            httpx.ProxyError,
            curl_exceptions.ConnectionError,
            ConnectionError,
        ),
    ):
        return ErrorCategory.CONNECTION_ERROR

    if isinstance(exc, OSError):
        return ErrorCategory.IO_ERROR

    return ErrorCategory.UNKNOWN_ERROR


def error_category_to_reason(category: ErrorCategory | None) -> str:
    """User-facing reason string."""
    mapping = {
        ErrorCategory.TIMEOUT: "request timed out",
        ErrorCategory.SSL_ERROR: "TLS/certificate issue",
        ErrorCategory.CONNECTION_ERROR: "connection failed",
        ErrorCategory.DNS_ERROR: "DNS resolution failure",
        ErrorCategory.PROTOCOL_ERROR: "malformed response",
        ErrorCategory.IO_ERROR: "I/O error",
        ErrorCategory.UNKNOWN_ERROR: "request failed",
    }
    return mapping.get(category, "request failed")  # type: ignore[arg-type]


__all__ = [
    "CookieJarError",
    "ErrorCategory",
    "LongboardError",
    "TransportError",
    "categorize_exception",
    "error_category_to_reason",
]
