# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Cookie jar persistence.

Cookie semantics (domain/path matching, expiry, Set-Cookie parsing) are owned by
`http.cookiejar`, the same engine httpx builds its `Cookies` on. This module only
moves cookies between a `CookieJar` and a newline-delimited JSON file, and adapts
Longboard's request/response models to the urllib-shaped objects the jar expects.
"""

from __future__ import annotations

import json
import logging
import time
from email.message import Message
from http.cookiejar import Cookie, CookieJar
from os import PathLike
from pathlib import Path
from typing import Any
from urllib.request import Request as UrllibRequest

from ..errors import CookieJarError
from .models import HttpRequest, HttpResponse

logger = logging.getLogger(__name__)


def cookie_to_record(cookie: Cookie) -> dict[str, Any]:
    return {
        "name": cookie.name,
        "value": cookie.value,
        "domain": cookie.domain,
        "path": cookie.path,
        "secure": cookie.secure,
        "expires": cookie.expires,
        "http_only": cookie.has_nonstandard_attr("HttpOnly"),
        "host_only": not cookie.domain_specified,
        "version": cookie.version,
    }


def cookie_from_record(record: dict[str, Any]) -> Cookie:
    domain = str(record["domain"])
    path = str(record.get("path") or "/")
    rest = {"HttpOnly": None} if record.get("http_only") else {}
    expires = record.get("expires")
    return Cookie(
        version=record.get("version") or 0,
        name=str(record["name"]),
        value=record.get("value"),
        port=None,
        port_specified=False,
        domain=domain,
        domain_specified=not record.get("host_only", False),
        domain_initial_dot=domain.startswith("."),
        path=path,
        path_specified=True,
        secure=bool(record.get("secure", False)),
        expires=int(expires) if expires is not None else None,
        discard=expires is None,
        comment=None,
        comment_url=None,
        rest=rest,
    )


def is_persistent(cookie: Cookie, now: float | None = None) -> bool:
    """Only cookies with an explicit max-age/expires survive the session."""
    if cookie.discard or cookie.expires is None:
        return False
    return not cookie.is_expired(int(now if now is not None else time.time()))


def load_jar(path: str | PathLike[str]) -> CookieJar:
    """Read a jar file, creating an empty one if it does not exist yet."""
    jar_path = Path(path)
    jar = CookieJar()
    try:
        if not jar_path.exists():
            jar_path.touch()
            logger.info("created cookie jar %s", jar_path)
            return jar
        lines = jar_path.read_text(encoding="utf-8").splitlines()
    except OSError as exc:
        raise CookieJarError(f"cannot open cookie jar {jar_path}: {exc}") from exc

    for lineno, line in enumerate(lines, start=1):
        if not line.strip():
            continue
        try:
            jar.set_cookie(cookie_from_record(json.loads(line)))
        except (json.JSONDecodeError, KeyError, TypeError, ValueError) as exc:
            raise CookieJarError(f"{jar_path}:{lineno}: invalid cookie record: {exc}") from exc

    jar.clear_expired_cookies()
    logger.debug("loaded %d cookies from %s", len(jar), jar_path)
    return jar


def save_jar(jar: CookieJar, path: str | PathLike[str]) -> int:
    """Write persistent cookies as one JSON object per line; returns the count written."""
    jar_path = Path(path)
    now = time.time()
    records = [cookie_to_record(cookie) for cookie in jar if is_persistent(cookie, now)]
    payload = "".join(json.dumps(record, sort_keys=True) + "\n" for record in records)
    try:
        jar_path.write_text(payload, encoding="utf-8")
    except OSError as exc:
        raise CookieJarError(f"cannot write cookie jar {jar_path}: {exc}") from exc
    logger.debug("saved %d cookies to %s", len(records), jar_path)
    return len(records)


class _CookieCompatResponse:
    """Expose response headers through the `info()` interface CookieJar reads."""

    def __init__(self, response: HttpResponse):
        self._message = Message()
        for name, value in response.headers:
            self._message[name] = value

    def info(self) -> Message:
        return self._message


def _compat_request(request: HttpRequest) -> UrllibRequest:
    return UrllibRequest(request.url, method=request.method)


def cookie_header_for(jar: CookieJar, request: HttpRequest) -> str | None:
    """Return the Cookie header value the jar would send with `request`."""
    compat = _compat_request(request)
    jar.add_cookie_header(compat)
    return compat.get_header("Cookie")


def extract_cookies(jar: CookieJar, request: HttpRequest, response: HttpResponse) -> None:
    """Store any Set-Cookie headers from `response` in the jar."""
    jar.extract_cookies(_CookieCompatResponse(response), _compat_request(request))  # type: ignore[arg-type]


__all__ = [
    "cookie_from_record",
    "cookie_header_for",
    "cookie_to_record",
    "extract_cookies",
    "is_persistent",
    "load_jar",
    "save_jar",
]
