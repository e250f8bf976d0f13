# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Request description models built from the command line."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path


class Method(str, Enum):
    """Registered HTTP methods, WebDAV and DeltaV extensions included."""

    ACL = "ACL"
    BASELINE_CONTROL = "BASELINE-CONTROL"
    BIND = "BIND"
    CHECKIN = "CHECKIN"
    CHECKOUT = "CHECKOUT"
    CONNECT = "CONNECT"
    COPY = "COPY"
    DELETE = "DELETE"
    GET = "GET"
    HEAD = "HEAD"
    LABEL = "LABEL"
    LINK = "LINK"
    LOCK = "LOCK"
    MERGE = "MERGE"
    MKACTIVITY = "MKACTIVITY"
    MKCALENDAR = "MKCALENDAR"
    MKCOL = "MKCOL"
    MKREDIRECTREF = "MKREDIRECTREF"
    MKWORKSPACE = "MKWORKSPACE"
    MOVE = "MOVE"
    OPTIONS = "OPTIONS"
    ORDERPATCH = "ORDERPATCH"
    PATCH = "PATCH"
    POST = "POST"
    PRI = "PRI"
    PROPFIND = "PROPFIND"
    PROPPATCH = "PROPPATCH"
    PUT = "PUT"
    REBIND = "REBIND"
    REPORT = "REPORT"
    SEARCH = "SEARCH"
    TRACE = "TRACE"
    UNBIND = "UNBIND"
    UNCHECKOUT = "UNCHECKOUT"
    UNLINK = "UNLINK"
    UNLOCK = "UNLOCK"
    UPDATE = "UPDATE"
    UPDATEREDIRECTREF = "UPDATEREDIRECTREF"
    VERSION_CONTROL = "VERSION-CONTROL"

    @classmethod
    def parse(cls, value: str) -> Method:
        """Case-insensitive lookup; raises ValueError for unknown verbs."""
        return cls(value.upper())


class Backend(str, Enum):
    """Interchangeable HTTP transports selectable at startup."""

    H1 = "h1"
    CURL = "curl"
    HYPER = "hyper"

    @property
    def streams_body(self) -> bool:
        # h1 cannot stream a request body; stdin is buffered for it.
        return self is not Backend.H1


BACKEND_ALIASES: dict[str, Backend] = {
    "h1": Backend.H1,
    "async-h1": Backend.H1,
    "curl": Backend.CURL,
    "isahc": Backend.CURL,
    "hyper": Backend.HYPER,
}


class BodyKind(str, Enum):
    NONE = "none"
    FILE = "file"
    INLINE = "inline"
    STDIN = "stdin"


@dataclass(frozen=True)
class BodySource:
    """Where the outgoing request body comes from."""

    kind: BodyKind = BodyKind.NONE
    path: Path | None = None
    text: str | None = None

    @classmethod
    def select(cls, *, file: Path | None, body: str | None, stdin_is_tty: bool) -> BodySource:
        """File wins over inline text, which wins over piped stdin."""
        if file is not None:
            return cls(BodyKind.FILE, path=file)
        if body is not None:
            return cls(BodyKind.INLINE, text=body)
        if not stdin_is_tty:
            return cls(BodyKind.STDIN)
        return cls()


@dataclass
class RequestDescription:
    """Typed request produced by the argument parser and consumed once by the builder."""

    method: Method
    url: str
    headers: list[tuple[str, str]] = field(default_factory=list)
    body: BodySource = field(default_factory=BodySource)
    backend: Backend = Backend.H1
    jar: Path | None = None
