# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Header collection utilities.

HTTP header field names are case-insensitive (RFC 9110). Longboard keeps headers as
ordered lists of (name, value) pairs so repeated fields such as Set-Cookie survive
the trip from a backend to the renderer.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any


def header_pairs(headers: Any) -> list[tuple[str, str]]:
    """
    Best-effort coercion of backend header containers into ordered pairs.

    Handles:
    - iterable-of-pairs (e.g. list[tuple[str, str]])
    - httpx.Headers (`multi_items()`)
    - curl_cffi Headers and plain dicts (`multi_items()` or `items()`)
    """
    if not headers:
        return []
    multi_items = getattr(headers, "multi_items", None)
    if callable(multi_items):
        return [(str(k), str(v)) for k, v in multi_items()]
    if isinstance(headers, Mapping):
        return [(str(k), "" if v is None else str(v)) for k, v in headers.items()]
    return [(str(k), "" if v is None else str(v)) for k, v in headers]


def header_values(headers: Iterable[tuple[str, str]] | None, name: str) -> list[str]:
    """Return every value for `name`, in order."""
    if not headers or not name:
        return []
    lower = name.lower()
    return [value for key, value in headers if key.lower() == lower]


def header_value(headers: Iterable[tuple[str, str]] | None, name: str, default: str = "") -> str:
    """Return the first value for `name` using case-insensitive matching."""
    values = header_values(headers, name)
    return values[0].strip() if values else default


def has_header(headers: Iterable[tuple[str, str]] | None, name: str) -> bool:
    return bool(header_values(headers, name))


def headers_as_mapping(headers: Iterable[tuple[str, str]] | None) -> dict[str, str | list[str]]:
    """Group pairs by lowercase name; repeated fields become lists."""
    out: dict[str, str | list[str]] = {}
    for key, value in headers or ():
        name = key.lower()
        existing = out.get(name)
        if existing is None:
            out[name] = value
        elif isinstance(existing, list):
            existing.append(value)
        else:
            out[name] = [existing, value]
    return out


__all__ = ["has_header", "header_pairs", "header_value", "header_values", "headers_as_mapping"]
