# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import io
import sys

import pytest

from longboard.config import HttpSettings
from longboard.models import Backend, BodyKind, BodySource, Method, RequestDescription
from longboard.request import OCTET_STREAM, TEXT_PLAIN, build_request

pytestmark = pytest.mark.anyio


def _description(**overrides):
    values = {"method": Method.POST, "url": "http://example.com/upload"}
    values.update(overrides)
    return RequestDescription(**values)


async def _collect(body):
    return b"".join([chunk async for chunk in body])


async def test_no_body_source_sends_no_body():
    request = await build_request(_description(method=Method.GET), stdin=io.BytesIO(b"ignored"))
    assert request.body is None
    assert request.method == "GET"
    assert request.url == "http://example.com/upload"
    assert request.header("content-type") == ""


async def test_headers_are_appended_in_order():
    request = await build_request(_description(headers=[("X-A", "1"), ("X-B", "2"), ("X-A", "3")]))
    assert request.headers == [("X-A", "1"), ("X-B", "2"), ("X-A", "3")]


async def test_inline_body_is_utf8_text():
    request = await build_request(_description(body=BodySource(BodyKind.INLINE, text="héllo")))
    assert request.body == "héllo".encode()
    assert request.header("content-type") == TEXT_PLAIN


async def test_file_body_is_read_and_typed(tmp_path):
    payload = tmp_path / "payload.json"
    payload.write_bytes(b'{"a": 1}')
    request = await build_request(_description(body=BodySource(BodyKind.FILE, path=payload)))
    assert request.body == b'{"a": 1}'
    assert request.header("content-type") == "application/json"


async def test_file_wins_over_inline_text(tmp_path):
    payload = tmp_path / "payload.txt"
    payload.write_bytes(b"from file")
    source = BodySource.select(file=payload, body="from flag", stdin_is_tty=False)
    request = await build_request(_description(body=source), stdin=io.BytesIO(b"from stdin"))
    assert request.body == b"from file"


async def test_explicit_content_type_is_kept():
    request = await build_request(
        _description(
            headers=[("content-type", "application/x-custom")],
            body=BodySource(BodyKind.INLINE, text="x"),
        )
    )
    assert request.headers == [("content-type", "application/x-custom")]


async def test_missing_file_propagates(tmp_path):
    with pytest.raises(FileNotFoundError):
        await build_request(_description(body=BodySource(BodyKind.FILE, path=tmp_path / "missing")))


async def test_h1_buffers_stdin():
    request = await build_request(
        _description(body=BodySource(BodyKind.STDIN), backend=Backend.H1),
        stdin=io.BytesIO(b"piped data"),
    )
    assert request.body == b"piped data"
    assert request.is_streaming is False
    assert request.header("content-type") == TEXT_PLAIN


@pytest.mark.parametrize("backend", [Backend.CURL, Backend.HYPER])
async def test_other_backends_stream_stdin(backend):
    request = await build_request(
        _description(body=BodySource(BodyKind.STDIN), backend=backend),
        stdin=io.BytesIO(b"a" * 10 + b"b" * 10),
        settings=HttpSettings(chunk_size=8),
    )
    assert request.is_streaming is True
    assert await _collect(request.body) == b"a" * 10 + b"b" * 10
    assert request.header("content-type") == OCTET_STREAM


async def test_empty_stdin_with_h1_is_an_empty_body():
    request = await build_request(
        _description(body=BodySource(BodyKind.STDIN), backend=Backend.H1),
        stdin=io.BytesIO(b""),
    )
    assert request.body == b""


@pytest.mark.parametrize("backend", [Backend.H1, Backend.CURL])
async def test_closed_stdin_means_no_body(monkeypatch, backend):
    monkeypatch.setattr(sys, "stdin", None)
    request = await build_request(_description(body=BodySource(BodyKind.STDIN), backend=backend))
    assert request.body is None
    assert request.header("content-type") == ""
