# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import json
import time

import pytest

from longboard.errors import CookieJarError, ErrorCategory, TransportError
from longboard.http.adapters import CookieJarClient, StubHttpClient
from longboard.http.cookies import cookie_from_record, cookie_to_record, is_persistent, load_jar, save_jar
from longboard.http.models import HttpRequest, HttpResponse

FUTURE = int(time.time()) + 3600
PAST = int(time.time()) - 3600


def _record(name, value="v", expires=FUTURE, **extra):
    record = {
        "name": name,
        "value": value,
        "domain": "example.com",
        "path": "/",
        "secure": False,
        "expires": expires,
        "http_only": False,
        "host_only": True,
        "version": 0,
    }
    record.update(extra)
    return record


def _write_jar(path, *records):
    path.write_text("".join(json.dumps(r) + "\n" for r in records), encoding="utf-8")


def test_load_jar_creates_missing_file(tmp_path):
    path = tmp_path / "jar.ndjson"
    jar = load_jar(path)
    assert path.exists()
    assert path.read_text() == ""
    assert len(jar) == 0


def test_load_jar_skips_blank_lines_and_expired_cookies(tmp_path):
    path = tmp_path / "jar.ndjson"
    _write_jar(path, _record("live"), _record("dead", expires=PAST))
    path.write_text(path.read_text() + "\n\n", encoding="utf-8")
    jar = load_jar(path)
    assert sorted(cookie.name for cookie in jar) == ["live"]


def test_load_jar_rejects_malformed_lines(tmp_path):
    path = tmp_path / "jar.ndjson"
    path.write_text('{"name": "ok", "domain": "example.com"}\nnot json\n', encoding="utf-8")
    with pytest.raises(CookieJarError) as excinfo:
        load_jar(path)
    assert ":2:" in str(excinfo.value)


def test_record_round_trip_keeps_attributes():
    record = _record("sid", value="abc", secure=True, http_only=True, host_only=False, domain=".example.com")
    assert cookie_to_record(cookie_from_record(record)) == record


def test_session_cookies_are_not_persistent():
    assert is_persistent(cookie_from_record(_record("session", expires=None))) is False
    assert is_persistent(cookie_from_record(_record("old", expires=PAST))) is False
    assert is_persistent(cookie_from_record(_record("kept"))) is True


def test_save_jar_writes_only_persistent_cookies(tmp_path):
    path = tmp_path / "jar.ndjson"
    _write_jar(path, _record("kept"))
    jar = load_jar(path)
    jar.set_cookie(cookie_from_record(_record("session", expires=None)))

    assert save_jar(jar, path) == 1
    lines = path.read_text(encoding="utf-8").splitlines()
    assert [json.loads(line)["name"] for line in lines] == ["kept"]


@pytest.mark.anyio
async def test_cookie_jar_client_sends_stored_and_saves_new_cookies(tmp_path):
    path = tmp_path / "jar.ndjson"
    _write_jar(path, _record("stored", value="1"))

    stub = StubHttpClient()
    stub.add(
        "http://example.com/login",
        HttpResponse(
            status_code=200,
            content=b"",
            headers=[
                ("Set-Cookie", "persist=yes; Max-Age=600; Path=/"),
                ("Set-Cookie", "session=tmp; Path=/"),
            ],
        ),
    )
    client = CookieJarClient(stub, path)
    await client.send(HttpRequest(url="http://example.com/login"))
    await client.send(HttpRequest(url="http://example.com/login"))
    await client.aclose()

    first_cookie = dict(stub.requests[0].headers)["Cookie"]
    assert first_cookie == "stored=1"
    second_cookie = dict(stub.requests[1].headers)["Cookie"]
    assert "persist=yes" in second_cookie
    assert "session=tmp" in second_cookie

    assert stub.closed is True
    saved = sorted(json.loads(line)["name"] for line in path.read_text(encoding="utf-8").splitlines())
    assert saved == ["persist", "stored"]


@pytest.mark.anyio
async def test_cookie_jar_client_keeps_explicit_cookie_header(tmp_path):
    path = tmp_path / "jar.ndjson"
    _write_jar(path, _record("stored", value="1"))
    stub = StubHttpClient()
    client = CookieJarClient(stub, path)
    await client.send(HttpRequest(url="http://example.com/", headers=[("Cookie", "mine=1")]))
    await client.aclose()
    assert stub.requests[0].headers == [("Cookie", "mine=1")]


class FailingClient(StubHttpClient):
    async def send(self, request):
        self.requests.append(request)
        raise TransportError(ErrorCategory.CONNECTION_ERROR, "connection refused")


@pytest.mark.anyio
async def test_cookie_jar_is_saved_when_the_request_fails(tmp_path):
    path = tmp_path / "jar.ndjson"
    _write_jar(path, _record("stored", value="1"), _record("dead", expires=PAST))
    failing = FailingClient()

    client = CookieJarClient(failing, path)
    try:
        with pytest.raises(TransportError):
            await client.send(HttpRequest(url="http://example.com/"))
    finally:
        await client.aclose()

    assert failing.closed is True
    assert dict(failing.requests[0].headers)["Cookie"] == "stored=1"
    # rewritten on close: the expired line is gone, the persistent cookie stays
    saved = [json.loads(line) for line in path.read_text(encoding="utf-8").splitlines()]
    assert [(record["name"], record["value"]) for record in saved] == [("stored", "1")]
