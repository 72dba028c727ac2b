"""Unit tests for the upstream registrar, with ``responses`` as the homeserver."""

from __future__ import annotations

from typing import Any

import pytest
import requests
import responses

from backregister.services._shared.errors import SerializationError, UpstreamUnreachable
from backregister.services.registration.dto import Outcome
from backregister.services.registration.registrar import (
    UpstreamRegistrar,
    build_register_url,
    classify_rejection,
    read_error_body,
)
from tests.helpers.upstream import (
    FORBIDDEN_BODY,
    REGISTER_URL,
    UPSTREAM_BASE,
    USER_IN_USE_BODY,
    add_register_response,
    sent_payload,
)

MAC = "0" * 40


class _StubResponse:
    """Minimal response; ``content`` may be an exception raised on read."""

    def __init__(self, status_code: int, content: bytes | Exception = b"") -> None:
        self.status_code = status_code
        self._content = content
        self.closed = False

    @property
    def content(self) -> bytes:
        if isinstance(self._content, Exception):
            raise self._content
        return self._content

    def __enter__(self) -> _StubResponse:
        return self

    def __exit__(self, *exc: Any) -> None:
        self.closed = True


@pytest.fixture()
def registrar() -> UpstreamRegistrar:
    return UpstreamRegistrar(timeout=(1.0, 1.0))


# ------------------------------ URL joining -------------------------------- #


@pytest.mark.parametrize(
    "endpoint",
    ["https://example.org/", "https://example.org", "https://example.org//"],
)
def test_build_register_url_has_single_separator(endpoint: str) -> None:
    assert build_register_url(endpoint) == "https://example.org/_matrix/client/r0/register"


def test_build_register_url_keeps_base_path() -> None:
    assert (
        build_register_url("https://example.org/synapse/")
        == "https://example.org/synapse/_matrix/client/r0/register"
    )


# ---------------------------- Classification ------------------------------- #


def test_classify_taken_marker() -> None:
    assert classify_rejection('{"error": "User ID already taken."}') is Outcome.USERNAME_TAKEN


@pytest.mark.parametrize("body", [None, "", '{"error": "Invalid username"}', "user id already taken"])
def test_classify_anything_else_is_rejected(body: str | None) -> None:
    assert classify_rejection(body) is Outcome.REGISTRATION_REJECTED


# ------------------------------ Happy path --------------------------------- #


def test_success_is_registered(registrar, upstream) -> None:
    add_register_response(upstream, status=200)

    result = registrar.register("alice", "correct horse", MAC, UPSTREAM_BASE)

    assert result.outcome is Outcome.REGISTERED
    assert result.upstream_status == 200
    assert result.status_code == 200


def test_payload_shape_and_content_type(registrar, upstream) -> None:
    add_register_response(upstream)

    registrar.register("alice", "correct horse", MAC, UPSTREAM_BASE + "/")

    assert len(upstream.calls) == 1
    call = upstream.calls[0]
    assert call.request.url == REGISTER_URL
    assert call.request.headers["Content-Type"] == "application/json"
    assert sent_payload(upstream) == {
        "username": "alice",
        "password": "correct horse",
        "mac": MAC,
        "auth": {"type": "org.matrix.login.shared_secret"},
    }


def test_timeout_is_forwarded() -> None:
    seen: dict[str, Any] = {}

    def fake_post(url: str, **kwargs: Any) -> _StubResponse:
        seen.update(kwargs, url=url)
        return _StubResponse(200)

    UpstreamRegistrar(timeout=(2.0, 7.5), post=fake_post).register("alice", "pw", MAC, UPSTREAM_BASE)

    assert seen["url"] == REGISTER_URL
    assert seen["timeout"] == (2.0, 7.5)


# ------------------------------ Rejections --------------------------------- #


def test_taken_username_keeps_upstream_status(registrar, upstream) -> None:
    add_register_response(upstream, status=400, body=USER_IN_USE_BODY)

    result = registrar.register("alice", "correct horse", MAC, UPSTREAM_BASE)

    assert result.outcome is Outcome.USERNAME_TAKEN
    assert result.status_code == 400


def test_unrelated_error_is_rejected(registrar, upstream) -> None:
    add_register_response(upstream, status=400, body={"errcode": "M_INVALID_USERNAME"})

    result = registrar.register("alice", "correct horse", MAC, UPSTREAM_BASE)

    assert result.outcome is Outcome.REGISTRATION_REJECTED
    assert result.status_code == 400


def test_forbidden_status_is_mirrored(registrar, upstream) -> None:
    add_register_response(upstream, status=403, body=FORBIDDEN_BODY)

    result = registrar.register("alice", "correct horse", MAC, UPSTREAM_BASE)

    assert result.outcome is Outcome.REGISTRATION_REJECTED
    assert result.status_code == 403


def test_unreadable_error_body_is_generic_rejection(caplog) -> None:
    broken = _StubResponse(429, requests.exceptions.ChunkedEncodingError("connection broken"))
    registrar = UpstreamRegistrar(post=lambda url, **kwargs: broken)

    result = registrar.register("alice", "correct horse", MAC, UPSTREAM_BASE)

    assert result.outcome is Outcome.REGISTRATION_REJECTED
    assert result.status_code == 429
    assert broken.closed is True
    assert "error reading homeserver body" in caplog.text


def test_read_error_body_returns_text(upstream) -> None:
    upstream.add(responses.POST, REGISTER_URL, body="User ID already taken.", status=400)
    response = requests.post(REGISTER_URL, timeout=1)
    assert read_error_body(response) == "User ID already taken."


# ------------------------------- Failures ---------------------------------- #


def test_refused_connection_is_unreachable(registrar, upstream) -> None:
    upstream.add(responses.POST, REGISTER_URL, body=requests.ConnectionError("refused"))

    with pytest.raises(UpstreamUnreachable) as excinfo:
        registrar.register("alice", "correct horse", MAC, UPSTREAM_BASE)

    assert excinfo.value.outcome is Outcome.UPSTREAM_UNREACHABLE
    assert excinfo.value.url == REGISTER_URL


def test_timeout_is_unreachable(registrar, upstream) -> None:
    upstream.add(responses.POST, REGISTER_URL, body=requests.exceptions.ReadTimeout("slow"))

    with pytest.raises(UpstreamUnreachable):
        registrar.register("alice", "correct horse", MAC, UPSTREAM_BASE)


def test_unencodable_payload_never_reaches_upstream(registrar, upstream) -> None:
    with pytest.raises(SerializationError) as excinfo:
        registrar.register("alice", object(), MAC, UPSTREAM_BASE)  # type: ignore[arg-type]

    assert excinfo.value.outcome is Outcome.SERIALIZATION_ERROR
    assert len(upstream.calls) == 0
