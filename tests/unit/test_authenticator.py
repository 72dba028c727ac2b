"""Unit tests for shared-secret MAC derivation."""

from __future__ import annotations

import pytest

from backregister.services.registration.authenticator import authenticate


@pytest.mark.parametrize(
    ("key", "message", "expected"),
    [
        # RFC 2202, HMAC-SHA1 test cases 1 and 2
        (b"\x0b" * 20, "Hi There", "b617318655057264e28bc0b6fb378c8ef146be00"),
        (b"Jefe", "what do ya want for nothing?", "effcdf6ae5eb2fa2d27416d5f184df9c259a7c79"),
    ],
)
def test_known_answer_vectors(key: bytes, message: str, expected: str) -> None:
    assert authenticate(message, key) == expected


def test_alice_with_test_secret_is_pinned() -> None:
    assert authenticate("alice", b"test-shared-secret") == "e9a2e354f2f901312646df6357d20c7ad8173973"


def test_digest_is_lowercase_hex() -> None:
    mac = authenticate("alice", b"secret")
    assert len(mac) == 40
    assert mac == mac.lower()
    int(mac, 16)


def test_is_deterministic() -> None:
    assert authenticate("alice", b"secret") == authenticate("alice", b"secret")


def test_str_secret_is_utf8_encoded() -> None:
    assert authenticate("alice", "sécret") == authenticate("alice", "sécret".encode("utf-8"))


def test_different_usernames_give_different_macs() -> None:
    assert authenticate("alice", b"secret") != authenticate("bob", b"secret")


def test_different_secrets_give_different_macs() -> None:
    assert authenticate("alice", b"secret") != authenticate("alice", b"other")


def test_non_ascii_username() -> None:
    expected = "a77f095d879993fdf895f8ed52dfea39b43e0fba"
    assert authenticate("zoë", b"secret") == expected
