"""Structural checks applied to a submission before any MAC or network work."""

from __future__ import annotations

from typing import Final

from backregister.services._shared.errors import EmptyUsername, WeakPassword
from backregister.services.registration.dto import RegistrationRequest

MIN_PASSWORD_LENGTH: Final[int] = 10


def as_text(value: str | bytes) -> str:
    """Decode raw form bytes; invalid UTF-8 becomes U+FFFD, as JSON encoding requires."""
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return value


def password_length(password: str | bytes) -> int:
    """Length of ``password`` as received on the wire (bytes)."""
    raw = password if isinstance(password, bytes) else password.encode("utf-8")
    return len(raw)


def validate(username: str | bytes, password: str | bytes) -> RegistrationRequest:
    """
    Validate a submission, first failing check wins.

    :param username: Username as received from the form (raw bytes or text).
    :type username: str | bytes
    :param password: Password as received from the form (raw bytes or text).
    :type password: str | bytes
    :returns: The values, decoded to text, wrapped in an immutable request.
    :rtype: :class:`RegistrationRequest`
    :raises EmptyUsername: When ``username`` is empty.
    :raises WeakPassword: When ``password`` is shorter than
        :data:`MIN_PASSWORD_LENGTH` bytes.
    """
    if not username:
        raise EmptyUsername()

    length = password_length(password)
    if length < MIN_PASSWORD_LENGTH:
        raise WeakPassword(length=length, minimum=MIN_PASSWORD_LENGTH)

    return RegistrationRequest(username=as_text(username), password=as_text(password))
