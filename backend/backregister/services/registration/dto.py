"""
DTOs for the registration pipeline.

Contracts for one pass through validation, MAC derivation and upstream
submission. Everything here is immutable and lives for a single request.
"""

from __future__ import annotations

import enum
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Final

SHARED_SECRET_AUTH_TYPE: Final[str] = "org.matrix.login.shared_secret"

# --------------------------------------------------------------------------- #
# Input
# --------------------------------------------------------------------------- #


@dataclass(frozen=True, slots=True)
class RegistrationRequest:
    """
    A submission that passed validation.

    :param username: Requested localpart, non-empty, passed through unchanged.
    :type username: str
    :param password: Raw password as typed by the user.
    :type password: str
    """

    username: str
    password: str

    def __repr__(self) -> str:
        return f"RegistrationRequest(username={self.username!r}, password=<redacted>)"


@dataclass(frozen=True, slots=True)
class AuthenticatedPayload:
    """
    Body of the shared-secret registration call.

    :param username: Requested localpart.
    :type username: str
    :param password: Raw password.
    :type password: str
    :param mac: Lowercase hex HMAC of ``username``.
    :type mac: str
    :param auth_type: Authentication scheme discriminator.
    :type auth_type: str
    """

    username: str
    password: str
    mac: str
    auth_type: str = SHARED_SECRET_AUTH_TYPE

    def __repr__(self) -> str:
        return f"AuthenticatedPayload(username={self.username!r}, auth_type={self.auth_type!r})"

    def to_dict(self) -> dict[str, Any]:
        """Return the wire shape expected by ``/_matrix/client/r0/register``."""
        return {
            "username": self.username,
            "password": self.password,
            "mac": self.mac,
            "auth": {"type": self.auth_type},
        }


# --------------------------------------------------------------------------- #
# Output
# --------------------------------------------------------------------------- #


class Outcome(enum.Enum):
    """Terminal results of one registration attempt."""

    EMPTY_USERNAME = "empty_username"
    WEAK_PASSWORD = "weak_password"
    REGISTERED = "registered"
    USERNAME_TAKEN = "username_taken"
    REGISTRATION_REJECTED = "registration_rejected"
    UPSTREAM_UNREACHABLE = "upstream_unreachable"
    SERIALIZATION_ERROR = "serialization_error"


@dataclass(frozen=True, slots=True)
class OutcomeResponse:
    """
    User-facing rendering of an :class:`Outcome`.

    :param status_code: HTTP status, or ``None`` to mirror the upstream status.
    :type status_code: int | None
    :param notice: Message shown above the form.
    :type notice: str
    """

    status_code: int | None
    notice: str


OUTCOME_RESPONSES: Final[Mapping[Outcome, OutcomeResponse]] = {
    Outcome.REGISTERED: OutcomeResponse(200, "You're registered!"),
    Outcome.EMPTY_USERNAME: OutcomeResponse(400, "Must enter a username"),
    Outcome.WEAK_PASSWORD: OutcomeResponse(400, "Password must be 10+ chars"),
    Outcome.USERNAME_TAKEN: OutcomeResponse(None, "Username already in use"),
    Outcome.REGISTRATION_REJECTED: OutcomeResponse(None, "Registration error :(!"),
    Outcome.UPSTREAM_UNREACHABLE: OutcomeResponse(500, "Error hitting registration server"),
    Outcome.SERIALIZATION_ERROR: OutcomeResponse(
        500, "Internal error preparing registration request"
    ),
}


@dataclass(frozen=True, slots=True)
class RegistrationResult:
    """
    Result of the registration pipeline.

    :param outcome: Terminal outcome.
    :type outcome: :class:`Outcome`
    :param upstream_status: Homeserver status code when one was received.
    :type upstream_status: int | None
    """

    outcome: Outcome
    upstream_status: int | None = None

    @property
    def status_code(self) -> int:
        """HTTP status shown to the caller."""
        mapped = OUTCOME_RESPONSES[self.outcome].status_code
        if mapped is not None:
            return mapped
        # Mirrored outcomes come from an upstream response
        return self.upstream_status if self.upstream_status is not None else 502

    @property
    def notice(self) -> str:
        """Human-readable message shown above the form."""
        return OUTCOME_RESPONSES[self.outcome].notice

    @property
    def ok(self) -> bool:
        return self.outcome is Outcome.REGISTERED
