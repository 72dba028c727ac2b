"""
Domain-level exceptions used within the service layer.

These exceptions are **framework-agnostic** and should never import or depend
on Flask or HTTP libraries directly. Each one carries the
:class:`~backregister.services.registration.dto.Outcome` it stands for, so the
pipeline can turn any failure into a user-facing result without string
matching on messages.
"""

from __future__ import annotations

from backregister.services.registration.dto import Outcome

# --------------------------------------------------------------------------- #
# Base types
# --------------------------------------------------------------------------- #


class ServiceError(Exception):
    """
    Base class for all service-level errors.

    Notes
    -----
    - These are *not* HTTP errors.
    - ``outcome`` maps the error to its rendered status and notice.
    """

    outcome: Outcome = Outcome.REGISTRATION_REJECTED


class InputError(ServiceError):
    """Client supplied a structurally invalid submission."""


class InfrastructureError(ServiceError):
    """The request could not be carried out for reasons outside the client's control."""


# --------------------------------------------------------------------------- #
# Specific domain-level errors
# --------------------------------------------------------------------------- #


class EmptyUsername(InputError):
    """Raised when the submitted username is empty."""

    outcome = Outcome.EMPTY_USERNAME

    def __init__(self, message: str = "username must not be empty") -> None:
        super().__init__(message)


class WeakPassword(InputError):
    """
    Raised when the submitted password is shorter than the minimum.

    :param length: Measured length of the password.
    :type length: int
    :param minimum: Required minimum length.
    :type minimum: int
    """

    outcome = Outcome.WEAK_PASSWORD

    def __init__(self, length: int, minimum: int) -> None:
        super().__init__(f"password has {length} bytes, at least {minimum} required")
        self.length = length
        self.minimum = minimum


class SerializationError(InfrastructureError):
    """Raised when the registration payload cannot be encoded."""

    outcome = Outcome.SERIALIZATION_ERROR


class UpstreamUnreachable(InfrastructureError):
    """
    Raised when the call to the homeserver could not be completed.

    :param url: Target URL of the failed call.
    :type url: str
    """

    outcome = Outcome.UPSTREAM_UNREACHABLE

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"error hitting {url}: {reason}")
        self.url = url
        self.reason = reason
