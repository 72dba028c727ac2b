"""
UpstreamRegistrar
=================

Submits an authenticated registration to the homeserver and classifies the
answer:

- ``2xx``/``3xx``                         → ``REGISTERED``
- ``>= 400`` with "User ID already taken" → ``USERNAME_TAKEN``
- any other ``>= 400``                    → ``REGISTRATION_REJECTED``

Transport failures raise :class:`UpstreamUnreachable`; encoding failures raise
:class:`SerializationError`. Nothing is retried.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from typing import Final

import requests

from backregister.services._shared.errors import SerializationError, UpstreamUnreachable
from backregister.services.registration.dto import (
    AuthenticatedPayload,
    Outcome,
    RegistrationResult,
)

log = logging.getLogger(__name__)

REGISTER_PATH: Final[str] = "/_matrix/client/r0/register"
USERNAME_TAKEN_MARKER: Final[str] = "User ID already taken"
JSON_CONTENT_TYPE: Final[str] = "application/json"


def build_register_url(endpoint: str) -> str:
    """
    Join the homeserver base URL with the registration path.

    :param endpoint: Base URL, with or without trailing slashes.
    :type endpoint: str
    :returns: Absolute registration URL without a doubled separator.
    :rtype: str
    """
    return f"{endpoint.rstrip('/')}{REGISTER_PATH}"


def classify_rejection(body: str | None) -> Outcome:
    """
    Map the body of an error response to an outcome.

    The homeserver only reports a taken username through its error text, so
    this is a plain substring match. ``None`` (unreadable body) is a generic
    rejection.
    """
    if body is not None and USERNAME_TAKEN_MARKER in body:
        return Outcome.USERNAME_TAKEN
    return Outcome.REGISTRATION_REJECTED


def serialize_payload(payload: AuthenticatedPayload) -> bytes:
    """
    Encode ``payload`` as JSON.

    :raises SerializationError: When a field cannot be represented in JSON.
    """
    try:
        return json.dumps(payload.to_dict()).encode("utf-8")
    except (TypeError, ValueError) as exc:
        raise SerializationError(f"cannot encode registration payload: {exc}") from exc


def read_error_body(response: requests.Response) -> str | None:
    """Return the full response text, or ``None`` when reading it fails."""
    try:
        return response.content.decode("utf-8", errors="replace")
    except requests.RequestException as exc:
        log.warning(
            "error reading homeserver body: %s",
            exc,
            extra={"upstream_status": response.status_code},
        )
        return None


class UpstreamRegistrar:
    """
    Client for the shared-secret registration endpoint.

    :param timeout: ``(connect, read)`` seconds for the outbound call.
    :type timeout: tuple[float, float]
    :param post: Callable with the signature of :func:`requests.post`.
    :type post: Callable[..., requests.Response]
    """

    def __init__(
        self,
        *,
        timeout: tuple[float, float] = (5.0, 30.0),
        post: Callable[..., requests.Response] = requests.post,
    ) -> None:
        self.timeout = timeout
        self._post = post

    def register(self, username: str, password: str, mac: str, endpoint: str) -> RegistrationResult:
        """
        Submit one registration and classify the response.

        :param username: Validated username.
        :type username: str
        :param password: Validated password.
        :type password: str
        :param mac: Hex MAC over ``username``.
        :type mac: str
        :param endpoint: Homeserver base URL.
        :type endpoint: str
        :returns: ``REGISTERED``, ``USERNAME_TAKEN`` or ``REGISTRATION_REJECTED``.
        :rtype: :class:`RegistrationResult`
        :raises SerializationError: When the payload cannot be encoded.
        :raises UpstreamUnreachable: When the call cannot be completed.
        """
        body = serialize_payload(AuthenticatedPayload(username=username, password=password, mac=mac))
        url = build_register_url(endpoint)

        try:
            response = self._post(
                url,
                data=body,
                headers={"Content-Type": JSON_CONTENT_TYPE},
                timeout=self.timeout,
                stream=True,
            )
        except requests.RequestException as exc:
            raise UpstreamUnreachable(url, str(exc)) from exc

        with response:
            return self._classify(response)

    def _classify(self, response: requests.Response) -> RegistrationResult:
        status = response.status_code
        if status < 400:
            return RegistrationResult(Outcome.REGISTERED, upstream_status=status)

        outcome = classify_rejection(read_error_body(response))
        return RegistrationResult(outcome, upstream_status=status)


__all__ = [
    "REGISTER_PATH",
    "USERNAME_TAKEN_MARKER",
    "UpstreamRegistrar",
    "build_register_url",
    "classify_rejection",
    "read_error_body",
    "serialize_payload",
]
