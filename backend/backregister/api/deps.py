"""Shared API helpers for request parsing and cross-cutting concerns."""

from __future__ import annotations

import functools
import time
from collections.abc import Callable
from urllib.parse import parse_qsl
from typing import Any, TypeVar, cast

from flask import Response, current_app, jsonify, request

from backregister.core.config import SETTINGS_EXTENSION_KEY, RegistrarSettings
from backregister.core.logger import ensure_request_id
from backregister.services import RegistrationService, ServiceContext

F = TypeVar("F", bound=Callable[..., Any])


def get_settings() -> RegistrarSettings:
    """Return the registrar settings bound to the current application."""

    return cast(RegistrarSettings, current_app.extensions[SETTINGS_EXTENSION_KEY])


def service_context() -> ServiceContext:
    """Build a :class:`ServiceContext` for the current request."""

    return ServiceContext(request_id=ensure_request_id(), remote_addr=request.remote_addr)


def raw_form_fields() -> dict[str, bytes]:
    """Return posted form values as raw bytes, first value per field.

    URL-encoded bodies are decoded from the request bytes through latin-1,
    which maps every percent-escape to exactly one byte, so invalid UTF-8
    survives with its true length. Multipart values come from Werkzeug,
    already decoded, and are re-encoded as UTF-8.
    """

    if request.mimetype != "application/x-www-form-urlencoded":
        return {key: value.encode("utf-8") for key, value in request.form.items()}

    body = request.get_data(cache=True).decode("latin-1")
    fields: dict[str, bytes] = {}
    for key, value in parse_qsl(body, keep_blank_values=True, encoding="latin-1"):
        name = key.encode("latin-1").decode("utf-8", errors="replace")
        fields.setdefault(name, value.encode("latin-1"))
    return fields


def get_registration_service() -> RegistrationService:
    """Return a request-scoped :class:`RegistrationService`."""

    return RegistrationService(get_settings(), ctx=service_context())


def json_response(payload: Any, *, status: int = 200) -> Response:
    """Return a JSON response enforcing a consistent MIME type."""

    response = jsonify(payload)
    response.status_code = status
    return response


def timing(func: F) -> F:
    """Decorator capturing handler execution time in milliseconds."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        start = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            elapsed_ms = (time.perf_counter() - start) * 1000
            request_endpoint = getattr(request, "endpoint", None)
            current_app.logger.debug(
                "request.elapsed",
                extra={"endpoint": request_endpoint, "elapsed_ms": round(elapsed_ms, 2)},
            )

    return wrapper  # type: ignore[return-value]
