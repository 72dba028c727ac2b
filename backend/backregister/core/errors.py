"""Centralized HTML error handling for the registration page."""

from __future__ import annotations

import logging
from http import HTTPStatus

from flask import Flask, Response, request
from werkzeug.exceptions import HTTPException

from backregister.api.rendering import render_page
from backregister.core.logger import ensure_request_id

log = logging.getLogger(__name__)

GENERIC_NOTICE = "Something went wrong, please try again"


def _http_notice(status: int) -> str:
    """Short notice for an HTTP error, based on the status phrase."""
    try:
        return HTTPStatus(status).phrase
    except ValueError:
        return GENERIC_NOTICE


def init_app(app: Flask) -> None:
    """
    Attach HTML error handlers to the Flask app.

    Notes
    -----
    - Every error renders the registration page with a notice, never a
      traceback.
    - Emits 5xx with ``exc_info`` for traceability; 4xx as warnings.
    """

    @app.errorhandler(HTTPException)
    def handle_http_exception(err: HTTPException) -> Response:
        status = int(err.code or HTTPStatus.INTERNAL_SERVER_ERROR)
        level = log.error if status >= 500 else log.warning
        # Avoid leaking tracebacks for expected HTTP errors (no exc_info)
        level(
            "HTTPException: status=%s path=%s request_id=%s",
            status,
            request.path,
            ensure_request_id(),
        )
        return render_page(_http_notice(status), status=status)

    @app.errorhandler(Exception)
    def handle_unexpected_error(err: Exception) -> Response:
        # Unexpected server-side error; never leak internal details
        log.error(
            "Unhandled exception: path=%s request_id=%s",
            request.path,
            ensure_request_id(),
            exc_info=err,
        )
        return render_page(GENERIC_NOTICE, status=HTTPStatus.INTERNAL_SERVER_ERROR)
