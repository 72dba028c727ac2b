"""HTML rendering of the registration page."""

from __future__ import annotations

import logging

from flask import Response, render_template

log = logging.getLogger(__name__)

PAGE_TEMPLATE = "register.html"


def render_page(notice: str | None = None, *, status: int = 200) -> Response:
    """
    Render the registration form with an optional notice.

    :param notice: Message shown above the form, omitted when empty.
    :type notice: str | None
    :param status: HTTP status of the response.
    :type status: int
    :returns: HTML response; a plain-text fallback with the same status when
        the template cannot be rendered.
    :rtype: flask.Response
    """
    try:
        body = render_template(PAGE_TEMPLATE, notice=notice)
    except Exception:
        log.exception("Unexpected error rendering %s", PAGE_TEMPLATE)
        return Response(notice or "", status=status, mimetype="text/plain")
    return Response(body, status=status, mimetype="text/html")
