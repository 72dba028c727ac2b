"""Health check endpoint."""

from __future__ import annotations

from flask import Blueprint, current_app

from backregister.api.deps import get_settings, json_response, timing
from backregister.schemas import HealthSchema

bp = Blueprint("health", __name__)

health_schema = HealthSchema()


@bp.get("/health")
@timing
def healthcheck():
    """Return application health and the configured homeserver host.

    The homeserver is not contacted: a health check must not depend on it.
    """

    payload = {
        "status": "ok",
        "version": current_app.config.get("APP_VERSION", "dev"),
        "upstream": get_settings().upstream_host,
    }
    return json_response(health_schema.dump(payload))
