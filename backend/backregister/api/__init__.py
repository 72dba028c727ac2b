"""Blueprint package aggregating the HTTP endpoints."""

from __future__ import annotations

from collections.abc import Iterable

from flask import Blueprint, Flask


def register_blueprint_group(
    app: Flask,
    *,
    base_prefix: str,
    entries: Iterable[tuple[Blueprint, str]],
) -> None:
    """Register related blueprints beneath a common prefix.

    Parameters
    ----------
    app:
        Application instance receiving the blueprints.
    base_prefix:
        Prefix applied to all entries, e.g. ``"/register"`` when the form is
        published under a sub-path. Empty mounts at the site root.
    entries:
        Iterable of ``(blueprint, relative_prefix)`` pairs where
        ``relative_prefix`` is appended to ``base_prefix``.
    """

    for bp, rel_prefix in entries:
        full_prefix = "/".join(
            segment for segment in [base_prefix.strip("/"), rel_prefix.strip("/")] if segment
        )
        app.register_blueprint(bp, url_prefix="/" + full_prefix if full_prefix else None)


def init_app(app: Flask) -> None:
    """Register the page and health blueprints on the Flask app."""

    from .health import bp as health_bp
    from .registration import bp as registration_bp

    # Each tuple: (blueprint, url_prefix_relative_to_base)
    registry: list[tuple[Blueprint, str]] = [
        (registration_bp, ""),
        (health_bp, ""),
    ]
    register_blueprint_group(app, base_prefix=app.config.get("URL_PREFIX", ""), entries=registry)


__all__ = ["init_app", "register_blueprint_group"]
