"""Application factory wiring settings, logging and blueprints."""

from __future__ import annotations

from flask import Flask

from backregister.core.config import (
    SETTINGS_EXTENSION_KEY,
    BaseConfig,
    RegistrarSettings,
    get_config,
)
from backregister.core.logger import configure_logging, init_app as init_logging


def create_app(
    config: str | type[BaseConfig] | object | None = None,
    *,
    instance_relative_config: bool = True,
    instance_config_filename: str = "config.py",
) -> Flask:
    """Build and configure the Flask application.

    Raises :class:`~backregister.core.config.ConfigurationError` when the
    shared secret or homeserver address is missing, so a misconfigured
    process never starts serving.
    """

    app = Flask(__name__, instance_relative_config=instance_relative_config)

    app.config.from_object(get_config() if config is None else config)
    if instance_relative_config and instance_config_filename:
        app.config.from_pyfile(instance_config_filename, silent=True)

    configure_logging(app.config.get("LOG_LEVEL", "INFO"))

    # Read once; immutable for the process lifetime
    settings = RegistrarSettings.from_mapping(app.config)
    app.extensions[SETTINGS_EXTENSION_KEY] = settings
    app.logger.info("registration proxy for %s", settings.upstream_host)

    # Proxy headers if running behind a reverse proxy
    from backregister.core import proxy

    proxy.init_app(app)

    init_logging(app)

    from backregister.api import init_app as init_api

    init_api(app)

    from backregister.core import errors

    errors.init_app(app)

    from backregister import cli as app_cli

    app_cli.init_app(app)

    return app
