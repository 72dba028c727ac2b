"""Application settings with environment-based simple classes."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Final
from urllib.parse import urlsplit

from dotenv import load_dotenv

# Public selector env var (keep neutral name to avoid collisions)
ENV_VAR: Final[str] = "APP_ENV"  # 'development' | 'testing' | 'production'

SETTINGS_EXTENSION_KEY: Final[str] = "registrar_settings"


# Loads .env in development (no-op when missing)
load_dotenv()


def env_bool(name: str, default: bool = False) -> bool:
    """Parse a boolean flag from an environment variable.

    Parameters
    ----------
    name: str
        Environment variable to inspect.
    default: bool, optional
        Value returned when the variable is unset. Defaults to ``False``.

    Returns
    -------
    bool
        ``True`` if the value resembles ``{"1", "true", "yes", "y", "on"}``
        ignoring case; otherwise ``False`` or ``default`` when missing.
    """
    val = os.getenv(name)
    if val is None:
        return default
    return str(val).strip().lower() in {"1", "true", "yes", "y", "on"}


class ConfigurationError(RuntimeError):
    """Raised at startup when required settings are missing or invalid."""


def env_float(name: str, default: float) -> float:
    """Parse a float from an environment variable, falling back to ``default``.

    Raises
    ------
    ConfigurationError
        When the variable is set but is not a number.
    """
    val = os.getenv(name)
    if val is None or not val.strip():
        return default
    try:
        return float(val)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be a number, got {val!r}") from exc


class BaseConfig:
    """Base configuration shared across environments.

    Attributes
    ----------
    SYNAPSE_SECRET: str | None
        Shared secret configured on the homeserver as
        ``registration_shared_secret``. Required.
    SYNAPSE_SERVER: str | None
        Base URL of the homeserver, e.g. ``https://matrix.example.org``.
        Required.
    UPSTREAM_CONNECT_TIMEOUT: float
        Seconds allowed to open the connection to the homeserver.
    UPSTREAM_READ_TIMEOUT: float
        Seconds allowed between bytes of the homeserver response.
    PROPAGATE_EXCEPTIONS: bool
        Controls Flask error propagation.
    LOG_LEVEL: str
        Root logging verbosity (``INFO`` by default).
    URL_PREFIX: str
        Path the form is published under (site root by default).
    USE_PROXYFIX: bool
        Trust one hop of ``X-Forwarded-*`` headers.
    APP_VERSION: str
        Reported by the health endpoint.
    DEBUG: bool
        Toggles Flask debug mode.
    TESTING: bool
        Enables Flask testing mode when ``True``.

    Notes
    -----
    Values are primarily sourced from environment variables, enabling
    configuration without code changes.
    """

    # Upstream homeserver
    SYNAPSE_SECRET = os.getenv("SYNAPSE_SECRET")
    SYNAPSE_SERVER = os.getenv("SYNAPSE_SERVER")
    UPSTREAM_CONNECT_TIMEOUT = env_float("UPSTREAM_CONNECT_TIMEOUT", 5.0)
    UPSTREAM_READ_TIMEOUT = env_float("UPSTREAM_READ_TIMEOUT", 30.0)

    # Flask
    PROPAGATE_EXCEPTIONS = False

    # Mount point of the page, e.g. "/register" behind a shared vhost
    URL_PREFIX = os.getenv("URL_PREFIX", "")

    # Logging & proxy
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    USE_PROXYFIX = env_bool("USE_PROXYFIX", True)
    APP_VERSION = os.getenv("APP_VERSION", "dev")

    # Flask built-ins
    DEBUG = False
    TESTING = False


class DevelopmentConfig(BaseConfig):
    """Configuration tailored for local development."""

    DEBUG = env_bool("FLASK_DEBUG", True)


class TestingConfig(BaseConfig):
    """Configuration for automated test runs.

    Notes
    -----
    - Forces ``TESTING`` mode and disables debug logs.
    - Points at a placeholder homeserver so nothing real is contacted unless
      ``SYNAPSE_SERVER`` is exported.
    """

    TESTING = True
    DEBUG = False
    SYNAPSE_SECRET = os.getenv("SYNAPSE_SECRET", "test-shared-secret")
    SYNAPSE_SERVER = os.getenv("SYNAPSE_SERVER", "https://synapse.test")
    UPSTREAM_CONNECT_TIMEOUT = 1.0
    UPSTREAM_READ_TIMEOUT = 1.0


class ProductionConfig(BaseConfig):
    """Configuration defaults for production deployments."""

    DEBUG = False
    PROPAGATE_EXCEPTIONS = False


# Map names -> classes (simple, explicit)
CONFIG_MAP: Mapping[str, type[BaseConfig]] = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
}


def get_config() -> type[BaseConfig]:
    """Return the configuration class inferred from ``APP_ENV``.

    Returns
    -------
    type[BaseConfig]
        Class to pass to :meth:`flask.Config.from_object`.

    Notes
    -----
    Falls back to :class:`DevelopmentConfig` when ``APP_ENV`` is unset or
    unknown.
    """
    name = os.getenv(ENV_VAR, "development").strip().lower()
    return CONFIG_MAP.get(name, DevelopmentConfig)


@dataclass(frozen=True, slots=True)
class RegistrarSettings:
    """
    Process-wide, immutable settings consumed by the registration pipeline.

    :param shared_secret: MAC key shared with the homeserver.
    :type shared_secret: bytes
    :param endpoint: Base URL of the homeserver.
    :type endpoint: str
    :param connect_timeout: Connect timeout for the upstream call, in seconds.
    :type connect_timeout: float
    :param read_timeout: Read timeout for the upstream call, in seconds.
    :type read_timeout: float
    """

    shared_secret: bytes
    endpoint: str
    connect_timeout: float = 5.0
    read_timeout: float = 30.0

    def __repr__(self) -> str:
        return (
            f"RegistrarSettings(shared_secret=<redacted>, endpoint={self.endpoint!r}, "
            f"connect_timeout={self.connect_timeout}, read_timeout={self.read_timeout})"
        )

    @property
    def timeout(self) -> tuple[float, float]:
        """``(connect, read)`` tuple in the shape :mod:`requests` expects."""
        return (self.connect_timeout, self.read_timeout)

    @property
    def upstream_host(self) -> str:
        """Network location of the homeserver, safe to expose."""
        return urlsplit(self.endpoint).netloc or self.endpoint

    @classmethod
    def from_mapping(cls, config: Mapping[str, Any]) -> RegistrarSettings:
        """
        Build settings from a Flask config (or any mapping).

        :param config: Mapping holding ``SYNAPSE_*`` and ``UPSTREAM_*`` keys.
        :type config: Mapping[str, Any]
        :returns: Validated settings.
        :rtype: RegistrarSettings
        :raises ConfigurationError: When the secret or server is missing, or
            the server is not an absolute http(s) URL.
        """
        secret = config.get("SYNAPSE_SECRET")
        if not secret:
            raise ConfigurationError("must specify SYNAPSE_SECRET environment variable")

        server = config.get("SYNAPSE_SERVER")
        if not server:
            raise ConfigurationError("must specify SYNAPSE_SERVER environment variable")

        parts = urlsplit(str(server))
        if parts.scheme not in {"http", "https"} or not parts.netloc:
            raise ConfigurationError(f"SYNAPSE_SERVER is not an http(s) URL: {server!r}")

        if isinstance(secret, str):
            secret = secret.encode("utf-8")

        return cls(
            shared_secret=bytes(secret),
            endpoint=str(server),
            connect_timeout=float(config.get("UPSTREAM_CONNECT_TIMEOUT", 5.0)),
            read_timeout=float(config.get("UPSTREAM_READ_TIMEOUT", 30.0)),
        )
