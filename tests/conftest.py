"""Global pytest fixtures for the registration proxy."""

from __future__ import annotations

import sys
from collections.abc import Generator
from pathlib import Path
from typing import Any

import pytest
import responses
from flask import Flask

# Ensure the ``backend`` package is importable
sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "backend"))

from backregister import create_app  # noqa: E402
from backregister.core.config import RegistrarSettings  # noqa: E402

from tests.helpers.upstream import SHARED_SECRET, UPSTREAM_BASE  # noqa: E402


class TestConfig:
    """Testing configuration for creating the Flask app.

    Notes
    -----
    - Points at a fake homeserver that is only ever reached through
      ``responses``.
    - Short timeouts so a missing mock fails fast.
    """

    TESTING = True
    DEBUG = False
    PROPAGATE_EXCEPTIONS = False
    SYNAPSE_SECRET = SHARED_SECRET
    SYNAPSE_SERVER = UPSTREAM_BASE + "/"
    UPSTREAM_CONNECT_TIMEOUT = 1.0
    UPSTREAM_READ_TIMEOUT = 1.0
    LOG_LEVEL = "WARNING"
    USE_PROXYFIX = False
    APP_VERSION = "test"


@pytest.fixture(scope="session")
def app() -> Flask:
    """Create a Flask application configured for testing."""

    return create_app(TestConfig, instance_relative_config=False)


@pytest.fixture()
def client(app: Flask) -> Any:
    """Return a Flask test client."""

    return app.test_client()


@pytest.fixture()
def cli_runner(app: Flask) -> Any:
    """Return a Flask CLI runner bound to the test application."""

    return app.test_cli_runner()


@pytest.fixture()
def settings() -> RegistrarSettings:
    """Settings matching :class:`TestConfig`."""

    return RegistrarSettings.from_mapping(vars(TestConfig))


@pytest.fixture()
def upstream() -> Generator[responses.RequestsMock, None, None]:
    """Intercept outbound HTTP; unregistered URLs fail like a refused connection."""

    with responses.RequestsMock(assert_all_requests_are_fired=False) as mock:
        yield mock
