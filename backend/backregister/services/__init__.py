"""Service layer public API.

Re-exports
----------
- Base primitives (from ``backregister.services._shared.base``)
    * :class:`BaseService`
    * :class:`ServiceContext`

- Registration pipeline (from ``backregister.services.registration``)
    * :class:`RegistrationService`
    * Stages: :func:`validate`, :func:`authenticate`, :class:`UpstreamRegistrar`
    * DTOs: :class:`RegistrationRequest`, :class:`AuthenticatedPayload`,
      :class:`Outcome`, :class:`RegistrationResult`
"""

from __future__ import annotations

# Errors first: they pull in the registration DTOs
from ._shared.errors import (
    EmptyUsername,
    SerializationError,
    ServiceError,
    UpstreamUnreachable,
    WeakPassword,
)
from ._shared.base import BaseService, ServiceContext
from .registration.authenticator import authenticate
from .registration.dto import (
    AuthenticatedPayload,
    Outcome,
    RegistrationRequest,
    RegistrationResult,
)
from .registration.registrar import UpstreamRegistrar
from .registration.service import RegistrationService
from .registration.validator import validate

__all__ = [
    # Base
    "BaseService",
    "ServiceContext",
    # Errors
    "ServiceError",
    "EmptyUsername",
    "WeakPassword",
    "SerializationError",
    "UpstreamUnreachable",
    # Registration
    "RegistrationService",
    "UpstreamRegistrar",
    "authenticate",
    "validate",
    "RegistrationRequest",
    "AuthenticatedPayload",
    "Outcome",
    "RegistrationResult",
]
