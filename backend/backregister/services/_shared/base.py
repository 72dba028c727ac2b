from __future__ import annotations

import logging
from dataclasses import dataclass

from backregister.services._shared.errors import (
    InfrastructureError,
    InputError,
    ServiceError,
)
from backregister.services.registration.dto import RegistrationResult


@dataclass(slots=True)
class ServiceContext:
    """
    Carry cross-cutting request-scoped data (request ids, client address).

    :param request_id: Correlation id for logging/tracing.
    :param remote_addr: Client address as seen after proxy handling.
    """

    request_id: str | None = None
    remote_addr: str | None = None


class BaseService:
    """
    Base class for application services.

    Responsibilities
    ----------------
    * Hold the request-scoped :class:`ServiceContext`.
    * Centralize the translation of service errors into results, with the
      log level that matches each error family.

    Notes
    -----
    Services stay framework-agnostic: no Flask imports below this layer.
    """

    log = logging.getLogger("backregister.services")

    def __init__(self, *, ctx: ServiceContext | None = None) -> None:
        """
        Initialize the base service.

        :param ctx: Optional request-scoped context (tracing, client address).
        :type ctx: ServiceContext | None
        """
        self.ctx = ctx or ServiceContext()

    def log_extra(self, **fields: object) -> dict[str, object]:
        """
        Build ``extra`` for a log call, stamped with the request context.

        :param fields: Additional structured fields for the record.
        :returns: Mapping suitable for ``logging``'s ``extra`` argument.
        :rtype: dict[str, object]
        """
        return {
            "request_id": self.ctx.request_id,
            "remote_addr": self.ctx.remote_addr,
            **fields,
        }

    # -------------------------- Error handling ------------------------------

    def translate_exceptions(self, exc: ServiceError) -> RegistrationResult:
        """
        Map a service-level error to its terminal result, logging it.

        :param exc: Exception raised within the pipeline.
        :type exc: ServiceError
        :returns: Result carrying the error's outcome.
        :rtype: RegistrationResult
        """
        extra = self.log_extra(outcome=exc.outcome.value)
        if isinstance(exc, InfrastructureError):
            # 5xx: operators need the cause
            self.log.error("registration failed: %s", exc, exc_info=exc, extra=extra)
        elif isinstance(exc, InputError):
            self.log.info("registration input rejected: %s", exc, extra=extra)
        else:
            self.log.warning("registration failed: %s", exc, extra=extra)
        return RegistrationResult(exc.outcome)
