"""
RegistrationService
===================

Process-level service that runs one registration attempt end to end:

- Validates the submission (username first, then password).
- Derives the shared-secret MAC over the username.
- Submits the authenticated payload to the homeserver and classifies the
  answer.

Every known failure is folded into a :class:`RegistrationResult`; the caller
only has to render it.
"""

from __future__ import annotations

from backregister.core.config import RegistrarSettings
from backregister.services._shared.base import BaseService, ServiceContext
from backregister.services._shared.errors import ServiceError
from backregister.services.registration.authenticator import authenticate
from backregister.services.registration.dto import Outcome, RegistrationResult
from backregister.services.registration.registrar import UpstreamRegistrar
from backregister.services.registration.validator import validate


class RegistrationService(BaseService):
    """
    Orchestrates validation, MAC derivation and upstream submission.

    :param settings: Immutable process-wide settings.
    :type settings: :class:`RegistrarSettings`
    :param registrar: Optional registrar, built from ``settings`` when omitted.
    :type registrar: :class:`UpstreamRegistrar` | None
    :param ctx: Optional request-scoped context.
    :type ctx: :class:`ServiceContext` | None
    """

    def __init__(
        self,
        settings: RegistrarSettings,
        *,
        registrar: UpstreamRegistrar | None = None,
        ctx: ServiceContext | None = None,
    ) -> None:
        super().__init__(ctx=ctx)
        self.settings = settings
        self.registrar = registrar or UpstreamRegistrar(timeout=settings.timeout)

    def submit(self, username: str | bytes, password: str | bytes) -> RegistrationResult:
        """
        Register ``username`` on the homeserver.

        :param username: Username as received from the form.
        :type username: str | bytes
        :param password: Password as received from the form, raw bytes when
            the client sent a URL-encoded body.
        :type password: str | bytes
        :returns: Terminal result; never raises for known failures.
        :rtype: :class:`RegistrationResult`
        """
        try:
            request = validate(username, password)
            mac = authenticate(request.username, self.settings.shared_secret)
            result = self.registrar.register(
                request.username, request.password, mac, self.settings.endpoint
            )
        except ServiceError as exc:
            return self.translate_exceptions(exc)

        extra = self.log_extra(
            outcome=result.outcome.value,
            upstream_status=result.upstream_status,
            upstream=self.settings.upstream_host,
        )
        if result.outcome is Outcome.REGISTERED:
            self.log.info("registered user %s", request.username, extra=extra)
        else:
            self.log.warning("homeserver rejected user %s", request.username, extra=extra)
        return result
