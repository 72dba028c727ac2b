"""Registration form Marshmallow schemas."""

from __future__ import annotations

from typing import Any

from marshmallow import EXCLUDE, Schema, fields


class FormBytes(fields.Field):
    """Form value kept as the raw bytes the client percent-encoded.

    ``str`` input (already-decoded multipart values) is re-encoded as UTF-8.
    """

    default_error_messages = {"invalid": "Not a valid form value."}

    def _deserialize(self, value: Any, attr: str | None, data: Any, **kwargs: Any) -> bytes:
        if isinstance(value, bytes):
            return value
        if isinstance(value, str):
            return value.encode("utf-8")
        raise self.make_error("invalid")


class RegistrationFormSchema(Schema):
    """Form fields posted by the registration page.

    Values are passed through untouched; the service layer owns the rules
    for what counts as a valid username or password. Missing fields load as
    empty values so they are reported like blank ones.
    """

    class Meta:
        unknown = EXCLUDE

    username = FormBytes(data_key="Username", load_default=b"")
    password = FormBytes(data_key="Password", load_default=b"")


class HealthSchema(Schema):
    """Response payload of the health endpoint."""

    status = fields.String(required=True)
    version = fields.String(required=True)
    upstream = fields.String(required=True)


__all__ = ["FormBytes", "HealthSchema", "RegistrationFormSchema"]
