"""Convenience exports for application schemas."""

from __future__ import annotations

from .registration import FormBytes, HealthSchema, RegistrationFormSchema

__all__ = ["FormBytes", "HealthSchema", "RegistrationFormSchema"]
