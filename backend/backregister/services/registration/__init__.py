"""Registration pipeline: validator, authenticator, upstream registrar."""
