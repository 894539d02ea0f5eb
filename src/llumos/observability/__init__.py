"""Logging setup and sensitive-field redaction."""

from llumos.observability.redaction import (
    RedactingFilter,
    configure_logging,
    redact_sensitive_fields,
)

__all__ = ["RedactingFilter", "configure_logging", "redact_sensitive_fields"]
