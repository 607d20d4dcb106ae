"""Validadores do checkout Mercado Pago."""

from .preference import (
    PreferenceRequest,
    PreferenceValidationError,
    build_preference_payload,
    validate_preference_request,
)

__all__ = [
    "PreferenceRequest",
    "PreferenceValidationError",
    "build_preference_payload",
    "validate_preference_request",
]
