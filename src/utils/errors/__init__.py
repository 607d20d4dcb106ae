"""Exceções utilitárias compartilhadas."""

from .exceptions import (
    ConfigurationError,
    InfrastructureError,
    RedisConnectionError,
)

__all__ = [
    "ConfigurationError",
    "InfrastructureError",
    "RedisConnectionError",
]
