"""Exceções compartilhadas de infraestrutura e configuração."""

from __future__ import annotations


class InfrastructureError(RuntimeError):
    """Base para falhas de infraestrutura transitórias."""


class RedisConnectionError(InfrastructureError):
    """Falha de conexão/timeout ao acessar Redis."""


class ConfigurationError(RuntimeError):
    """Configuração obrigatória ausente ou inválida."""
