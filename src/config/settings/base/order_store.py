"""Settings do store de pedidos.

Configurações do backend onde o status local dos pedidos é persistido.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import TYPE_CHECKING, Literal

if TYPE_CHECKING:
    from config.settings.base.core import BaseSettings

OrderStoreBackend = Literal["memory", "redis"]


@dataclass(frozen=True)
class OrderStoreSettings:
    """Configurações do store de pedidos.

    Attributes:
        backend: Backend para status de pedidos (memory|redis)
        ttl_seconds: TTL das entradas de pedido (0 = sem expiração)
    """

    backend: OrderStoreBackend = "memory"
    ttl_seconds: int = 0

    def validate(self, base: BaseSettings) -> list[str]:
        """Valida configurações do store de pedidos.

        Args:
            base: BaseSettings para verificar ambiente.

        Returns:
            Lista de erros de validação.
        """
        errors: list[str] = []

        if self.backend not in ("memory", "redis"):
            errors.append(f"ORDER_STORE_BACKEND inválido: {self.backend}")

        if self.backend == "memory" and not base.is_development:
            errors.append(
                "ORDER_STORE_BACKEND=memory proibido em staging/production. Use Redis."
            )

        if self.backend == "redis" and not base.redis_url:
            errors.append("ORDER_STORE_BACKEND=redis requer REDIS_URL configurado")

        if self.ttl_seconds < 0:
            errors.append("ORDER_STORE_TTL_SECONDS deve ser >= 0")

        return errors


def _load_order_store_from_env() -> OrderStoreSettings:
    """Carrega OrderStoreSettings de variáveis de ambiente."""
    backend_str = os.getenv("ORDER_STORE_BACKEND", "memory").lower()
    backend: OrderStoreBackend = "redis" if backend_str == "redis" else "memory"
    return OrderStoreSettings(
        backend=backend,
        ttl_seconds=int(os.getenv("ORDER_STORE_TTL_SECONDS", "0")),
    )


@lru_cache(maxsize=1)
def get_order_store_settings() -> OrderStoreSettings:
    """Retorna instância cacheada de OrderStoreSettings."""
    return _load_order_store_from_env()
