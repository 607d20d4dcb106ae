"""Store de pedidos em memória — apenas para desenvolvimento e testes.

ATENÇÃO: Não usar em staging/production. Sem persistência entre reinícios
e sem coordenação entre processos.
"""

from __future__ import annotations

import asyncio
import time
from typing import TYPE_CHECKING

from app.protocols.order_store import OrderState, OrderStoreProtocol

if TYPE_CHECKING:
    from collections.abc import Callable


class MemoryOrderStore(OrderStoreProtocol):
    """Store de OrderState em memória — apenas para dev/test.

    Args:
        ttl_seconds: Expiração das entradas (0 = sem expiração)
    """

    def __init__(self, ttl_seconds: int = 0) -> None:
        self._ttl_seconds = ttl_seconds
        self._store: dict[str, tuple[OrderState, float | None]] = {}
        self._lock = asyncio.Lock()

    def _get_sync(self, reference: str) -> OrderState | None:
        entry = self._store.get(reference)
        if entry is None:
            return None
        state, expires_at = entry
        if expires_at is not None and time.time() > expires_at:
            del self._store[reference]
            return None
        return state

    async def get(self, reference: str) -> OrderState | None:
        """Carrega estado do pedido."""
        return self._get_sync(reference)

    async def transition(
        self,
        candidate: OrderState,
        should_replace: Callable[[OrderState | None, OrderState], bool],
    ) -> bool:
        """Aplica candidate sob lock (atômico dentro do processo)."""
        async with self._lock:
            current = self._get_sync(candidate.reference)
            if not should_replace(current, candidate):
                return False
            expires_at = time.time() + self._ttl_seconds if self._ttl_seconds > 0 else None
            self._store[candidate.reference] = (candidate, expires_at)
            return True
