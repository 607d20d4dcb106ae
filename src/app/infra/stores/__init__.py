"""Stores — implementações concretas de persistência.

Módulos disponíveis:
    - redis_order_store: Store de status de pedidos usando Redis (Upstash)
    - memory_order_store: Store em memória para desenvolvimento/testes
"""

from __future__ import annotations

from app.infra.stores.memory_order_store import MemoryOrderStore
from app.infra.stores.redis_order_store import RedisOrderStore

__all__ = [
    # Memory (dev/test)
    "MemoryOrderStore",
    # Redis (Upstash)
    "RedisOrderStore",
]
