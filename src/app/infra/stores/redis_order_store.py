"""Redis Order Store — status de pedidos com Upstash Redis.

Cada pedido é um JSON em `order:{external_reference}`. A transição usa
WATCH/MULTI (compare-and-set otimista): se outra entrega alterar a chave
entre a leitura e a escrita, a transação é refeita com o valor novo.

Contrato de Keys:
    external_reference é o ID do pedido na loja, nunca dado do comprador.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING

from redis.exceptions import RedisError, WatchError

from app.protocols.order_store import OrderState, OrderStateDecodeError, OrderStoreProtocol
from utils.errors import RedisConnectionError

if TYPE_CHECKING:
    from collections.abc import Callable

    from redis.asyncio import Redis as AsyncRedis

logger = logging.getLogger(__name__)

ORDER_PREFIX = "order:"
MAX_TRANSITION_ATTEMPTS = 5


def _decode_state(raw: bytes | str | None) -> OrderState | None:
    if raw is None:
        return None
    try:
        if isinstance(raw, bytes):
            raw = raw.decode("utf-8")
        return OrderState.from_dict(json.loads(raw))
    except (ValueError, KeyError, TypeError) as exc:
        raise OrderStateDecodeError("Estado do pedido inválido no Redis") from exc


class RedisOrderStore(OrderStoreProtocol):
    """Store de OrderState usando Redis assíncrono.

    Args:
        async_redis_client: Cliente Redis assíncrono
        ttl_seconds: Expiração das chaves (0 = sem expiração)
    """

    def __init__(self, async_redis_client: AsyncRedis[bytes], ttl_seconds: int = 0) -> None:
        self._redis = async_redis_client
        self._ttl_seconds = ttl_seconds

    def _key(self, reference: str) -> str:
        """Gera chave Redis com namespace."""
        return f"{ORDER_PREFIX}{reference}"

    async def get(self, reference: str) -> OrderState | None:
        try:
            raw = await self._redis.get(self._key(reference))
        except RedisError as exc:
            raise RedisConnectionError("Falha ao carregar pedido no Redis") from exc
        return _decode_state(raw)

    async def transition(
        self,
        candidate: OrderState,
        should_replace: Callable[[OrderState | None, OrderState], bool],
    ) -> bool:
        key = self._key(candidate.reference)
        payload = json.dumps(candidate.to_dict())
        try:
            async with self._redis.pipeline(transaction=True) as pipe:
                for attempt in range(MAX_TRANSITION_ATTEMPTS):
                    try:
                        await pipe.watch(key)
                        current = _decode_state(await pipe.get(key))
                        if not should_replace(current, candidate):
                            await pipe.unwatch()
                            return False
                        pipe.multi()
                        if self._ttl_seconds > 0:
                            pipe.set(key, payload, ex=self._ttl_seconds)
                        else:
                            pipe.set(key, payload)
                        await pipe.execute()
                        return True
                    except WatchError:
                        logger.debug(
                            "order_transition_conflict",
                            extra={"order_reference": candidate.reference, "attempt": attempt},
                        )
                        await pipe.reset()
        except RedisError as exc:
            raise RedisConnectionError("Falha ao gravar pedido no Redis") from exc

        raise RedisConnectionError("Conflito persistente ao gravar pedido")
