"""Protocolos de domínio para o status local de pedidos."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from collections.abc import Callable

    from app.protocols.models import PaymentRecord


class OrderStateDecodeError(ValueError):
    """Estado persistido de um pedido não pôde ser lido (JSON ou campos inválidos)."""


@dataclass(frozen=True, slots=True)
class OrderState:
    """Status local de um pedido, chaveado pela external_reference.

    Atributos:
        reference: external_reference do pedido
        status: Status local (pending, authorized, paid, failed, refunded)
        payment_id: Último pagamento que alterou o status
        payment_status: Status do pagamento no Mercado Pago
        updated_at: Epoch (segundos) da última alteração
    """

    reference: str
    status: str
    payment_id: str
    payment_status: str
    updated_at: float

    def to_dict(self) -> dict[str, Any]:
        """Serializa para persistência."""
        return {
            "reference": self.reference,
            "status": self.status,
            "payment_id": self.payment_id,
            "payment_status": self.payment_status,
            "updated_at": self.updated_at,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> OrderState:
        """Deserializa de persistência."""
        return cls(
            reference=str(data["reference"]),
            status=str(data["status"]),
            payment_id=str(data.get("payment_id", "")),
            payment_status=str(data.get("payment_status", "")),
            updated_at=float(data.get("updated_at", 0.0)),
        )


class OrderStoreProtocol(ABC):
    """Contrato assíncrono para armazenamento de OrderState.

    `transition` deve ser atômico por referência: a decisão da política e a
    escrita acontecem sem que outra entrega concorrente intercale.
    """

    @abstractmethod
    async def get(self, reference: str) -> OrderState | None: ...

    @abstractmethod
    async def transition(
        self,
        candidate: OrderState,
        should_replace: Callable[[OrderState | None, OrderState], bool],
    ) -> bool:
        """Aplica `candidate` se a política permitir.

        Returns:
            True se o estado foi gravado; False se mantido.
        """


class OrderStatusUpdaterProtocol(Protocol):
    """Colaborador que aplica um pagamento ao status local do pedido.

    Deve ser idempotente: a mesma notificação pode chegar mais de uma vez.
    """

    async def update(self, payment: PaymentRecord) -> None: ...
