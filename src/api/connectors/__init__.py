"""Connectors por provedor — adapters de borda para APIs externas.

Estrutura:
- mercadopago/: API de pagamentos do Mercado Pago (webhook + REST)

Cada provedor tem seu próprio connector, garantindo SRP e isolamento de falhas.
"""

__all__: list[str] = []
