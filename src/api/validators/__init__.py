"""Validators por provedor — validação de payloads para APIs externas.

Estrutura:
- mercadopago/: corpo de criação de preferência do checkout

Cada provedor tem seus próprios validators, garantindo SRP e isolamento de falhas.
"""

__all__: list[str] = []
