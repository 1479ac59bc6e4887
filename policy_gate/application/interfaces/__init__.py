"""Application interfaces (ports): service protocols.

Define contracts for infrastructure implementations (DIP).
No runtime imports from policy_gate.infrastructure.
"""

from policy_gate.application.interfaces.services import (
    IMessageCatalog,
    ITransaction,
    ITransactionProvider,
    LocalizedMessage,
)

__all__ = [
    "IMessageCatalog",
    "ITransaction",
    "ITransactionProvider",
    "LocalizedMessage",
]
