"""Application layer: interfaces, pipeline stages, pipeline and action registry.

Depends only on domain and protocol definitions (DIP).
Infrastructure implements the interfaces (transaction provider, message catalog).
"""

from policy_gate.application.interfaces import (
    IMessageCatalog,
    ITransaction,
    ITransactionProvider,
    LocalizedMessage,
)
from policy_gate.application.pipeline import PolicyPipeline, WrappedAction
from policy_gate.application.registry import ActionRegistry
from policy_gate.application.services import (
    AuthorizationService,
    ErrorTranslator,
    PermissionRegistry,
    ResponseNormalizer,
    RolePermissionTable,
    TransactionCoordinator,
    ValidationGate,
)

__all__ = [
    "ActionRegistry",
    "AuthorizationService",
    "ErrorTranslator",
    "IMessageCatalog",
    "ITransaction",
    "ITransactionProvider",
    "LocalizedMessage",
    "PermissionRegistry",
    "PolicyPipeline",
    "ResponseNormalizer",
    "RolePermissionTable",
    "TransactionCoordinator",
    "ValidationGate",
    "WrappedAction",
]
