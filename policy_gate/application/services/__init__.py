"""Application services: the pipeline stages and the static registries they consult."""

from policy_gate.application.services.authorization_service import AuthorizationService
from policy_gate.application.services.error_translator import ErrorTranslator
from policy_gate.application.services.permission_service import PermissionRegistry
from policy_gate.application.services.response_normalizer import ResponseNormalizer
from policy_gate.application.services.role_service import RolePermissionTable
from policy_gate.application.services.transaction_coordinator import (
    HandlerTransaction,
    TransactionCoordinator,
    TransactionScope,
)
from policy_gate.application.services.validation_gate import ValidationGate

__all__ = [
    "AuthorizationService",
    "ErrorTranslator",
    "HandlerTransaction",
    "PermissionRegistry",
    "ResponseNormalizer",
    "RolePermissionTable",
    "TransactionCoordinator",
    "TransactionScope",
    "ValidationGate",
]
