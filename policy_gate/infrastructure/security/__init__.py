"""Security: JWT access tokens and principal resolution."""

from policy_gate.infrastructure.security.jwt import (
    create_access_token,
    principal_from_authorization,
    principal_from_token,
    verify_token,
)

__all__ = [
    "create_access_token",
    "principal_from_authorization",
    "principal_from_token",
    "verify_token",
]
