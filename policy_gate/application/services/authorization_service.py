"""Authorization engine: ordered, short-circuiting policy checks for one invocation.

Check order (first failure wins):
    1. authentication (principal present, unless the action allows guests)
    2. token validity (expired / malformed) - before any role field is read
    3. account status (suspended / terminated)
    4. role membership
    5. permissions (descriptor, else Permission Registry; grants-all roles bypass)
    6. ownership of the target account
    7. tenant scope
    8. phone verification
    9. custom predicate
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Mapping
from typing import Any

from policy_gate.application.services.permission_service import PermissionRegistry
from policy_gate.application.services.role_service import RolePermissionTable
from policy_gate.domain.entities import ActionDescriptor, Principal
from policy_gate.domain.enums import AccountStatus, ErrorKind
from policy_gate.domain.exceptions import SentinelError
from policy_gate.shared.context import ExecutionContext

logger = logging.getLogger(__name__)


def _normalize_id(value: Any) -> str:
    """Compare ids as strings: transports deliver numeric ids as str or int."""
    return str(value).strip()


class AuthorizationService:
    """Centralized policy checks driven by an ActionDescriptor.

    Registries are injected so tests (and each client surface) can use
    their own tables.
    """

    def __init__(
        self,
        permission_registry: PermissionRegistry,
        role_table: RolePermissionTable,
        codes: Mapping[ErrorKind, str],
    ) -> None:
        self.permission_registry = permission_registry
        self.role_table = role_table
        self.codes = codes

    def _deny(self, kind: ErrorKind, details: str | None = None, **extensions: Any) -> SentinelError:
        return SentinelError(self.codes[kind], details, **extensions)

    def required_permissions(self, descriptor: ActionDescriptor) -> tuple[str, ...]:
        """Explicit descriptor permissions win; otherwise the registry entry (may be empty)."""
        if descriptor.permissions:
            return descriptor.permissions
        return self.permission_registry.required_for(descriptor.name)

    async def authorize(
        self,
        principal: Principal | None,
        descriptor: ActionDescriptor,
        args: Mapping[str, Any],
        context: ExecutionContext,
    ) -> None:
        """Raise SentinelError for the first failed check; return None when authorized."""
        if not descriptor.require_auth:
            return
        if principal is None:
            if descriptor.allow_guest:
                return
            raise self._deny(ErrorKind.UNAUTHENTICATED)

        # Expired tokens may carry no role at all; check before touching role fields.
        if principal.is_expired:
            logger.info("Expired token for %s (marker=%s)", descriptor.name, principal.error)
            raise self._deny(ErrorKind.TOKEN_EXPIRED)
        if principal.is_malformed or not principal.id:
            raise self._deny(ErrorKind.INVALID_TOKEN)

        if principal.status == AccountStatus.SUSPENDED:
            raise self._deny(ErrorKind.ACCOUNT_SUSPENDED)
        if principal.status == AccountStatus.TERMINATED:
            raise self._deny(ErrorKind.ACCOUNT_TERMINATED)

        if descriptor.roles and principal.role not in descriptor.roles:
            logger.info(
                "Role %s not allowed for %s (allowed: %s)",
                principal.role,
                descriptor.name,
                ", ".join(r.value for r in descriptor.roles),
            )
            raise self._deny(ErrorKind.UNAUTHORIZED)

        self._check_permissions(principal, descriptor)

        if descriptor.check_ownership:
            target = args.get(descriptor.ownership_arg)
            if target not in (None, "") and _normalize_id(target) != _normalize_id(principal.id):
                raise self._deny(ErrorKind.UNAUTHORIZED)

        if descriptor.check_tenant_scope:
            self._check_tenant_scope(principal, descriptor, args)

        if descriptor.require_phone_verified and not principal.phone_verified:
            raise self._deny(ErrorKind.PHONE_NOT_VERIFIED)

        if descriptor.custom_check is not None:
            allowed = descriptor.custom_check(context, args)
            if inspect.isawaitable(allowed):
                allowed = await allowed
            if not allowed:
                raise self._deny(ErrorKind.UNAUTHORIZED)

    def _check_permissions(self, principal: Principal, descriptor: ActionDescriptor) -> None:
        required = self.required_permissions(descriptor)
        if not required:
            return
        if self.role_table.grants_all(principal.role):
            logger.debug("%s grants all permissions for %s", principal.role, descriptor.name)
            return
        missing = self.role_table.missing(principal.role, principal.permissions, required)
        if missing is not None:
            logger.info(
                "Insufficient permission: %s (%s) lacks %s",
                principal.role,
                descriptor.name,
                missing,
            )
            raise self._deny(ErrorKind.INSUFFICIENT_PERMISSIONS, missing, permission=missing)
        logger.debug("Permission check passed for %s: %s", descriptor.name, ", ".join(required))

    def _check_tenant_scope(
        self,
        principal: Principal,
        descriptor: ActionDescriptor,
        args: Mapping[str, Any],
    ) -> None:
        # A valid token always carries a tenant; its absence means the token is not trustworthy.
        if not principal.tenant_id:
            logger.error("Principal %s has no tenant for %s", principal.id, descriptor.name)
            raise self._deny(ErrorKind.UNAUTHENTICATED)
        target = args.get(descriptor.tenant_arg)
        if target in (None, ""):
            return
        if _normalize_id(target) != _normalize_id(principal.tenant_id):
            logger.warning(
                "Tenant mismatch for %s: principal=%s tenant=%s requested=%s",
                descriptor.name,
                principal.id,
                principal.tenant_id,
                target,
            )
            raise self._deny(ErrorKind.TENANT_ACCESS_DENIED)

    def has_permission(self, principal: Principal | None, permission: str) -> bool:
        """Helper for handlers that need an inline permission check."""
        return self.role_table.has_permission(principal, permission)

    def require_grants_all(self, principal: Principal | None) -> None:
        """Raise unless principal holds a grants-all role (e.g. SUPER_ADMIN)."""
        if principal is None:
            raise self._deny(ErrorKind.UNAUTHENTICATED)
        if not self.role_table.grants_all(principal.role):
            raise self._deny(ErrorKind.UNAUTHORIZED)
