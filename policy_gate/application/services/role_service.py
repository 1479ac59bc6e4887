"""Role-Permission Table: role -> default permission set, plus grants-all roles."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from types import MappingProxyType

from policy_gate.domain.entities import Principal
from policy_gate.domain.enums import Role


class RolePermissionTable:
    """Immutable default permissions per role.

    Roles listed in grants_all (e.g. SUPER_ADMIN) hold every permission
    and skip the permission union entirely.
    """

    def __init__(
        self,
        defaults: Mapping[Role, Iterable[str]],
        grants_all: Iterable[Role] = (),
    ) -> None:
        self._defaults: Mapping[Role, frozenset[str]] = MappingProxyType(
            {Role(role): frozenset(perms) for role, perms in defaults.items()}
        )
        self._grants_all = frozenset(Role(r) for r in grants_all)

    @property
    def roles(self) -> frozenset[Role]:
        """Roles known to this table (including grants-all roles)."""
        return frozenset(self._defaults) | self._grants_all

    def defaults_for(self, role: Role | None) -> frozenset[str]:
        """Default permissions for role; empty for unknown or missing roles."""
        if role is None:
            return frozenset()
        return self._defaults.get(role, frozenset())

    def grants_all(self, role: Role | None) -> bool:
        """True when role bypasses permission checks."""
        return role is not None and role in self._grants_all

    def effective_permissions(
        self, role: Role | None, explicit: Iterable[str] = ()
    ) -> frozenset[str]:
        """Union of the role's defaults and the principal's explicit permissions."""
        return self.defaults_for(role) | frozenset(explicit)

    def missing(
        self, role: Role | None, explicit: Iterable[str], required: Iterable[str]
    ) -> str | None:
        """First required permission not held, in required order; None when all are held."""
        if self.grants_all(role):
            return None
        held = self.effective_permissions(role, explicit)
        for permission in required:
            if permission not in held:
                return permission
        return None

    def has_permission(self, principal: Principal | None, permission: str) -> bool:
        """Whether principal holds permission (role default, explicit grant, or grants-all)."""
        if principal is None:
            return False
        return self.missing(principal.role, principal.permissions, (permission,)) is None
