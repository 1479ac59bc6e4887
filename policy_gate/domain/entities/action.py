"""Action descriptor: static per-action policy configuration.

Supplied when an action is wrapped and immutable afterwards.
"""

from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from policy_gate.domain.enums import Role

if TYPE_CHECKING:
    from policy_gate.shared.context import ExecutionContext

CustomCheck = Callable[["ExecutionContext", Mapping[str, Any]], bool | Awaitable[bool]]


@dataclass(frozen=True)
class ActionDescriptor:
    """Policy for one action.

    Attributes:
        name: Action name; also the Permission Registry lookup key.
        require_auth: When False, the authorization engine performs no checks.
        roles: Allowed roles; empty means any role.
        permissions: Explicit required permissions; empty falls back to the registry.
        check_ownership: Compare args[ownership_arg] with the principal id.
        check_tenant_scope: Require a tenant on the principal and match args[tenant_arg].
        required_fields: Fields that must be present in args["input"] (or args).
        custom_check: Extra predicate called with (context, args); falsy denies.
        mutating: Run the handler inside a transaction.
        allow_guest: With require_auth, let callers without a principal through.
        require_phone_verified: Deny principals whose phone is not verified.
        ownership_arg: Args key naming the target account id.
        tenant_arg: Args key naming the target tenant id.
    """

    name: str
    require_auth: bool = True
    roles: tuple[Role, ...] = ()
    permissions: tuple[str, ...] = ()
    check_ownership: bool = False
    check_tenant_scope: bool = False
    required_fields: tuple[str, ...] = ()
    custom_check: CustomCheck | None = None
    mutating: bool = False
    allow_guest: bool = False
    require_phone_verified: bool = False
    ownership_arg: str = "account_id"
    tenant_arg: str = "tenant_id"

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise ValueError("ActionDescriptor.name is required")
        # Accept lists from callers but keep the descriptor hashable and immutable.
        object.__setattr__(self, "roles", tuple(Role(r) for r in self.roles))
        object.__setattr__(self, "permissions", tuple(self.permissions))
        object.__setattr__(self, "required_fields", tuple(self.required_fields))
