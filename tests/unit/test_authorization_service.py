"""Tests for AuthorizationService: check order, roles, permissions, ownership, tenant scope."""

import pytest

from policy_gate.application.services.authorization_service import AuthorizationService
from policy_gate.application.services.permission_service import PermissionRegistry
from policy_gate.application.services.role_service import RolePermissionTable
from policy_gate.domain.entities import ActionDescriptor, Principal
from policy_gate.domain.enums import AccountStatus, Role, TokenState
from policy_gate.domain.exceptions import SentinelError
from policy_gate.infrastructure.surfaces import admin, web
from policy_gate.shared.context import ExecutionContext


@pytest.fixture
def engine() -> AuthorizationService:
    return AuthorizationService(
        PermissionRegistry(web.ACTION_PERMISSIONS),
        RolePermissionTable(web.ROLE_PERMISSIONS),
        web.CODES,
    )


@pytest.fixture
def admin_engine() -> AuthorizationService:
    return AuthorizationService(
        PermissionRegistry(admin.ACTION_PERMISSIONS),
        RolePermissionTable(admin.ROLE_PERMISSIONS, grants_all=(Role.SUPER_ADMIN,)),
        admin.CODES,
    )


def _ctx(descriptor: ActionDescriptor, principal: Principal | None) -> ExecutionContext:
    return ExecutionContext(action=descriptor, principal=principal, language="vi")


async def _authorize(
    engine: AuthorizationService,
    principal: Principal | None,
    descriptor: ActionDescriptor,
    args: dict | None = None,
) -> None:
    await engine.authorize(principal, descriptor, args or {}, _ctx(descriptor, principal))


async def _denied_code(engine, principal, descriptor, args=None) -> str:
    with pytest.raises(SentinelError) as exc_info:
        await _authorize(engine, principal, descriptor, args)
    return exc_info.value.code


class TestAuthentication:
    async def test_missing_principal_is_unauthenticated(self, engine: AuthorizationService) -> None:
        assert await _denied_code(engine, None, ActionDescriptor("list_orders")) == "S2001"

    async def test_require_auth_false_skips_all_checks(self, engine: AuthorizationService) -> None:
        descriptor = ActionDescriptor("public_menu", require_auth=False, roles=[Role.STORE_OWNER])
        await _authorize(engine, None, descriptor)
        await _authorize(engine, Principal.expired(), descriptor)

    async def test_guest_allowed_without_principal(self, engine: AuthorizationService) -> None:
        descriptor = ActionDescriptor("browse_stores", allow_guest=True, roles=[Role.CUSTOMER])
        await _authorize(engine, None, descriptor)

    async def test_guest_allowed_still_checks_present_principal(self, engine: AuthorizationService) -> None:
        descriptor = ActionDescriptor("browse_stores", allow_guest=True)
        assert await _denied_code(engine, Principal.expired(), descriptor) == "S2003"


class TestTokenState:
    async def test_expired_flag_wins_over_role_check(self, engine: AuthorizationService) -> None:
        """Expired principal without a role gets TOKEN_EXPIRED, never UNAUTHORIZED."""
        descriptor = ActionDescriptor("update_staff_role", roles=[Role.STORE_OWNER])
        assert await _denied_code(engine, Principal.expired(), descriptor) == "S2003"

    @pytest.mark.parametrize("marker", ["TOKEN_EXPIRED", "ACCESS_TOKEN_EXPIRED"])
    async def test_expiry_marker_on_otherwise_valid_principal(
        self, engine: AuthorizationService, marker: str
    ) -> None:
        principal = Principal(id="acc-1", role=Role.CASHIER, tenant_id="store-1", error=marker)
        descriptor = ActionDescriptor("update_staff_role", roles=[Role.STORE_OWNER])
        assert await _denied_code(engine, principal, descriptor) == "S2003"

    async def test_malformed_token_is_invalid_token(self, engine: AuthorizationService) -> None:
        assert await _denied_code(engine, Principal.malformed(), ActionDescriptor("list_orders")) == "S2004"

    async def test_principal_without_id_is_invalid_token(self, engine: AuthorizationService) -> None:
        principal = Principal(id=None, role=Role.STORE_OWNER, token_state=TokenState.VALID)
        assert await _denied_code(engine, principal, ActionDescriptor("list_orders")) == "S2004"


class TestAccountStatus:
    async def test_suspended_rejected_before_role_check(self, admin_engine: AuthorizationService) -> None:
        principal = Principal(id="adm-1", role=Role.VIEWER, status=AccountStatus.SUSPENDED)
        descriptor = ActionDescriptor("approve_store", roles=[Role.SUPER_ADMIN])
        assert await _denied_code(admin_engine, principal, descriptor) == "A2004"

    async def test_terminated(self, admin_engine: AuthorizationService) -> None:
        principal = Principal(id="adm-1", role=Role.SUPER_ADMIN, status=AccountStatus.TERMINATED)
        assert await _denied_code(admin_engine, principal, ActionDescriptor("list_stores")) == "A2005"


class TestRoles:
    async def test_role_not_allowed(self, engine: AuthorizationService, cashier: Principal) -> None:
        descriptor = ActionDescriptor("close_store", roles=[Role.STORE_OWNER, Role.FRANCHISE_OWNER])
        assert await _denied_code(engine, cashier, descriptor) == "S2002"

    async def test_role_allowed(self, engine: AuthorizationService, store_owner: Principal) -> None:
        descriptor = ActionDescriptor("close_store", roles=[Role.STORE_OWNER])
        await _authorize(engine, store_owner, descriptor)


class TestPermissions:
    async def test_cashier_lacks_manage_staff_roles(self, engine: AuthorizationService, cashier: Principal) -> None:
        """CASHIER defaults do not include MANAGE_STAFF_ROLES -> insufficient permissions."""
        with pytest.raises(SentinelError) as exc_info:
            await _authorize(engine, cashier, ActionDescriptor("update_staff_role"))
        assert exc_info.value.code == "S2009"
        assert exc_info.value.detail_text == "MANAGE_STAFF_ROLES"

    async def test_role_defaults_suffice_without_explicit_permissions(self, engine: AuthorizationService) -> None:
        for role, defaults in web.ROLE_PERMISSIONS.items():
            principal = Principal(id="acc", role=role, tenant_id="store-1")
            descriptor = ActionDescriptor("any_action", permissions=list(defaults))
            await _authorize(engine, principal, descriptor)

    async def test_explicit_permission_extends_role_defaults(self, engine: AuthorizationService) -> None:
        principal = Principal(
            id="acc-2", role=Role.CASHIER, tenant_id="store-1", permissions=("MANAGE_STAFF_ROLES",)
        )
        await _authorize(engine, principal, ActionDescriptor("update_staff_role"))

    async def test_one_missing_permission_fails_and_is_named(self, engine: AuthorizationService, cashier: Principal) -> None:
        descriptor = ActionDescriptor("refund", permissions=["VIEW_ORDERS", "PROCESS_REFUNDS", "USE_POS"])
        with pytest.raises(SentinelError) as exc_info:
            await _authorize(engine, cashier, descriptor)
        assert exc_info.value.detail_text == "PROCESS_REFUNDS"
        assert exc_info.value.extensions["permission"] == "PROCESS_REFUNDS"

    async def test_descriptor_permissions_take_precedence_over_registry(
        self, engine: AuthorizationService, cashier: Principal
    ) -> None:
        descriptor = ActionDescriptor("update_staff_role", permissions=["USE_POS"])
        await _authorize(engine, cashier, descriptor)

    async def test_unregistered_action_skips_permission_check(self, engine: AuthorizationService, cashier: Principal) -> None:
        await _authorize(engine, cashier, ActionDescriptor("not_in_registry"))

    async def test_grants_all_role_bypasses_permissions(self, admin_engine: AuthorizationService) -> None:
        principal = Principal(id="root", role=Role.SUPER_ADMIN)
        await _authorize(admin_engine, principal, ActionDescriptor("create_admin"))
        await _authorize(admin_engine, principal, ActionDescriptor("anything", permissions=["NOT_A_REAL_PERMISSION"]))

    async def test_admin_lacks_manage_admins(self, admin_engine: AuthorizationService) -> None:
        principal = Principal(id="adm-2", role=Role.ADMIN)
        assert await _denied_code(admin_engine, principal, ActionDescriptor("create_admin")) == "A2009"


class TestOwnershipAndTenantScope:
    async def test_ownership_mismatch(self, engine: AuthorizationService, store_owner: Principal) -> None:
        descriptor = ActionDescriptor("update_profile", check_ownership=True)
        assert await _denied_code(engine, store_owner, descriptor, {"account_id": "acc-9"}) == "S2002"

    async def test_ownership_compares_as_strings(self, engine: AuthorizationService) -> None:
        principal = Principal(id="42", role=Role.STORE_OWNER, tenant_id="7")
        descriptor = ActionDescriptor("update_profile", check_ownership=True)
        await _authorize(engine, principal, descriptor, {"account_id": 42})

    async def test_ownership_without_target_passes(self, engine: AuthorizationService, store_owner: Principal) -> None:
        await _authorize(engine, store_owner, ActionDescriptor("update_profile", check_ownership=True))

    async def test_ownership_blank_target_passes(self, engine: AuthorizationService, store_owner: Principal) -> None:
        descriptor = ActionDescriptor("update_profile", check_ownership=True)
        await _authorize(engine, store_owner, descriptor, {"account_id": ""})

    async def test_tenant_mismatch_is_distinct_error(self, engine: AuthorizationService, store_owner: Principal) -> None:
        descriptor = ActionDescriptor("update_store_info", check_tenant_scope=True)
        assert await _denied_code(engine, store_owner, descriptor, {"tenant_id": "store-2"}) == "S3008"

    async def test_tenant_ids_compare_after_str_normalization(self, engine: AuthorizationService) -> None:
        principal = Principal(id="acc-1", role=Role.STORE_OWNER, tenant_id="15")
        descriptor = ActionDescriptor("update_store_info", check_tenant_scope=True)
        await _authorize(engine, principal, descriptor, {"tenant_id": 15})

    async def test_principal_without_tenant_is_unauthenticated(self, engine: AuthorizationService) -> None:
        principal = Principal(id="acc-1", role=Role.STORE_OWNER)
        descriptor = ActionDescriptor("update_store_info", check_tenant_scope=True)
        assert await _denied_code(engine, principal, descriptor) == "S2001"

    async def test_custom_tenant_arg(self, engine: AuthorizationService, store_owner: Principal) -> None:
        descriptor = ActionDescriptor("update_store_info", check_tenant_scope=True, tenant_arg="store_id")
        assert await _denied_code(engine, store_owner, descriptor, {"store_id": "store-3"}) == "S3008"


class TestPhoneAndCustomCheck:
    async def test_phone_verification_required(self, engine: AuthorizationService) -> None:
        principal = Principal(id="c-1", role=Role.CUSTOMER)
        descriptor = ActionDescriptor("place_order", require_phone_verified=True)
        assert await _denied_code(engine, principal, descriptor) == "S2012"
        verified = Principal(id="c-1", role=Role.CUSTOMER, phone_verified=True)
        await _authorize(engine, verified, descriptor)

    async def test_sync_custom_check_falsy_denies(self, engine: AuthorizationService, store_owner: Principal) -> None:
        descriptor = ActionDescriptor("close_store", custom_check=lambda ctx, args: args.get("confirm"))
        assert await _denied_code(engine, store_owner, descriptor, {"confirm": False}) == "S2002"
        await _authorize(engine, store_owner, descriptor, {"confirm": True})

    async def test_async_custom_check_receives_context(self, engine: AuthorizationService, store_owner: Principal) -> None:
        seen = {}

        async def check(ctx: ExecutionContext, args) -> bool:
            seen["tenant"] = ctx.tenant_id
            return True

        await _authorize(engine, store_owner, ActionDescriptor("close_store", custom_check=check))
        assert seen == {"tenant": "store-1"}

    async def test_tenant_scope_checked_before_custom_check(self, engine: AuthorizationService, store_owner: Principal) -> None:
        calls = []

        def check(ctx, args) -> bool:
            calls.append(1)
            return True

        descriptor = ActionDescriptor("update_store_info", check_tenant_scope=True, custom_check=check)
        assert await _denied_code(engine, store_owner, descriptor, {"tenant_id": "other"}) == "S3008"
        assert calls == []


def test_has_permission_helper(engine: AuthorizationService, store_owner: Principal, cashier: Principal) -> None:
    assert engine.has_permission(store_owner, "MANAGE_STAFF_ROLES")
    assert not engine.has_permission(cashier, "MANAGE_STAFF_ROLES")
    assert not engine.has_permission(None, "VIEW_ORDERS")


def test_require_grants_all(admin_engine: AuthorizationService) -> None:
    admin_engine.require_grants_all(Principal(id="root", role=Role.SUPER_ADMIN))
    with pytest.raises(SentinelError) as exc_info:
        admin_engine.require_grants_all(Principal(id="adm", role=Role.ADMIN))
    assert exc_info.value.code == "A2002"
    with pytest.raises(SentinelError) as exc_info:
        admin_engine.require_grants_all(None)
    assert exc_info.value.code == "A2001"
