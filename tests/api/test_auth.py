"""Tests for JWT access tokens and the Authorization-header principal resolver."""

from datetime import timedelta

from httpx import AsyncClient
from jose import jwt

from policy_gate.core.config import get_settings
from policy_gate.domain.enums import AccountStatus, Role, TokenState
from policy_gate.infrastructure.security.jwt import (
    create_access_token,
    principal_from_authorization,
    principal_from_claims,
    principal_from_token,
    verify_token,
)


def _token(**claims) -> str:
    return create_access_token({"sub": "acc-1", "role": "STORE_OWNER", "tenant_id": "store-1", **claims})


class TestPrincipalResolver:
    def test_valid_token_builds_principal(self) -> None:
        principal = principal_from_token(
            _token(permissions=["EXPORT_ORDERS"], phone_verified=True, tenant_id=15)
        )
        assert principal.id == "acc-1"
        assert principal.role == Role.STORE_OWNER
        assert principal.tenant_id == "15"
        assert principal.permissions == ("EXPORT_ORDERS",)
        assert principal.phone_verified
        assert principal.status == AccountStatus.ACTIVE
        assert principal.token_state == TokenState.VALID

    def test_expired_token_becomes_expired_principal(self) -> None:
        principal = principal_from_token(_token_expired())
        assert principal.is_expired
        assert principal.role is None

    def test_bad_signature_is_malformed(self) -> None:
        forged = jwt.encode({"sub": "acc-1", "role": "STORE_OWNER", "exp": 4102444800}, "other-key", algorithm="HS256")
        assert principal_from_token(forged).is_malformed

    def test_missing_sub_is_malformed(self) -> None:
        settings = get_settings()
        token = jwt.encode(
            {"role": "STORE_OWNER", "exp": 4102444800},
            settings.secret_key.get_secret_value(),
            algorithm=settings.algorithm,
        )
        assert principal_from_token(token).is_malformed

    def test_unknown_role_is_malformed(self) -> None:
        assert principal_from_token(_token(role="JANITOR")).is_malformed

    def test_status_claim(self) -> None:
        principal = principal_from_claims({"sub": "acc-1", "role": "ADMIN", "status": "SUSPENDED"})
        assert principal.status == AccountStatus.SUSPENDED

    def test_verify_token_round_trip_claims(self) -> None:
        claims = verify_token(_token())
        assert claims["sub"] == "acc-1"
        assert "exp" in claims

    def test_authorization_header_variants(self) -> None:
        assert principal_from_authorization(None) is None
        assert principal_from_authorization("") is None
        assert principal_from_authorization("Bearer ") is None
        assert principal_from_authorization("Basic dXNlcjpwYXNz").is_malformed
        assert principal_from_authorization(f"bearer {_token()}").id == "acc-1"


def _token_expired() -> str:
    return create_access_token({"sub": "acc-1", "role": "STORE_OWNER"}, expires_delta=timedelta(minutes=-5))


async def test_expired_token_returns_401_token_expired(client: AsyncClient) -> None:
    response = await client.post(
        "/api/v1/actions/list_orders",
        headers={"Authorization": f"Bearer {_token_expired()}", "X-Language": "en"},
    )
    assert response.status_code == 401
    data = response.json()
    assert data["code"] == "TOKEN_EXPIRED"
    assert data["errorCode"] == "S2003"
    assert data["message"] == "Your session has expired. Please log in again."


async def test_garbage_token_returns_401_invalid_token(client: AsyncClient) -> None:
    response = await client.post("/api/v1/actions/list_orders", headers={"Authorization": "Bearer not-a-jwt"})
    assert response.status_code == 401
    assert response.json()["code"] == "INVALID_TOKEN"


async def test_suspended_account_returns_403(client: AsyncClient) -> None:
    token = _token(role="CASHIER", status="SUSPENDED")
    response = await client.post("/api/v1/actions/list_orders", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 403
    assert response.json()["code"] == "ACCOUNT_SUSPENDED"


async def test_public_action_ignores_bad_token(client: AsyncClient) -> None:
    response = await client.post("/api/v1/actions/ping", headers={"Authorization": "Bearer not-a-jwt"})
    assert response.status_code == 200
