"""JWT access tokens and the upstream Principal resolver.

Uses policy_gate.core.config for secret and algorithm. The resolver never
raises: an expired token becomes an expired-state Principal (no identity
fields), an undecodable one a malformed-state Principal, and a missing
header no Principal at all. The authorization engine turns those states
into taxonomy errors.
"""

import logging
from datetime import UTC, datetime, timedelta
from typing import Any, cast

from jose import ExpiredSignatureError, JWTError, jwt

from policy_gate.core.config import get_settings
from policy_gate.domain.entities import Principal
from policy_gate.domain.enums import AccountStatus, Role

logger = logging.getLogger(__name__)

BEARER_PREFIX = "bearer "


def create_access_token(
    data: dict[str, Any],
    expires_delta: timedelta | None = None,
) -> str:
    """Create a JWT access token with the given claims.

    Args:
        data: Claims to encode (sub, role, tenant_id, permissions, status, phone_verified).
        expires_delta: Optional TTL; else uses settings.access_token_expire_minutes.
            A negative delta produces an already-expired token.

    Returns:
        Encoded JWT string.
    """
    settings = get_settings()
    to_encode = data.copy()
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.access_token_expire_minutes)
    to_encode["exp"] = datetime.now(UTC) + expires_delta
    encoded = jwt.encode(
        to_encode,
        settings.secret_key.get_secret_value(),
        algorithm=settings.algorithm,
    )
    return cast(str, encoded)


def verify_token(token: str) -> dict[str, Any]:
    """Verify and decode a JWT, requiring exp and sub.

    Raises:
        ExpiredSignatureError: If the token has expired.
        JWTError: If the token is invalid or missing required claims.
    """
    settings = get_settings()
    return jwt.decode(
        token,
        settings.secret_key.get_secret_value(),
        algorithms=[settings.algorithm],
        options={"require_exp": True, "require_sub": True},
    )


def principal_from_claims(claims: dict[str, Any]) -> Principal:
    """Build a Principal from decoded claims; unknown role or status -> malformed."""
    try:
        role = Role(claims["role"]) if claims.get("role") else None
        status = AccountStatus(claims.get("status") or AccountStatus.ACTIVE.value)
    except ValueError:
        logger.info("Token carries unknown role or status: %s", claims.get("role"))
        return Principal.malformed()
    tenant_id = claims.get("tenant_id")
    permissions = claims.get("permissions") or ()
    return Principal(
        id=str(claims["sub"]),
        role=role,
        tenant_id=str(tenant_id) if tenant_id is not None else None,
        permissions=tuple(str(p) for p in permissions),
        status=status,
        phone_verified=bool(claims.get("phone_verified", False)),
    )


def principal_from_token(token: str) -> Principal:
    """Decode token into a Principal, mapping expiry and decode failures to token states."""
    try:
        claims = verify_token(token)
    except ExpiredSignatureError:
        return Principal.expired()
    except JWTError as e:
        logger.info("Rejected access token: %s", e)
        return Principal.malformed()
    return principal_from_claims(claims)


def principal_from_authorization(header: str | None) -> Principal | None:
    """Resolve an Authorization header value; None when absent, malformed for other schemes."""
    if not header:
        return None
    if not header.lower().startswith(BEARER_PREFIX):
        return Principal.malformed()
    token = header[len(BEARER_PREFIX):].strip()
    if not token:
        return None
    return principal_from_token(token)
