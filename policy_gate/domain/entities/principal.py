"""Principal domain entity: the authenticated caller for one invocation.

Built by the upstream authentication step (see
policy_gate.infrastructure.security.jwt.principal_from_token) and read-only
inside the pipeline.
"""

from dataclasses import dataclass

from policy_gate.domain.enums import AccountStatus, Role, TokenState

# Markers the upstream authentication step sets when the access token has expired.
EXPIRED_TOKEN_MARKERS = frozenset({"TOKEN_EXPIRED", "ACCESS_TOKEN_EXPIRED"})


@dataclass(frozen=True)
class Principal:
    """Authenticated caller.

    An expired-token principal may carry no role, tenant or permissions;
    only token_state / error are meaningful then, which is why the
    authorization engine checks expiry before reading anything else.
    """

    id: str | None
    role: Role | None = None
    tenant_id: str | None = None
    permissions: tuple[str, ...] = ()
    token_state: TokenState = TokenState.VALID
    error: str | None = None
    status: AccountStatus = AccountStatus.ACTIVE
    phone_verified: bool = False

    @property
    def is_expired(self) -> bool:
        """True when the token expired (flag or upstream expiry marker)."""
        return self.token_state == TokenState.EXPIRED or self.error in EXPIRED_TOKEN_MARKERS

    @property
    def is_malformed(self) -> bool:
        """True when the token could not be decoded or lacked an identity."""
        return self.token_state == TokenState.MALFORMED

    @classmethod
    def expired(cls, error: str = "TOKEN_EXPIRED") -> "Principal":
        """Principal for a token that failed only on expiry (no identity fields)."""
        return cls(id=None, token_state=TokenState.EXPIRED, error=error)

    @classmethod
    def malformed(cls, error: str = "INVALID_TOKEN") -> "Principal":
        """Principal for a token that could not be verified."""
        return cls(id=None, token_state=TokenState.MALFORMED, error=error)
