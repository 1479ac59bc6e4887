"""Domain enumerations for the policy pipeline.

Enums represent fixed sets of domain values: caller roles, token and
account state, client surfaces and the error taxonomy.
"""

from enum import Enum


class _ValuesMixin:
    """Mixin that adds a values() classmethod to str Enums."""

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid values as strings."""
        return [member.value for member in cls]


class Role(_ValuesMixin, str, Enum):
    """Closed set of principal roles across all client surfaces."""

    # Store console (web)
    FRANCHISE_OWNER = "FRANCHISE_OWNER"
    STORE_OWNER = "STORE_OWNER"
    STORE_MANAGER = "STORE_MANAGER"
    CHEF = "CHEF"
    CASHIER = "CASHIER"
    DELIVERY_MANAGER = "DELIVERY_MANAGER"
    # Platform console (admin)
    SUPER_ADMIN = "SUPER_ADMIN"
    ADMIN = "ADMIN"
    VIEWER = "VIEWER"
    # Consumer app (mobile)
    CUSTOMER = "CUSTOMER"


class TokenState(_ValuesMixin, str, Enum):
    """Validity of the bearer token the principal was built from."""

    VALID = "valid"
    EXPIRED = "expired"
    MALFORMED = "malformed"


class AccountStatus(_ValuesMixin, str, Enum):
    """Account lifecycle status carried in the token."""

    ACTIVE = "ACTIVE"
    SUSPENDED = "SUSPENDED"
    TERMINATED = "TERMINATED"


class ClientSurface(_ValuesMixin, str, Enum):
    """Client surface an action is served to; selects codes, roles and catalogs."""

    WEB = "web"
    ADMIN = "admin"
    MOBILE = "mobile"


class ErrorKind(_ValuesMixin, str, Enum):
    """Error taxonomy. Values are the stable keys sent to clients."""

    # Auth
    UNAUTHENTICATED = "UNAUTHENTICATED"
    TOKEN_EXPIRED = "TOKEN_EXPIRED"
    INVALID_TOKEN = "INVALID_TOKEN"
    UNAUTHORIZED = "UNAUTHORIZED"
    INSUFFICIENT_PERMISSIONS = "INSUFFICIENT_PERMISSIONS"
    TENANT_ACCESS_DENIED = "TENANT_ACCESS_DENIED"
    ACCOUNT_SUSPENDED = "ACCOUNT_SUSPENDED"
    ACCOUNT_TERMINATED = "ACCOUNT_TERMINATED"
    PHONE_NOT_VERIFIED = "PHONE_NOT_VERIFIED"
    # Validation
    MISSING_REQUIRED_FIELD = "MISSING_REQUIRED_FIELD"
    VALIDATION_FAILED = "VALIDATION_FAILED"
    # System
    SYSTEM_ERROR = "SYSTEM_ERROR"


class TransactionState(_ValuesMixin, str, Enum):
    """Lifecycle of one invocation's transaction. COMMITTED and ROLLED_BACK are terminal."""

    NOT_STARTED = "not_started"
    OPEN = "open"
    COMMITTED = "committed"
    ROLLED_BACK = "rolled_back"
