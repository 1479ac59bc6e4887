"""Domain exceptions for the policy pipeline.

Defines the exceptions raised inside the pipeline stages. They are
independent of transport concerns; the error translator turns them into
error envelopes and the HTTP adapter maps envelopes to status codes.
"""

import re
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from policy_gate.domain.value_objects.envelopes import ErrorEnvelope

# "<CODE>[:<details>]" where CODE is a letter prefix plus four digits (e.g. S2001).
SENTINEL_PATTERN = re.compile(r"^(?P<code>[A-Z]\d{4})(?::(?P<details>.*))?$", re.DOTALL)


class PolicyGateException(Exception):
    """Base exception for all policy pipeline errors.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context.
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON responses."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class SentinelError(PolicyGateException):
    """Tagged taxonomy error: a concrete code, optional free-text details and extension fields.

    Business handlers raise this (or a plain exception whose message is
    "<CODE>[:<details>]", parsed by from_message at the translator boundary).
    Extension fields (e.g. duplicate_name) are copied onto the error envelope
    and are available to localized message templates.
    """

    def __init__(
        self,
        code: str,
        details: str | None = None,
        extensions: Mapping[str, Any] | None = None,
        **fields: Any,
    ) -> None:
        self.code = code
        self.detail_text = details or None
        self.extensions = {**(extensions or {}), **fields}
        message = f"{code}:{details}" if details else code
        super().__init__(message, code, {**self.extensions, "details": self.detail_text})

    @classmethod
    def from_message(
        cls, message: str, extensions: Mapping[str, Any] | None = None
    ) -> "SentinelError | None":
        """Parse the legacy "<CODE>[:<details>]" form; None if message is not a sentinel."""
        match = SENTINEL_PATTERN.match(message or "")
        if match is None:
            return None
        return cls(match.group("code"), match.group("details") or None, extensions)


class EnvelopeError(PolicyGateException):
    """Carries an already-shaped error envelope; the translator passes it through unchanged."""

    def __init__(self, envelope: "ErrorEnvelope") -> None:
        self.envelope = envelope
        super().__init__(envelope.message, envelope.error_code or envelope.code)


class SqlNotConfiguredException(PolicyGateException):
    """Raised when a mutating action needs a transaction but no SQL database is configured."""

    def __init__(self) -> None:
        super().__init__(
            message="This operation requires a SQL database that is not configured.",
            error_code="SERVICE_UNAVAILABLE",
        )


class TransactionStateError(PolicyGateException):
    """Raised when a transaction is used outside its OPEN state (e.g. reused after commit)."""

    def __init__(self, state: str, operation: str) -> None:
        super().__init__(
            f"Cannot {operation} a transaction in state {state}",
            "TRANSACTION_STATE_ERROR",
            {"state": state, "operation": operation},
        )


class UnknownActionException(PolicyGateException):
    """Raised when the transport asks for an action name that is not registered."""

    def __init__(self, name: str) -> None:
        super().__init__(
            f"Action not found: {name}",
            "ACTION_NOT_FOUND",
            {"action": name},
        )


class DuplicateActionException(PolicyGateException):
    """Raised when two actions are registered under the same name."""

    def __init__(self, name: str) -> None:
        super().__init__(
            f"Action already registered: {name}",
            "DUPLICATE_ACTION",
            {"action": name},
        )
