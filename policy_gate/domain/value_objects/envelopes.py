"""Response envelopes: the outward-facing result of every wrapped action.

SuccessEnvelope and ErrorEnvelope are distinct types, so an envelope is
never both. to_dict() produces the wire shape handed to the transport.
"""

from dataclasses import dataclass, field
from typing import Any, ClassVar

from pydantic.alias_generators import to_camel


def _wire_key(key: str) -> str:
    """snake_case extension keys go out as camelCase; keys already in camelCase are kept."""
    return to_camel(key) if "_" in key else key


@dataclass(frozen=True)
class SuccessEnvelope:
    """Successful outcome.

    body is exactly what goes on the wire: a passthrough value (None, list,
    scalar, pre-shaped dict) or the shaped {"success": True, ...} dict.
    """

    body: Any
    marker: str | None = None
    key: str | None = None
    message: str | None = None

    success: ClassVar[bool] = True

    @property
    def is_error(self) -> bool:
        return False

    def to_dict(self) -> Any:
        return self.body


@dataclass(frozen=True)
class ErrorEnvelope:
    """Failed outcome with a stable taxonomy key and a localized message.

    Attributes:
        code: Stable key (e.g. UNAUTHENTICATED) for client-side handling.
        message: Localized, client-safe message.
        error_code: Raw taxonomy code (e.g. S2001).
        details: Free-text detail from the sentinel, if any.
        timestamp: ISO 8601 UTC time the error was translated.
        extensions: Domain fields (e.g. duplicate_name), sent camelCased.
        diagnostics: Raw internal detail; only populated outside production.
    """

    code: str
    message: str
    error_code: str | None = None
    details: str | None = None
    timestamp: str | None = None
    extensions: dict[str, Any] = field(default_factory=dict)
    diagnostics: dict[str, Any] | None = None

    success: ClassVar[bool] = False

    @property
    def is_error(self) -> bool:
        return True

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {
            "code": self.code,
            "message": self.message,
            "errorCode": self.error_code,
            "details": self.details,
            "timestamp": self.timestamp,
        }
        for key, value in self.extensions.items():
            if value is not None:
                body.setdefault(_wire_key(key), value)
        if self.diagnostics:
            body["diagnostics"] = dict(self.diagnostics)
        return body


Envelope = SuccessEnvelope | ErrorEnvelope
