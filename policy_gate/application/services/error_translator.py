"""Error translator: any exception raised during an invocation -> localized error envelope.

Resolution order:
    1. Storage failures (IntegrityError, pydantic ValidationError) are
       remapped onto a taxonomy code: a known constraint maps to its
       dedicated duplicate code, anything else to VALIDATION_FAILED.
    2. Sentinel errors (SentinelError, or a plain exception whose message
       is "<CODE>[:<details>]") become envelopes with the localized text.
    3. EnvelopeError is passed through unchanged.
    4. Everything else collapses to SYSTEM_ERROR; the raw message goes to
       diagnostics only outside production.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError
from sqlalchemy.exc import IntegrityError

from policy_gate.application.interfaces.services import IMessageCatalog, LocalizedMessage
from policy_gate.domain.enums import ErrorKind
from policy_gate.domain.exceptions import EnvelopeError, SentinelError
from policy_gate.domain.value_objects import ErrorEnvelope
from policy_gate.shared.utils.datetime import utc_now_iso

logger = logging.getLogger(__name__)

_NAMED_CONSTRAINT_RE = re.compile(r'constraint "(?P<name>[^"]+)"')
_SQLITE_UNIQUE_RE = re.compile(r"UNIQUE constraint failed: (?P<columns>[^\n]+)")


def constraint_identifier(error: IntegrityError) -> str | None:
    """Name of the constraint that fired.

    PostgreSQL drivers expose the constraint name; SQLite only reports the
    column list, returned as "table.col,table.col".
    """
    orig = error.orig
    for candidate in (orig, getattr(orig, "__cause__", None)):
        name = getattr(candidate, "constraint_name", None)
        if name:
            return str(name)
    message = str(orig) if orig is not None else str(error)
    match = _NAMED_CONSTRAINT_RE.search(message)
    if match:
        return match.group("name")
    match = _SQLITE_UNIQUE_RE.search(message)
    if match:
        return ",".join(col.strip() for col in match.group("columns").split(","))
    return None


def validation_messages(error: ValidationError) -> list[str]:
    """Flatten pydantic errors into "field: message" strings."""
    messages = []
    for item in error.errors():
        location = ".".join(str(part) for part in item.get("loc", ())) or "__root__"
        messages.append(f"{location}: {item.get('msg', '')}")
    return messages


class ErrorTranslator:
    """Maps exceptions onto the surface's error taxonomy and message catalog.

    Args:
        catalog: Error message catalog (code -> key + localized text).
        codes: Concrete code per taxonomy kind for this surface.
        constraints: Constraint identifier -> concrete duplicate code.
        language_names: Display names used when a template mentions a language.
        include_diagnostics: Attach raw internal detail (never in production).
    """

    def __init__(
        self,
        catalog: IMessageCatalog,
        codes: Mapping[ErrorKind, str],
        constraints: Mapping[str, str] | None = None,
        language_names: Mapping[str, str] | None = None,
        include_diagnostics: bool = False,
    ) -> None:
        self.catalog = catalog
        self.codes = codes
        self.constraints = dict(constraints or {})
        self.language_names = dict(language_names or {})
        self.include_diagnostics = include_diagnostics

    def translate(
        self,
        error: BaseException,
        language: str | None = None,
        action: str | None = None,
    ) -> ErrorEnvelope:
        """Return the error envelope for error. Never raises."""
        if isinstance(error, EnvelopeError):
            return error.envelope

        diagnostics: dict[str, Any] = {}
        sentinel = self._as_sentinel(error, diagnostics)
        if sentinel is None:
            return self.system_error(error, language, action)
        logger.debug("Translating %s for %s", sentinel.code, action or "<unknown>")
        return self._from_sentinel(sentinel, language, diagnostics)

    def _as_sentinel(
        self, error: BaseException, diagnostics: dict[str, Any]
    ) -> SentinelError | None:
        if isinstance(error, SentinelError):
            return error
        if isinstance(error, IntegrityError):
            return self._from_integrity_error(error, diagnostics)
        if isinstance(error, ValidationError):
            details = validation_messages(error)
            logger.info("Validation failed: %s", "; ".join(details))
            diagnostics["validationDetails"] = details
            return SentinelError(self.codes[ErrorKind.VALIDATION_FAILED])
        if isinstance(error, Exception):
            extensions = getattr(error, "extensions", None)
            if not isinstance(extensions, Mapping):
                extensions = {}
            return SentinelError.from_message(str(error), extensions)
        return None

    def _from_integrity_error(
        self, error: IntegrityError, diagnostics: dict[str, Any]
    ) -> SentinelError:
        constraint = constraint_identifier(error)
        diagnostics["originalError"] = str(error.orig if error.orig is not None else error)
        code = self.constraints.get(constraint) if constraint else None
        if code is not None:
            logger.info("Constraint %s mapped to %s", constraint, code)
            return SentinelError(code, duplicate_field=constraint)
        logger.warning("Unmapped integrity error (constraint=%s)", constraint)
        return SentinelError(self.codes[ErrorKind.VALIDATION_FAILED])

    def _template_fields(self, sentinel: SentinelError) -> dict[str, Any]:
        fields: dict[str, Any] = {**sentinel.extensions, "details": sentinel.detail_text}
        language = sentinel.extensions.get("duplicate_language")
        if language:
            fields["language_name"] = self.language_names.get(language, language)
        return fields

    def _resolve(self, code: str, language: str | None, fields: Mapping[str, Any]) -> LocalizedMessage:
        message = self.catalog.lookup(code, language, fields)
        if message.found:
            return message
        logger.warning("Unknown error code %s; using system error message", code)
        return self.catalog.lookup(self.codes[ErrorKind.SYSTEM_ERROR], language)

    def _from_sentinel(
        self,
        sentinel: SentinelError,
        language: str | None,
        diagnostics: dict[str, Any],
    ) -> ErrorEnvelope:
        message = self._resolve(sentinel.code, language, self._template_fields(sentinel))
        return ErrorEnvelope(
            code=message.key,
            message=message.text,
            error_code=sentinel.code,
            details=sentinel.detail_text,
            timestamp=utc_now_iso(),
            extensions=dict(sentinel.extensions),
            diagnostics=diagnostics if self.include_diagnostics and diagnostics else None,
        )

    def system_error(
        self, error: BaseException, language: str | None, action: str | None
    ) -> ErrorEnvelope:
        """Generic SYSTEM_ERROR envelope; the raw error text only appears in diagnostics."""
        logger.error("Unexpected error in %s", action or "<unknown>", exc_info=error)
        code = self.codes[ErrorKind.SYSTEM_ERROR]
        message = self.catalog.lookup(code, language)
        diagnostics = None
        if self.include_diagnostics:
            diagnostics = {"originalError": str(error) or type(error).__name__}
        return ErrorEnvelope(
            code=message.key,
            message=message.text,
            error_code=code,
            timestamp=utc_now_iso(),
            diagnostics=diagnostics,
        )
