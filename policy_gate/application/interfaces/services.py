"""Service interfaces (ports) for the application layer.

Protocols define contracts for the pipeline's external collaborators (DIP):
the transaction provider backed by the storage engine, and the localized
message catalog.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Protocol


# Transaction handle interface
class ITransaction(Protocol):
    """One open storage transaction; committed or rolled back exactly once."""

    async def commit(self) -> None:
        """Persist all work done in the transaction."""

    async def rollback(self) -> None:
        """Discard all work done in the transaction."""


# Transaction provider interface
class ITransactionProvider(Protocol):
    """Protocol for opening storage transactions (one per mutating invocation)."""

    async def begin(self, tenant_id: str | None = None) -> ITransaction:
        """Open a transaction; tenant_id scopes row-level security where supported."""


@dataclass(frozen=True)
class LocalizedMessage:
    """Result of a catalog lookup: stable key plus text in the resolved language."""

    code: str
    key: str
    text: str
    language: str
    found: bool = True


# Message catalog interface
class IMessageCatalog(Protocol):
    """Protocol for code -> localized message lookups."""

    def lookup(
        self,
        code: str,
        language: str | None = None,
        fields: Mapping[str, Any] | None = None,
    ) -> LocalizedMessage:
        """Return the message for code; unknown codes resolve to the catalog fallback (found=False).

        fields fill the entry's template when it has one and every placeholder is supplied.
        """

    def __contains__(self, code: object) -> bool:
        """True when code has its own entry."""
