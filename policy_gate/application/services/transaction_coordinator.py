"""Transaction coordinator: one scoped transaction per mutating invocation.

State machine: NOT_STARTED -> OPEN -> {COMMITTED, ROLLED_BACK}. The
coordinator owns the handle for the whole invocation; the handler only
sees it through ExecutionContext.transaction, a HandlerTransaction
that cannot commit or roll back.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from policy_gate.application.interfaces.services import ITransaction, ITransactionProvider
from policy_gate.domain.enums import TransactionState
from policy_gate.domain.exceptions import SqlNotConfiguredException, TransactionStateError
from policy_gate.shared.context import ExecutionContext

logger = logging.getLogger(__name__)


class TransactionScope:
    """Wraps a provider transaction and enforces single commit/rollback."""

    def __init__(self, handle: ITransaction) -> None:
        self.handle = handle
        self.state = TransactionState.OPEN

    def _require_open(self, operation: str) -> None:
        if self.state != TransactionState.OPEN:
            raise TransactionStateError(self.state.value, operation)

    async def commit(self) -> None:
        """Commit; state stays OPEN if the provider fails so the caller can roll back."""
        self._require_open("commit")
        await self.handle.commit()
        self.state = TransactionState.COMMITTED

    async def rollback(self) -> None:
        """Roll back; the scope is terminal afterwards even if the provider call fails."""
        self._require_open("rollback")
        self.state = TransactionState.ROLLED_BACK
        await self.handle.rollback()


class HandlerTransaction:
    """Handler-facing view of an open transaction.

    Attribute access (e.g. session) is forwarded to the provider handle;
    commit and rollback are refused; the coordinator ends the transaction.
    """

    def __init__(self, scope: TransactionScope) -> None:
        self._scope = scope

    def __getattr__(self, name: str) -> Any:
        return getattr(self._scope.handle, name)

    async def commit(self) -> None:
        raise TransactionStateError(self._scope.state.value, "commit")

    async def rollback(self) -> None:
        raise TransactionStateError(self._scope.state.value, "rollback")


class TransactionCoordinator:
    """Opens, commits and rolls back transactions around business handlers."""

    def __init__(self, provider: ITransactionProvider | None = None) -> None:
        self.provider = provider

    @asynccontextmanager
    async def scope(
        self, context: ExecutionContext, mutating: bool
    ) -> AsyncIterator[TransactionScope | None]:
        """Run the enclosed block inside a transaction when mutating.

        Commits when the block exits normally. On any exception while OPEN
        (including a failed commit) rolls back exactly once and re-raises the
        original exception. Query-only blocks get None and never touch the
        provider.

        Raises:
            SqlNotConfiguredException: If mutating and no provider is configured.
        """
        if not mutating:
            yield None
            return
        if self.provider is None:
            logger.error("Mutating action %s has no transaction provider", context.action.name)
            raise SqlNotConfiguredException()

        handle = await self.provider.begin(context.tenant_id)
        scope = TransactionScope(handle)
        context.transaction = HandlerTransaction(scope)
        logger.debug("Transaction opened for %s", context.action.name)
        try:
            try:
                yield scope
                await scope.commit()
                logger.debug("Transaction committed for %s", context.action.name)
            except BaseException:
                await self._rollback_quietly(scope, context)
                raise
        finally:
            context.transaction = None

    async def _rollback_quietly(self, scope: TransactionScope, context: ExecutionContext) -> None:
        if scope.state != TransactionState.OPEN:
            return
        try:
            await scope.rollback()
            logger.info("Transaction rolled back for %s", context.action.name)
        except Exception:
            # The handler's error is the one the caller must see.
            logger.exception("Rollback failed for %s", context.action.name)
