"""Per-invocation context passed explicitly through every pipeline stage.

Nothing here is stored in globals or contextvars: the pipeline creates one
ExecutionContext per call and hands it to the authorization engine, the
transaction coordinator and the business handler.

Usage:
    request = RequestContext(language="en", request_id="req-1")
    envelope = await wrapped(principal, args, request)
    # inside a handler:
    session = ctx.transaction.session  # mutating actions only
"""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from policy_gate.application.services.transaction_coordinator import HandlerTransaction
    from policy_gate.domain.entities import ActionDescriptor, Principal


@dataclass(frozen=True)
class RequestContext:
    """Caller-supplied hints for one invocation (from the transport)."""

    language: str | None = None
    request_id: str | None = None
    attributes: dict[str, Any] = field(default_factory=dict)


@dataclass
class ExecutionContext:
    """Mutable scratch for one invocation; discarded when it ends.

    transaction is None until the coordinator opens one (mutating actions
    only) and is cleared again once it is committed or rolled back.
    """

    action: "ActionDescriptor"
    principal: "Principal | None"
    language: str
    request_id: str | None = None
    transaction: "HandlerTransaction | None" = None
    attributes: dict[str, Any] = field(default_factory=dict)
    state: dict[str, Any] = field(default_factory=dict)

    @property
    def tenant_id(self) -> str | None:
        """Tenant of the principal, if any."""
        return self.principal.tenant_id if self.principal else None
