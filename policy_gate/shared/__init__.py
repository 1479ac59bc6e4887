"""Shared utilities: execution context, telemetry, and cross-cutting helpers.

Used by application and infrastructure. No business logic.
"""

from policy_gate.shared.context import ExecutionContext, RequestContext
from policy_gate.shared.utils import (
    Pagination,
    parse_pagination,
    utc_now,
    utc_now_iso,
)

__all__ = [
    "ExecutionContext",
    "RequestContext",
    "Pagination",
    "parse_pagination",
    "utc_now",
    "utc_now_iso",
]
