"""Shared utilities: datetime and pagination."""

from policy_gate.shared.utils.datetime import utc_now, utc_now_iso
from policy_gate.shared.utils.pagination import Pagination, parse_pagination

__all__ = [
    "utc_now",
    "utc_now_iso",
    "Pagination",
    "parse_pagination",
]
