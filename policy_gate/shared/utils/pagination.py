"""Pagination helper shared by list actions."""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

DEFAULT_LIMIT = 20
MAX_LIMIT = 100


@dataclass(frozen=True)
class Pagination:
    limit: int
    offset: int


def _as_int(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    return None


def parse_pagination(args: Mapping[str, Any]) -> Pagination:
    """Read limit/offset from action args.

    Missing or zero limit means DEFAULT_LIMIT; limit is capped at MAX_LIMIT.
    Negative or missing offset means 0.
    """
    limit = _as_int(args.get("limit")) or DEFAULT_LIMIT
    offset = _as_int(args.get("offset")) or 0
    return Pagination(limit=max(1, min(limit, MAX_LIMIT)), offset=max(0, offset))
