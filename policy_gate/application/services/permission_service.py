"""Permission Registry: action name -> ordered required permissions.

Built once at process start and read-only afterwards, so concurrent
invocations can read it without locking.
"""

from __future__ import annotations

import json
from collections.abc import Iterable, Iterator, Mapping
from pathlib import Path
from types import MappingProxyType


def _ordered_unique(permissions: Iterable[str]) -> tuple[str, ...]:
    """Deduplicate while keeping first-seen order."""
    return tuple(dict.fromkeys(p for p in permissions if p))


class PermissionRegistry(Mapping[str, tuple[str, ...]]):
    """Immutable mapping of action name to required permission codes."""

    def __init__(self, entries: Mapping[str, Iterable[str]] | None = None) -> None:
        self._entries: Mapping[str, tuple[str, ...]] = MappingProxyType(
            {name: _ordered_unique(perms) for name, perms in (entries or {}).items()}
        )

    def __getitem__(self, name: str) -> tuple[str, ...]:
        return self._entries[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def required_for(self, action: str) -> tuple[str, ...]:
        """Permissions required by action; empty tuple when the action is not registered."""
        return self._entries.get(action, ())

    def merged(self, overrides: Mapping[str, Iterable[str]]) -> "PermissionRegistry":
        """Return a new registry with overrides replacing same-named entries."""
        return PermissionRegistry({**self._entries, **overrides})

    @classmethod
    def from_json_file(cls, path: str | Path) -> "PermissionRegistry":
        """Load {"action": ["PERM", ...]} from a JSON file.

        Raises:
            ValueError: If the file is not an object of string lists.
        """
        data = json.loads(Path(path).read_text(encoding="utf-8"))
        if not isinstance(data, dict):
            raise ValueError(f"Permission registry {path} must be a JSON object")
        for name, perms in data.items():
            if not isinstance(perms, list) or not all(isinstance(p, str) for p in perms):
                raise ValueError(
                    f"Permission registry entry {name!r} must be a list of strings"
                )
        return cls(data)
