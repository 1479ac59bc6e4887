"""Action registry: named handlers with their descriptors, bound to a pipeline at startup.

Usage:
    actions = ActionRegistry()

    @actions.mutation("update_store_info", required_fields=["name"], check_tenant_scope=True)
    async def update_store_info(args, ctx):
        ...
        return {"_code": "SS100", "store": store}

    table = actions.bind(pipeline)   # name -> WrappedAction
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

from policy_gate.application.pipeline import Handler, PolicyPipeline, WrappedAction
from policy_gate.domain.entities import ActionDescriptor
from policy_gate.domain.exceptions import DuplicateActionException, UnknownActionException


@dataclass(frozen=True)
class ActionDefinition:
    handler: Handler
    descriptor: ActionDescriptor
    mutating: bool


class ActionRegistry:
    """Collects action definitions; names are unique."""

    def __init__(self) -> None:
        self._definitions: dict[str, ActionDefinition] = {}

    def __contains__(self, name: object) -> bool:
        return name in self._definitions

    def __iter__(self) -> Iterator[str]:
        return iter(self._definitions)

    def __len__(self) -> int:
        return len(self._definitions)

    def register(
        self,
        handler: Handler,
        descriptor: ActionDescriptor,
        is_mutating: bool | None = None,
    ) -> ActionDefinition:
        """Add handler under descriptor.name.

        Raises:
            DuplicateActionException: If the name is already registered.
        """
        if descriptor.name in self._definitions:
            raise DuplicateActionException(descriptor.name)
        mutating = descriptor.mutating if is_mutating is None else is_mutating
        definition = ActionDefinition(handler, descriptor, mutating)
        self._definitions[descriptor.name] = definition
        return definition

    def _decorator(self, name: str, mutating: bool, options: dict[str, Any]) -> Callable[[Handler], Handler]:
        def decorator(handler: Handler) -> Handler:
            self.register(handler, ActionDescriptor(name=name, mutating=mutating, **options))
            return handler

        return decorator

    def query(self, name: str, **options: Any) -> Callable[[Handler], Handler]:
        """Register a read-only action (never opens a transaction)."""
        return self._decorator(name, False, options)

    def mutation(self, name: str, **options: Any) -> Callable[[Handler], Handler]:
        """Register a mutating action (runs inside a transaction)."""
        return self._decorator(name, True, options)

    def definition(self, name: str) -> ActionDefinition:
        try:
            return self._definitions[name]
        except KeyError:
            raise UnknownActionException(name) from None

    def bind(self, pipeline: PolicyPipeline) -> Mapping[str, WrappedAction]:
        """Wrap every definition with pipeline; the result is read-only."""
        return MappingProxyType(
            {
                name: pipeline.wrap(d.handler, d.descriptor, is_mutating=d.mutating)
                for name, d in self._definitions.items()
            }
        )
