"""Tests for ActionRegistry (registration, decorators, binding to a pipeline)."""

import pytest

from policy_gate.application.pipeline import PolicyPipeline, WrappedAction
from policy_gate.application.registry import ActionRegistry
from policy_gate.domain.entities import ActionDescriptor
from policy_gate.domain.enums import Role
from policy_gate.domain.exceptions import DuplicateActionException, UnknownActionException


async def _noop(args, ctx):
    return None


def test_query_and_mutation_decorators() -> None:
    registry = ActionRegistry()

    @registry.query("list_orders", roles=[Role.CASHIER])
    async def list_orders(args, ctx):
        return []

    @registry.mutation("update_store_info", required_fields=["name"])
    async def update_store_info(args, ctx):
        return {}

    assert list(registry) == ["list_orders", "update_store_info"]
    assert len(registry) == 2
    query = registry.definition("list_orders")
    assert query.handler is list_orders
    assert not query.mutating
    assert query.descriptor.roles == (Role.CASHIER,)
    mutation = registry.definition("update_store_info")
    assert mutation.mutating
    assert mutation.descriptor.mutating
    assert mutation.descriptor.required_fields == ("name",)


def test_decorator_returns_handler_unchanged() -> None:
    registry = ActionRegistry()
    assert registry.query("a")(_noop) is _noop


def test_duplicate_name_rejected() -> None:
    registry = ActionRegistry()
    registry.register(_noop, ActionDescriptor("ping"))
    with pytest.raises(DuplicateActionException):
        registry.register(_noop, ActionDescriptor("ping"))


def test_unknown_definition() -> None:
    with pytest.raises(UnknownActionException):
        ActionRegistry().definition("missing")


def test_register_is_mutating_override() -> None:
    registry = ActionRegistry()
    definition = registry.register(_noop, ActionDescriptor("close_store"), is_mutating=True)
    assert definition.mutating
    assert "close_store" in registry


def test_bind_wraps_every_action(pipeline: PolicyPipeline) -> None:
    registry = ActionRegistry()
    registry.query("a")(_noop)
    registry.mutation("b")(_noop)
    table = registry.bind(pipeline)
    assert set(table) == {"a", "b"}
    assert isinstance(table["a"], WrappedAction)
    assert not table["a"].mutating
    assert table["b"].mutating
    with pytest.raises(TypeError):
        table["c"] = table["a"]  # type: ignore[index]


async def test_bound_action_runs_through_pipeline(pipeline: PolicyPipeline) -> None:
    registry = ActionRegistry()

    @registry.query("ping", require_auth=False)
    async def ping(args, ctx):
        return {"pong": True}

    envelope = await registry.bind(pipeline)["ping"](None)
    assert envelope.body == {"success": True, "pong": True}
