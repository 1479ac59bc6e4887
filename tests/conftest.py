"""Pytest configuration and fixtures for policy-gate.

Settings come from the environment; SECRET_KEY and the client surface are
defaulted here before anything reads them. HTTP tests run the app's
lifespan and then rebind the action table to a recording transaction
provider, so no database is needed. The SQLite integration tests build
their own engine (see tests/integration).
"""

import os

os.environ.setdefault("SECRET_KEY", "test-secret-key-not-for-production")
os.environ["CLIENT_SURFACE"] = "web"
os.environ["DATABASE_URL"] = ""
os.environ.pop("PERMISSION_REGISTRY_PATH", None)

from collections.abc import Callable  # noqa: E402

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from policy_gate.api.v1.dependencies import build_pipeline  # noqa: E402
from policy_gate.application.pipeline import PolicyPipeline  # noqa: E402
from policy_gate.application.registry import ActionRegistry  # noqa: E402
from policy_gate.core.config import get_settings  # noqa: E402
from policy_gate.domain.entities import Principal  # noqa: E402
from policy_gate.domain.enums import Role  # noqa: E402
from policy_gate.infrastructure.surfaces import SurfaceProfile, get_profile  # noqa: E402
from policy_gate.main import create_app  # noqa: E402
from tests.doubles import RecordingTransactionProvider  # noqa: E402

get_settings.cache_clear()


@pytest.fixture
def provider() -> RecordingTransactionProvider:
    """Recording transaction provider (no database)."""
    return RecordingTransactionProvider()


@pytest.fixture
def web_profile() -> SurfaceProfile:
    return get_profile("web")


@pytest.fixture
def admin_profile() -> SurfaceProfile:
    return get_profile("admin")


@pytest.fixture
def make_pipeline(provider: RecordingTransactionProvider) -> Callable[..., PolicyPipeline]:
    """Factory: pipeline for a surface (default web) wired to the recording provider."""

    def _make(surface: str = "web", transaction_provider=None, **kwargs) -> PolicyPipeline:
        return build_pipeline(
            get_profile(surface),
            get_settings(),
            transaction_provider=transaction_provider or provider,
            **kwargs,
        )

    return _make


@pytest.fixture
def pipeline(make_pipeline: Callable[..., PolicyPipeline]) -> PolicyPipeline:
    """Web-surface pipeline with the recording provider."""
    return make_pipeline()


@pytest.fixture
def store_owner() -> Principal:
    return Principal(id="acc-1", role=Role.STORE_OWNER, tenant_id="store-1")


@pytest.fixture
def cashier() -> Principal:
    return Principal(id="acc-2", role=Role.CASHIER, tenant_id="store-1")


@pytest.fixture
def action_registry() -> ActionRegistry:
    """Sample actions served by the HTTP client fixture."""
    registry = ActionRegistry()

    @registry.query("ping", require_auth=False)
    async def ping(args, ctx):
        return {"pong": True, "language": ctx.language}

    @registry.query("list_orders")
    async def list_orders(args, ctx):
        return [{"id": "o-1"}, {"id": "o-2"}]

    @registry.mutation(
        "update_store_info",
        required_fields=["name"],
        check_tenant_scope=True,
    )
    async def update_store_info(args, ctx):
        return {"_code": "SS100", "store": {"id": ctx.tenant_id, "name": args["input"]["name"]}}

    @registry.mutation("update_staff_role")
    async def update_staff_role(args, ctx):
        return {"_code": "SS015"}

    @registry.mutation("explode")
    async def explode(args, ctx):
        raise RuntimeError("database password is hunter2")

    return registry


@pytest.fixture
async def client(action_registry: ActionRegistry, provider: RecordingTransactionProvider) -> AsyncClient:
    """Async HTTP client against the FastAPI app (ASGI), lifespan included."""
    app = create_app(action_registry)
    async with app.router.lifespan_context(app):
        app.state.actions = action_registry.bind(
            build_pipeline(get_profile("web"), get_settings(), transaction_provider=provider)
        )
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as ac:
            yield ac
