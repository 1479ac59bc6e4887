"""SQLAlchemy transaction provider integration tests on a SQLite file database (aiosqlite)."""

from collections.abc import AsyncIterator, Callable

import pytest
from sqlalchemy import String, UniqueConstraint, func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import Mapped, mapped_column

from policy_gate.application.pipeline import PolicyPipeline
from policy_gate.domain.entities import ActionDescriptor, Principal
from policy_gate.infrastructure.persistence.database import Base, SqlAlchemyTransactionProvider
from policy_gate.infrastructure.surfaces import web
from policy_gate.shared.context import RequestContext

pytestmark = pytest.mark.requires_db


class StoreRow(Base):
    __tablename__ = "stores"
    __table_args__ = (UniqueConstraint("tenant_id", "name"),)

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    tenant_id: Mapped[str] = mapped_column(String(64))
    name: Mapped[str] = mapped_column(String(200))


@pytest.fixture
async def session_factory(tmp_path) -> AsyncIterator[async_sessionmaker[AsyncSession]]:
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'policy_gate.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    await engine.dispose()


@pytest.fixture
def sql_pipeline(
    make_pipeline: Callable[..., PolicyPipeline], session_factory: async_sessionmaker[AsyncSession]
) -> PolicyPipeline:
    pipeline = make_pipeline(transaction_provider=SqlAlchemyTransactionProvider(session_factory))
    pipeline.translator.constraints["stores.tenant_id,stores.name"] = web.DUPLICATE_STORE_NAME
    return pipeline


async def _store_count(session_factory: async_sessionmaker[AsyncSession]) -> int:
    async with session_factory() as session:
        return (await session.execute(select(func.count()).select_from(StoreRow))).scalar_one()


async def create_store(args, ctx):
    ctx.transaction.session.add(StoreRow(tenant_id=ctx.tenant_id, name=args["input"]["name"]))
    await ctx.transaction.session.flush()
    if args.get("fail_after_insert"):
        raise RuntimeError("failed after insert")
    return {"_code": "SS001"}


def _create_store_action(pipeline: PolicyPipeline):
    return pipeline.wrap(create_store, ActionDescriptor("create_store", required_fields=["name"], mutating=True))


async def test_commit_persists(sql_pipeline: PolicyPipeline, session_factory, store_owner: Principal) -> None:
    """A successful mutation is visible from a new session."""
    envelope = await _create_store_action(sql_pipeline)(store_owner, {"input": {"name": "Quán Ngon"}})
    assert not envelope.is_error
    assert envelope.key == "STORE_REGISTRATION_SUCCESSFUL"
    assert await _store_count(session_factory) == 1


async def test_handler_failure_discards_writes(
    sql_pipeline: PolicyPipeline, session_factory, store_owner: Principal
) -> None:
    envelope = await _create_store_action(sql_pipeline)(
        store_owner, {"input": {"name": "Quán Ngon"}, "fail_after_insert": True}
    )
    assert envelope.code == "SYSTEM_ERROR"
    assert await _store_count(session_factory) == 0


async def test_unique_violation_maps_to_duplicate_code(
    sql_pipeline: PolicyPipeline, session_factory, store_owner: Principal
) -> None:
    action = _create_store_action(sql_pipeline)
    await action(store_owner, {"input": {"name": "Quán Ngon"}})
    envelope = await action(store_owner, {"input": {"name": "Quán Ngon"}}, RequestContext(language="en"))
    assert envelope.code == "DUPLICATE_STORE_NAME"
    assert envelope.error_code == "S3067"
    assert envelope.message == "A store with this name already exists."
    assert envelope.diagnostics["originalError"].startswith("UNIQUE constraint failed")
    assert await _store_count(session_factory) == 1


async def test_unmapped_unique_violation_is_validation_failed(
    make_pipeline: Callable[..., PolicyPipeline], session_factory, store_owner: Principal
) -> None:
    pipeline = make_pipeline(transaction_provider=SqlAlchemyTransactionProvider(session_factory))
    action = _create_store_action(pipeline)
    await action(store_owner, {"input": {"name": "Bún Chả"}})
    envelope = await action(store_owner, {"input": {"name": "Bún Chả"}})
    assert envelope.code == "VALIDATION_FAILED"


async def test_provider_opens_independent_sessions(session_factory) -> None:
    provider = SqlAlchemyTransactionProvider(session_factory)
    first = await provider.begin("store-1")
    second = await provider.begin("store-1")
    assert first.session is not second.session
    first.session.add(StoreRow(tenant_id="store-1", name="A"))
    await first.session.flush()
    await first.commit()
    await second.rollback()
    assert await _store_count(session_factory) == 1
