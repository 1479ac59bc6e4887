"""Application lifespan: startup and shutdown.

Single place for all startup/shutdown logic (SRP). Used by main.py; no
business logic here, only wiring: logging, the surface's pipeline, the
bound action table, and the DB engine dispose.
"""

import logging
from collections.abc import AsyncIterator, Callable
from contextlib import AbstractAsyncContextManager, asynccontextmanager

from fastapi import FastAPI

from policy_gate.api.v1.dependencies import build_pipeline
from policy_gate.application.registry import ActionRegistry
from policy_gate.core.config import get_settings
from policy_gate.infrastructure.persistence.database import (
    SqlAlchemyTransactionProvider,
    dispose_engine,
)
from policy_gate.infrastructure.surfaces import get_profile
from policy_gate.shared.telemetry.logging import setup_logging

logger = logging.getLogger(__name__)


def create_lifespan(registry: ActionRegistry) -> Callable[[FastAPI], AbstractAsyncContextManager[None]]:
    """Return a lifespan that binds registry's actions to the configured surface."""

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        """Run startup then yield; on exit run shutdown.

        Startup order: logging, pipeline (profile + transaction provider),
        action table. Shutdown: SQL engine dispose.
        """
        settings = get_settings()

        # ---- Startup ----
        setup_logging()
        profile = get_profile(settings.client_surface)
        provider = SqlAlchemyTransactionProvider() if settings.database_url else None
        if provider is None:
            logger.warning("DATABASE_URL not set: mutating actions will fail with SYSTEM_ERROR")

        app.state.pipeline = build_pipeline(profile, settings, transaction_provider=provider)
        app.state.actions = registry.bind(app.state.pipeline)
        logger.info(
            "Serving %d actions for surface %s", len(app.state.actions), profile.surface.value
        )

        yield

        # ---- Shutdown ----
        app.state.actions = {}
        await dispose_engine()

    return lifespan
