"""FastAPI application entry point.

Wiring only: lifespan, exception handlers, middleware, routers.
No business logic here (SRP). See policy_gate.core.lifespan and
policy_gate.core.exception_handlers.

Settings are loaded inside create_app() so that tests can set env (and
clear the get_settings cache) before calling create_app(). Serve with
"uvicorn policy_gate.main:create_app --factory" or any ASGI server. Business
actions are supplied by the host through an ActionRegistry.
"""

from fastapi import FastAPI

from policy_gate.api.v1.router import api_router
from policy_gate.application.registry import ActionRegistry
from policy_gate.core.config import get_settings
from policy_gate.core.constants import API_V1_PREFIX
from policy_gate.core.exception_handlers import register_exception_handlers
from policy_gate.core.lifespan import create_lifespan
from policy_gate.middleware import RequestIDMiddleware


def create_app(registry: ActionRegistry | None = None) -> FastAPI:
    """Build and return the FastAPI application serving registry's actions."""
    settings = get_settings()
    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        lifespan=create_lifespan(registry or ActionRegistry()),
    )

    register_exception_handlers(app)

    app.add_middleware(RequestIDMiddleware, header_name=settings.request_id_header)

    app.include_router(api_router, prefix=API_V1_PREFIX)

    return app
