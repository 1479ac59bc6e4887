"""API v1 router aggregation.

Includes all endpoint modules with consistent prefix and tags. Routes use
dependencies from policy_gate.api.v1.dependencies.
"""

from fastapi import APIRouter

from policy_gate.api.v1.endpoints import actions, health

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(actions.router, prefix="/actions", tags=["actions"])
