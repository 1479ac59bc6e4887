"""Pydantic response schemas for the API."""

from policy_gate.schemas.envelope import ErrorEnvelopeSchema, SuccessEnvelopeSchema
from policy_gate.schemas.health import (
    HealthResponse,
    ReadinessErrorResponse,
    ReadinessResponse,
)

__all__ = [
    "ErrorEnvelopeSchema",
    "HealthResponse",
    "ReadinessErrorResponse",
    "ReadinessResponse",
    "SuccessEnvelopeSchema",
]
