"""Shared telemetry: logging setup and tracing helpers."""

from policy_gate.shared.telemetry.logging import setup_logging
from policy_gate.shared.telemetry.tracing import invocation_span, record_outcome

__all__ = [
    "setup_logging",
    "invocation_span",
    "record_outcome",
]
