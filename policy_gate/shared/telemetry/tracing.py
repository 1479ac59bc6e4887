"""Tracing helpers for pipeline invocations (OpenTelemetry API).

Spans are no-ops unless the host process configures an OpenTelemetry SDK
tracer provider.
"""

from collections.abc import Iterator
from contextlib import contextmanager

from opentelemetry import trace
from opentelemetry.trace import Status, StatusCode

# Allowlist of attribute names recorded on invocation spans; anything else is dropped.
_SAFE_SPAN_ATTR_KEYS = frozenset({
    "action", "surface", "mutating", "language", "request_id", "tenant_id",
    "outcome", "code", "error_code",
})


def _set_safe_span_attrs(span: trace.Span, attributes: dict) -> None:
    """Set span attributes; only allowlisted keys with non-None values are recorded."""
    for key, value in attributes.items():
        if key in _SAFE_SPAN_ATTR_KEYS and value is not None:
            span.set_attribute(f"policy.{key}", value if isinstance(value, (bool, int, float)) else str(value))


@contextmanager
def invocation_span(action: str, **attributes: str | int | float | bool | None) -> Iterator[trace.Span]:
    """Open a span named policy.<action> for one wrapped invocation.

    The pipeline never raises, so the caller records the outcome with
    record_outcome() instead of relying on exception propagation.
    """
    tracer = trace.get_tracer(__name__)
    with tracer.start_as_current_span(f"policy.{action}") as span:
        _set_safe_span_attrs(span, {"action": action, **attributes})
        yield span


def record_outcome(span: trace.Span, *, code: str | None, error_code: str | None = None) -> None:
    """Mark the span OK (code None) or ERROR with the taxonomy key and raw code."""
    if not span.is_recording():
        return
    if code is None:
        _set_safe_span_attrs(span, {"outcome": "success"})
        span.set_status(Status(StatusCode.OK))
        return
    _set_safe_span_attrs(span, {"outcome": "error", "code": code, "error_code": error_code})
    span.set_status(Status(StatusCode.ERROR, code))
