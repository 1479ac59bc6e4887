"""Handler result variants.

Handlers may return these directly, or return plain values which
classify() maps onto the same closed set once, at the normalizer boundary.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

# Field a handler sets on a dict result to request a localized success message.
SUCCESS_MARKER_FIELD = "_code"


@dataclass(frozen=True)
class Raw:
    """Passed through untouched: None, sequences and scalars."""

    value: Any


@dataclass(frozen=True)
class Marked:
    """Object result tagged with a success code; gets a localized message."""

    code: str
    fields: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class PreShaped:
    """Handler already built its own envelope (declares "success")."""

    body: Mapping[str, Any]


@dataclass(frozen=True)
class Payload:
    """Plain object result; wrapped as {"success": True, **fields}."""

    fields: Mapping[str, Any]


HandlerResult = Raw | Marked | PreShaped | Payload


def classify(result: Any) -> HandlerResult:
    """Map a handler's return value onto a result variant.

    pydantic models are dumped to dicts first. Any mapping with a truthy
    success marker is Marked (the marker stays in fields); a mapping that
    declares "success" is PreShaped; any other mapping is Payload.
    """
    if isinstance(result, (Raw, Marked, PreShaped, Payload)):
        return result
    if hasattr(result, "model_dump"):
        result = result.model_dump()
    if result is None:
        return Raw(None)
    if isinstance(result, (list, tuple)):
        return Raw(result)
    if not isinstance(result, Mapping):
        return Raw(result)
    marker = result.get(SUCCESS_MARKER_FIELD)
    if marker:
        return Marked(str(marker), dict(result))
    if "success" in result:
        return PreShaped(dict(result))
    return Payload(dict(result))
