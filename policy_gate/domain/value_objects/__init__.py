"""Domain value objects: envelopes and handler result variants."""

from policy_gate.domain.value_objects.envelopes import (
    Envelope,
    ErrorEnvelope,
    SuccessEnvelope,
)
from policy_gate.domain.value_objects.results import (
    HandlerResult,
    Marked,
    Payload,
    PreShaped,
    Raw,
    classify,
)

__all__ = [
    "Envelope",
    "ErrorEnvelope",
    "HandlerResult",
    "Marked",
    "Payload",
    "PreShaped",
    "Raw",
    "SuccessEnvelope",
    "classify",
]
