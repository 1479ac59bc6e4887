"""Domain layer: entities, value objects, enums, and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from policy_gate.domain.entities import ActionDescriptor, Principal
from policy_gate.domain.enums import (
    AccountStatus,
    ClientSurface,
    ErrorKind,
    Role,
    TokenState,
    TransactionState,
)
from policy_gate.domain.exceptions import (
    EnvelopeError,
    PolicyGateException,
    SentinelError,
    SqlNotConfiguredException,
    TransactionStateError,
)
from policy_gate.domain.value_objects import (
    Envelope,
    ErrorEnvelope,
    Marked,
    Payload,
    PreShaped,
    Raw,
    SuccessEnvelope,
)

__all__ = [
    # Entities
    "ActionDescriptor",
    "Principal",
    # Enums
    "AccountStatus",
    "ClientSurface",
    "ErrorKind",
    "Role",
    "TokenState",
    "TransactionState",
    # Exceptions
    "EnvelopeError",
    "PolicyGateException",
    "SentinelError",
    "SqlNotConfiguredException",
    "TransactionStateError",
    # Value objects
    "Envelope",
    "ErrorEnvelope",
    "Marked",
    "Payload",
    "PreShaped",
    "Raw",
    "SuccessEnvelope",
]
