"""Domain entities: the caller and the per-action policy."""

from policy_gate.domain.entities.action import ActionDescriptor
from policy_gate.domain.entities.principal import Principal

__all__ = ["ActionDescriptor", "Principal"]
