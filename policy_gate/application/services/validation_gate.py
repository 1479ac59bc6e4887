"""Validation gate: required-field presence checks before any transaction opens."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from policy_gate.domain.entities import ActionDescriptor
from policy_gate.domain.enums import ErrorKind
from policy_gate.domain.exceptions import SentinelError

logger = logging.getLogger(__name__)

INPUT_KEY = "input"


def field_source(args: Mapping[str, Any]) -> Mapping[str, Any]:
    """Return args["input"] when present (dumping pydantic models), else args itself."""
    data = args.get(INPUT_KEY)
    if data is None:
        return args
    if hasattr(data, "model_dump"):
        return data.model_dump()
    if isinstance(data, Mapping):
        return data
    return args


def is_missing(value: Any) -> bool:
    """None, blank strings and empty collections count as missing; 0 and False do not."""
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple, set, frozenset, dict)):
        return len(value) == 0
    return False


class ValidationGate:
    """Checks an action's required_fields; raises on the first missing one."""

    def __init__(self, codes: Mapping[ErrorKind, str]) -> None:
        self._missing_code = codes[ErrorKind.MISSING_REQUIRED_FIELD]

    def validate(self, descriptor: ActionDescriptor, args: Mapping[str, Any]) -> None:
        """Raise SentinelError(MISSING_REQUIRED_FIELD, <field>) for the first missing field.

        Fields are checked in declared order. No side effects.
        """
        if not descriptor.required_fields:
            return
        source = field_source(args)
        for name in descriptor.required_fields:
            if is_missing(source.get(name)):
                logger.info(
                    "Missing required field %s for %s (provided: %s)",
                    name,
                    descriptor.name,
                    sorted(str(k) for k in source.keys()),
                )
                raise SentinelError(self._missing_code, name, field=name)
