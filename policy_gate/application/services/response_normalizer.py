"""Response normalizer: handler result -> success envelope."""

from __future__ import annotations

import logging
from typing import Any

from policy_gate.application.interfaces.services import IMessageCatalog
from policy_gate.domain.value_objects import SuccessEnvelope
from policy_gate.domain.value_objects.results import (
    SUCCESS_MARKER_FIELD,
    Marked,
    Payload,
    PreShaped,
    Raw,
    classify,
)

logger = logging.getLogger(__name__)


class ResponseNormalizer:
    """Shapes handler results using the success message catalog.

    None, sequences and scalars pass through untouched. Marked results get
    the localized success message; pre-shaped results pass through; plain
    objects are wrapped as {"success": True, ...}.
    """

    def __init__(self, catalog: IMessageCatalog) -> None:
        self.catalog = catalog

    def normalize(self, result: Any, language: str | None = None) -> SuccessEnvelope:
        variant = classify(result)
        if isinstance(variant, Raw):
            return SuccessEnvelope(variant.value)
        if isinstance(variant, Marked):
            return self._marked(variant, language)
        if isinstance(variant, PreShaped):
            return SuccessEnvelope(variant.body)
        if isinstance(variant, Payload):
            return SuccessEnvelope({"success": True, **variant.fields})
        raise TypeError(f"Unsupported handler result: {type(variant).__name__}")

    def _marked(self, variant: Marked, language: str | None) -> SuccessEnvelope:
        message = self.catalog.lookup(variant.code, language)
        if not message.found:
            logger.warning("Unknown success code %s; using fallback message", variant.code)
        body = {
            SUCCESS_MARKER_FIELD: variant.code,
            "success": True,
            "message": message.text,
            "code": message.key,
            **variant.fields,
        }
        return SuccessEnvelope(body, marker=variant.code, key=message.key, message=message.text)
