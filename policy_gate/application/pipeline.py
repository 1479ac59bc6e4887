"""Policy pipeline: wraps business handlers with validation, authorization and transactions.

Per invocation, strictly in this order:
    Validation -> Authorization -> Transaction open (mutating only) ->
    Handler -> Commit / Rollback -> Normalize / Translate

A wrapped action never raises: every outcome is returned as a
SuccessEnvelope or an ErrorEnvelope.

Usage:
    pipeline = PolicyPipeline(...)
    update_menu_item = pipeline.wrap(handler, ActionDescriptor("update_menu_item", mutating=True))
    envelope = await update_menu_item(principal, {"input": {...}}, RequestContext(language="en"))
"""

from __future__ import annotations

import logging
import time
from collections.abc import Awaitable, Callable, Iterable, Mapping
from typing import Any

from policy_gate.application.services.authorization_service import AuthorizationService
from policy_gate.application.services.error_translator import ErrorTranslator
from policy_gate.application.services.response_normalizer import ResponseNormalizer
from policy_gate.application.services.transaction_coordinator import TransactionCoordinator
from policy_gate.application.services.validation_gate import ValidationGate
from policy_gate.domain.entities import ActionDescriptor, Principal
from policy_gate.domain.value_objects import Envelope
from policy_gate.shared.context import ExecutionContext, RequestContext
from policy_gate.shared.telemetry.tracing import invocation_span, record_outcome

logger = logging.getLogger(__name__)

Handler = Callable[[Mapping[str, Any], ExecutionContext], Awaitable[Any]]


class WrappedAction:
    """A handler bound to its descriptor; call it with (principal, args, context)."""

    def __init__(
        self,
        pipeline: "PolicyPipeline",
        handler: Handler,
        descriptor: ActionDescriptor,
        mutating: bool,
    ) -> None:
        self._pipeline = pipeline
        self.handler = handler
        self.descriptor = descriptor
        self.mutating = mutating

    @property
    def name(self) -> str:
        return self.descriptor.name

    async def __call__(
        self,
        principal: Principal | None,
        args: Mapping[str, Any] | None = None,
        context: RequestContext | None = None,
    ) -> Envelope:
        return await self._pipeline.invoke(self, principal, args or {}, context)

    def __repr__(self) -> str:
        return f"WrappedAction({self.name!r}, mutating={self.mutating})"


class PolicyPipeline:
    """Runs wrapped actions through every policy stage.

    Args:
        validation_gate: Required-field checks.
        authorization: Ordered policy checks.
        coordinator: Transaction scope for mutating actions.
        normalizer: Handler result -> success envelope.
        translator: Exception -> error envelope.
        default_language: Used when the caller's language is missing or unsupported.
        supported_languages: Languages the catalogs carry.
        surface: Client surface name, recorded on spans.
        log_timing: Log per-invocation duration at DEBUG (development).
    """

    def __init__(
        self,
        validation_gate: ValidationGate,
        authorization: AuthorizationService,
        coordinator: TransactionCoordinator,
        normalizer: ResponseNormalizer,
        translator: ErrorTranslator,
        default_language: str = "vi",
        supported_languages: Iterable[str] = ("vi", "en", "ko"),
        surface: str | None = None,
        log_timing: bool = False,
    ) -> None:
        self.validation_gate = validation_gate
        self.authorization = authorization
        self.coordinator = coordinator
        self.normalizer = normalizer
        self.translator = translator
        self.default_language = default_language
        self.supported_languages = tuple(supported_languages)
        self.surface = surface
        self.log_timing = log_timing

    def resolve_language(self, requested: str | None) -> str:
        """Requested language if supported (case-insensitive, region stripped), else default."""
        if requested:
            language = requested.strip().lower().replace("_", "-").split("-")[0]
            if language in self.supported_languages:
                return language
        return self.default_language

    def wrap(
        self,
        handler: Handler,
        descriptor: ActionDescriptor,
        is_mutating: bool | None = None,
    ) -> WrappedAction:
        """Bind handler to descriptor. is_mutating overrides descriptor.mutating when given."""
        mutating = descriptor.mutating if is_mutating is None else is_mutating
        return WrappedAction(self, handler, descriptor, mutating)

    async def invoke(
        self,
        action: WrappedAction,
        principal: Principal | None,
        args: Mapping[str, Any],
        request: RequestContext | None = None,
    ) -> Envelope:
        request = request or RequestContext()
        descriptor = action.descriptor
        ctx = ExecutionContext(
            action=descriptor,
            principal=principal,
            language=self.resolve_language(request.language),
            request_id=request.request_id,
            attributes=dict(request.attributes),
        )
        started = time.perf_counter()
        with invocation_span(
            descriptor.name,
            surface=self.surface,
            mutating=action.mutating,
            language=ctx.language,
            request_id=ctx.request_id,
        ) as span:
            try:
                envelope: Envelope = await self._run(action, args, ctx)
            except Exception as exc:
                envelope = self._translate(exc, ctx.language, descriptor.name)
            if envelope.is_error:
                record_outcome(span, code=envelope.code, error_code=envelope.error_code)
            else:
                record_outcome(span, code=None)
        if self.log_timing:
            logger.debug(
                "%s completed in %.1fms (%s)",
                descriptor.name,
                (time.perf_counter() - started) * 1000,
                envelope.code if envelope.is_error else "ok",
            )
        return envelope

    def _translate(self, error: Exception, language: str, action: str) -> Envelope:
        try:
            return self.translator.translate(error, language, action)
        except Exception:
            logger.exception("Error translation failed for %s", action)
            return self.translator.system_error(error, language, action)

    async def _run(
        self,
        action: WrappedAction,
        args: Mapping[str, Any],
        ctx: ExecutionContext,
    ) -> Envelope:
        descriptor = action.descriptor
        self.validation_gate.validate(descriptor, args)
        await self.authorization.authorize(ctx.principal, descriptor, args, ctx)
        async with self.coordinator.scope(ctx, action.mutating):
            result = await action.handler(args, ctx)
        return self.normalizer.normalize(result, ctx.language)
