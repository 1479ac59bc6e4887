"""Presentation-layer dependency injection (composition root).

Builds the policy pipeline for the configured client surface from its
profile and the infrastructure implementations, and provides FastAPI
Depends() for the bound action table, the caller's Principal and the
per-request context. Routes depend only on these, not on infra directly.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Annotated

from fastapi import Depends, Request

from policy_gate.application.interfaces.services import ITransactionProvider
from policy_gate.application.pipeline import PolicyPipeline, WrappedAction
from policy_gate.application.services.authorization_service import AuthorizationService
from policy_gate.application.services.error_translator import ErrorTranslator
from policy_gate.application.services.permission_service import PermissionRegistry
from policy_gate.application.services.response_normalizer import ResponseNormalizer
from policy_gate.application.services.transaction_coordinator import TransactionCoordinator
from policy_gate.application.services.validation_gate import ValidationGate
from policy_gate.core.config import Settings, get_settings
from policy_gate.core.constants import LANGUAGE_NAMES
from policy_gate.domain.entities import Principal
from policy_gate.infrastructure.security.jwt import principal_from_authorization
from policy_gate.infrastructure.surfaces import SurfaceProfile
from policy_gate.shared.context import RequestContext

logger = logging.getLogger(__name__)


def load_permission_registry(profile: SurfaceProfile, settings: Settings) -> PermissionRegistry:
    """Profile defaults, overridden per action by PERMISSION_REGISTRY_PATH when set."""
    registry = profile.permission_registry
    if settings.permission_registry_path:
        overrides = PermissionRegistry.from_json_file(settings.permission_registry_path)
        registry = registry.merged(overrides)
        logger.info(
            "Loaded %d permission overrides from %s",
            len(overrides),
            settings.permission_registry_path,
        )
    return registry


def build_pipeline(
    profile: SurfaceProfile,
    settings: Settings | None = None,
    transaction_provider: ITransactionProvider | None = None,
    permission_registry: PermissionRegistry | None = None,
) -> PolicyPipeline:
    """Assemble every pipeline stage for one client surface."""
    settings = settings or get_settings()
    registry = permission_registry or load_permission_registry(profile, settings)
    return PolicyPipeline(
        validation_gate=ValidationGate(profile.codes),
        authorization=AuthorizationService(registry, profile.role_table, profile.codes),
        coordinator=TransactionCoordinator(transaction_provider),
        normalizer=ResponseNormalizer(profile.success_catalog),
        translator=ErrorTranslator(
            profile.error_catalog,
            profile.codes,
            constraints=profile.constraints,
            language_names=LANGUAGE_NAMES,
            include_diagnostics=not settings.is_production,
        ),
        default_language=settings.default_language,
        supported_languages=settings.language_list,
        surface=profile.surface.value,
        log_timing=settings.debug,
    )


def get_actions(request: Request) -> Mapping[str, WrappedAction]:
    """Action table bound at startup (see core.lifespan)."""
    return request.app.state.actions


def get_principal(request: Request) -> Principal | None:
    """Resolve the caller from the Authorization header; never raises."""
    return principal_from_authorization(request.headers.get("Authorization"))


def _header_language(request: Request, header_name: str) -> str | None:
    language = request.headers.get(header_name)
    if language:
        return language
    accept = request.headers.get("Accept-Language")
    if accept:
        return accept.split(",")[0].split(";")[0].strip() or None
    return None


def get_request_context(request: Request) -> RequestContext:
    """Language and request id for the pipeline (request id set by RequestIDMiddleware)."""
    settings = get_settings()
    return RequestContext(
        language=_header_language(request, settings.language_header),
        request_id=getattr(request.state, "request_id", None),
    )


ActionTableDep = Annotated[Mapping[str, WrappedAction], Depends(get_actions)]
PrincipalDep = Annotated[Principal | None, Depends(get_principal)]
RequestContextDep = Annotated[RequestContext, Depends(get_request_context)]
