"""Action dispatch endpoint: POST /actions/{name} runs a registered action through the pipeline.

The JSON body is the action's args. The response body is the envelope; the
HTTP status is derived from the error key (200 for every success).
"""

from typing import Annotated, Any

from fastapi import APIRouter, Body
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from policy_gate.api.v1.dependencies import ActionTableDep, PrincipalDep, RequestContextDep
from policy_gate.domain.enums import ErrorKind
from policy_gate.domain.exceptions import UnknownActionException
from policy_gate.domain.value_objects import Envelope
from policy_gate.schemas.envelope import ErrorEnvelopeSchema, SuccessEnvelopeSchema

router = APIRouter()

_STATUS_BY_KEY: dict[str, int] = {
    ErrorKind.UNAUTHENTICATED.value: 401,
    ErrorKind.TOKEN_EXPIRED.value: 401,
    ErrorKind.INVALID_TOKEN.value: 401,
    ErrorKind.UNAUTHORIZED.value: 403,
    ErrorKind.INSUFFICIENT_PERMISSIONS.value: 403,
    ErrorKind.TENANT_ACCESS_DENIED.value: 403,
    ErrorKind.ACCOUNT_SUSPENDED.value: 403,
    ErrorKind.ACCOUNT_TERMINATED.value: 403,
    ErrorKind.PHONE_NOT_VERIFIED.value: 403,
    ErrorKind.MISSING_REQUIRED_FIELD.value: 400,
    ErrorKind.VALIDATION_FAILED.value: 400,
    ErrorKind.SYSTEM_ERROR.value: 500,
}


def status_for(envelope: Envelope) -> int:
    """HTTP status for an envelope; duplicates are 409, other domain keys 400."""
    if not envelope.is_error:
        return 200
    if envelope.code.startswith("DUPLICATE_"):
        return 409
    return _STATUS_BY_KEY.get(envelope.code, 400)


@router.post(
    "/{name}",
    responses={
        200: {"model": SuccessEnvelopeSchema},
        400: {"model": ErrorEnvelopeSchema},
        401: {"model": ErrorEnvelopeSchema},
        403: {"model": ErrorEnvelopeSchema},
        404: {"model": ErrorEnvelopeSchema},
        409: {"model": ErrorEnvelopeSchema},
        500: {"model": ErrorEnvelopeSchema},
    },
)
async def invoke_action(
    name: str,
    actions: ActionTableDep,
    principal: PrincipalDep,
    request_context: RequestContextDep,
    args: Annotated[dict[str, Any] | None, Body()] = None,
) -> JSONResponse:
    """Run action name with the request body as args.

    Raises:
        UnknownActionException: If no action is registered under name (404).
    """
    action = actions.get(name)
    if action is None:
        raise UnknownActionException(name)
    envelope = await action(principal, args or {}, request_context)
    return JSONResponse(
        status_code=status_for(envelope),
        content=jsonable_encoder(envelope.to_dict()),
    )
