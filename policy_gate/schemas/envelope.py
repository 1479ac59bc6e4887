"""Wire schemas for action envelopes (OpenAPI documentation only).

The pipeline builds envelopes itself; these models describe the JSON the
adapter returns so the generated docs show both shapes.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ErrorEnvelopeSchema(BaseModel):
    """Error envelope; domain extension fields appear as extra camelCase keys."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    code: str = Field(..., description="Stable error key, e.g. UNAUTHENTICATED")
    message: str = Field(..., description="Localized, client-safe message")
    error_code: str | None = Field(None, alias="errorCode", description="Raw taxonomy code, e.g. S2001")
    details: str | None = Field(None, description="Free-text detail from the sentinel")
    timestamp: str | None = Field(None, description="ISO 8601 UTC time of translation")
    diagnostics: dict[str, Any] | None = Field(
        None, description="Raw internal detail; never present in production"
    )


class SuccessEnvelopeSchema(BaseModel):
    """Shaped success envelope; payload fields appear as extra keys."""

    model_config = ConfigDict(extra="allow")

    success: bool = True
    code: str | None = Field(None, description="Success key when the handler set a marker")
    message: str | None = Field(None, description="Localized success message")
