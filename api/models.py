"""
API request and response models for AuthGate REST endpoints.

These Pydantic v2 models define the HTTP transport contract for the API layer.
The JSON keys are camelCase (returnTo, userId) because browser scripts and the
consuming apps already speak that shape; Python-side names are snake_case via
aliases.

Separation of concerns: auth/ owns verification results; api/ models = API contract.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

# ---------------------------------------------------------------------------
# Request models
# ---------------------------------------------------------------------------


class LoginRequest(BaseModel):
    """Request body for POST /api/login."""

    model_config = ConfigDict(populate_by_name=True)

    password: str = Field(max_length=1024)
    return_to: Optional[str] = Field(default=None, alias="returnTo", max_length=2048)


class GrantRequest(BaseModel):
    """Request body for POST /api/grant.

    Only userId is whitespace-stripped; the permission list is stored as sent.
    """

    model_config = ConfigDict(populate_by_name=True)

    user_id: str = Field(alias="userId", min_length=1, max_length=255)
    permissions: list[str]

    @field_validator("user_id", mode="before")
    @classmethod
    def strip_user_id(cls, value):
        return value.strip() if isinstance(value, str) else value


# ---------------------------------------------------------------------------
# Response models
# ---------------------------------------------------------------------------


class LoginResponse(BaseModel):
    success: bool = True
    redirect: str
    token: str


class VerifyResponse(BaseModel):
    """Response body for GET /api/verify.

    user and permissions are omitted entirely when valid is false.
    """

    valid: bool
    user: Optional[dict[str, Any]] = None
    permissions: Optional[list[str]] = None


class GrantResponse(BaseModel):
    success: bool = True


class HealthResponse(BaseModel):
    status: str = "healthy"
    version: str


class ErrorDetail(BaseModel):
    code: str
    message: str
    detail: Optional[str] = None
    login_url: Optional[str] = Field(default=None, serialization_alias="loginUrl")


class ErrorResponse(BaseModel):
    error: ErrorDetail
