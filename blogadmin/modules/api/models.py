"""
Blog admin API data models.

Field names use the camelCase keys the admin website already sends and
expects, via pydantic aliases.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


# Request Models (API Input)


class LoginRequest(BaseModel):
    """Admin login form."""

    email: Optional[str] = Field(None, description="Admin email address")
    password: Optional[str] = Field(None, description="Admin password")


class ChangePasswordRequest(BaseModel):
    """Change password form."""

    model_config = ConfigDict(populate_by_name=True)

    current_password: Optional[str] = Field(None, alias="currentPassword")
    new_password: Optional[str] = Field(None, alias="newPassword")


# Response Models (API Output)


class SuccessResponse(BaseModel):
    """Generic success flag; failures never say which step failed."""

    success: bool


class SessionActionResponse(BaseModel):
    """Response for routes that require an authenticated session."""

    model_config = ConfigDict(populate_by_name=True)

    auth_success: bool = Field(..., alias="authSuccess")
    success: Optional[bool] = None
    submit_error: Optional[bool] = Field(None, alias="submitError")
    invalid_password_credential_error: Optional[bool] = Field(
        None, alias="invalidPasswordCredentialError"
    )
