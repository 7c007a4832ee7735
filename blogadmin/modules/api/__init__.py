"""
API Module - Black Box Interface

Purpose: HTTP request/response contracts for the admin-user routes
Interface: Pydantic models used by blogadmin.main
Hidden: Field aliasing between the website's JSON keys and Python names

The API module only describes payloads - it contains no business logic.
"""

from .models import (
    ChangePasswordRequest,
    LoginRequest,
    SessionActionResponse,
    SuccessResponse,
)

__all__ = [
    "LoginRequest",
    "ChangePasswordRequest",
    "SuccessResponse",
    "SessionActionResponse",
]
