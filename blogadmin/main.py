#!/usr/bin/env python3
"""
Blog Admin API - Main Entry Point

This is the thin orchestration layer that:
1. Loads configuration
2. Initializes modules
3. Serves the admin-user routes

All authentication logic is in blogadmin.modules.auth. This layer only moves
the subject id and token between the adminUser cookie and the auth service.
"""

import logging
import logging.config as log_config
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from typing import Optional, Tuple

import uvicorn
from fastapi import Depends, FastAPI, HTTPException, Request, Response
from fastapi.responses import JSONResponse

from blogadmin.config.provider import ConfigProvider, EnvConfigProvider
from blogadmin.logging_config import get_logging_config
from blogadmin.modules.api import (
    ChangePasswordRequest,
    LoginRequest,
    SessionActionResponse,
    SuccessResponse,
)
from blogadmin.modules.auth import AdminAuthService, AuthFactory, ChangePasswordOutcome
from blogadmin.modules.config import get_config
from blogadmin.modules.storage import StorageModule

# Get configuration
config = get_config()

log_config.dictConfig(get_logging_config(config.get("log_level")))
logger = logging.getLogger(__name__)

# Configuration provider (centralized config access)
config_provider: ConfigProvider = EnvConfigProvider()
cookie_config = config_provider.get_cookie_config()

# Module instances (initialized at startup)
auth_service: Optional[AdminAuthService] = None
storage: Optional[StorageModule] = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifecycle - initialize and cleanup resources.
    """
    global auth_service, storage

    logger.info("Starting Blog Admin API...")

    storage = StorageModule.from_config(config)
    redis_client = await storage.connect()

    auth_service = AuthFactory.build(config_provider, redis_client)
    logger.info("Authentication service initialized via factory")

    yield

    logger.info("Shutting down Blog Admin API...")
    await storage.disconnect()
    logger.info("Blog Admin API shutdown complete")


app = FastAPI(
    title="Blog Admin API",
    description="Admin REST API for the blog - admin user authentication",
    version="1.0.0",
    lifespan=lifespan,
)


# Dependency injection helpers


def get_auth_service() -> AdminAuthService:
    if not auth_service:
        raise HTTPException(503, "Service not initialized")
    return auth_service


def read_admin_cookie(request: Request) -> Tuple[str, str]:
    """Split the adminUser cookie ("<id>&<token>") into its parts."""
    raw = request.cookies.get(cookie_config.name)
    if not raw:
        return "", ""
    subject_id, _, token = raw.partition("&")
    return subject_id, token


async def authenticated_subject(
    request: Request,
    auth: AdminAuthService = Depends(get_auth_service),
) -> Optional[str]:
    """Subject id of a valid admin session, or None."""
    subject_id, token = read_admin_cookie(request)
    if await auth.authenticate(subject_id, token):
        return subject_id
    return None


# Admin user endpoints


@app.put("/users/login", response_model=SuccessResponse)
async def login(
    payload: LoginRequest,
    response: Response,
    auth: AdminAuthService = Depends(get_auth_service),
):
    """
    Log the admin in and set the session cookie.

    The cookie expires together with the session token.
    """
    if not payload.email or not payload.password:
        return SuccessResponse(success=False)

    result = await auth.login(payload.email, payload.password)
    if not result.ok:
        return SuccessResponse(success=False)

    response.set_cookie(
        key=cookie_config.name,
        value=f"{result.subject_id}&{result.token}",
        path=cookie_config.path,
        expires=datetime.fromtimestamp(result.expires_at, UTC),
        httponly=True,
        secure=cookie_config.secure,
        samesite=cookie_config.samesite,
        domain=cookie_config.domain,
    )
    return SuccessResponse(success=True)


@app.get("/users/authenticate", response_model=SuccessResponse)
async def authenticate(subject_id: Optional[str] = Depends(authenticated_subject)):
    """Report whether the cookie carries a valid admin session."""
    return SuccessResponse(success=subject_id is not None)


@app.put(
    "/users/logout",
    response_model=SessionActionResponse,
    response_model_exclude_none=True,
)
async def logout(
    subject_id: Optional[str] = Depends(authenticated_subject),
    auth: AdminAuthService = Depends(get_auth_service),
):
    """Invalidate the current admin session."""
    if subject_id is None:
        return SessionActionResponse(auth_success=False)

    success = await auth.logout(subject_id)
    return SessionActionResponse(auth_success=True, success=success)


@app.put("/users/remove-admin-user-cookie", response_model=SuccessResponse)
async def remove_admin_user_cookie(response: Response):
    """Clear the session cookie from the browser."""
    response.delete_cookie(
        key=cookie_config.name,
        path=cookie_config.path,
        domain=cookie_config.domain,
    )
    return SuccessResponse(success=True)


@app.put(
    "/users/change-password",
    response_model=SessionActionResponse,
    response_model_exclude_none=True,
)
async def change_password(
    payload: ChangePasswordRequest,
    subject_id: Optional[str] = Depends(authenticated_subject),
    auth: AdminAuthService = Depends(get_auth_service),
):
    """Change the admin password for the current session."""
    if not payload.current_password or not payload.new_password:
        return JSONResponse({"success": False})
    if subject_id is None:
        return SessionActionResponse(auth_success=False)

    outcome = await auth.change_password(
        subject_id, payload.current_password, payload.new_password
    )
    if outcome is ChangePasswordOutcome.SUCCESS:
        return SessionActionResponse(auth_success=True, success=True)
    if outcome is ChangePasswordOutcome.INVALID_CURRENT_CREDENTIAL:
        return SessionActionResponse(auth_success=True, invalid_password_credential_error=True)
    return SessionActionResponse(auth_success=True, submit_error=True)


@app.get("/healthz")
async def healthz():
    """Liveness probe."""
    return {"status": "ok"}


if __name__ == "__main__":
    uvicorn.run(
        "blogadmin.main:app",
        host=config.get("host"),
        port=config.get("port"),
        log_level=config.get("log_level").lower(),
        reload=config.get("debug"),
        log_config=get_logging_config(config.get("log_level")),
    )
