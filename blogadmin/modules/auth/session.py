"""
Session token verification.

Pure functions over an already fetched principal. Callers only ever see a
boolean; the detailed SessionCheck exists for logging.
"""

import secrets
from enum import Enum
from typing import Optional

from .models import Principal


class SessionCheck(str, Enum):
    """Internal outcome of a session check."""

    VALID = "valid"
    NO_PRINCIPAL = "no_principal"
    NO_SESSION = "no_session"
    TOKEN_MISMATCH = "token_mismatch"
    EXPIRED = "expired"


def check_session(principal: Optional[Principal], supplied_token: str, now: int) -> SessionCheck:
    """
    Classify a presented token against the principal's active session.

    Args:
        principal: Principal looked up by subject id, or None
        supplied_token: Token presented by the client
        now: Current unix time in seconds

    Returns:
        SessionCheck describing why the token is (or is not) valid
    """
    if principal is None:
        return SessionCheck.NO_PRINCIPAL

    session = principal.session
    if session is None or not supplied_token:
        return SessionCheck.NO_SESSION

    if not secrets.compare_digest(supplied_token.encode("utf-8"), session.token.encode("utf-8")):
        return SessionCheck.TOKEN_MISMATCH

    if now > session.expires_at:
        return SessionCheck.EXPIRED

    return SessionCheck.VALID


def authenticate_session(principal: Optional[Principal], supplied_token: str, now: int) -> bool:
    """True iff the token matches the principal's session and has not expired."""
    return check_session(principal, supplied_token, now) is SessionCheck.VALID
