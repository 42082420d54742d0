"""
Authentication dependencies for FastAPI endpoints.
Verifies Supabase-issued JWTs and checks role assignments through the
``has_role`` database function.
"""
import logging
from typing import Optional

from authlib.jose import JoseError, jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from supabase import Client

from wellness.config.database import get_supabase
from wellness.config.settings import get_settings

logger = logging.getLogger(__name__)

# HTTP Bearer token scheme
security = HTTPBearer()

ADMIN_ROLE = "admin"


# ============================================================================
# JWT Decoding & Validation
# ============================================================================


def decode_jwt_local(token: str) -> Optional[dict]:
    """
    Decode and validate Supabase JWT token locally (fast path).

    Returns claims if valid, None if invalid or expired.
    Avoids hitting Supabase API for every request.
    """
    settings = get_settings()

    if not token or not settings.supabase_jwt_secret:
        return None

    try:
        claims = jwt.decode(
            token,
            settings.supabase_jwt_secret,
            claims_options={"aud": {"essential": False}},
        )
    except JoseError as e:
        logger.debug(f"JWT decode failed: {e}")
        return None
    except Exception as e:
        logger.warning(f"Unexpected error decoding JWT: {e}")
        return None

    try:
        claims.validate(leeway=120)  # Allow 2 minutes clock skew
    except JoseError as e:
        logger.debug(f"JWT validation failed: {e}")
        return None
    return dict(claims)


# ============================================================================
# Dependencies
# ============================================================================


def get_current_user_id(
    credentials: HTTPAuthorizationCredentials = Depends(security),
) -> str:
    """Resolve the caller's user id from the bearer token."""
    claims = decode_jwt_local(credentials.credentials)
    if not claims or not claims.get("sub"):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return claims["sub"]


def has_role(supabase: Client, user_id: str, role: str) -> bool:
    """Ask the database whether ``user_id`` holds ``role``."""
    result = supabase.rpc("has_role", {"_user_id": user_id, "_role": role}).execute()
    return bool(result.data)


def require_admin(
    user_id: str = Depends(get_current_user_id),
    supabase: Client = Depends(get_supabase),
) -> str:
    """
    Allow only callers holding the admin role.

    Raises:
        HTTPException 403: If the caller is not an admin
    """
    if not has_role(supabase, user_id, ADMIN_ROLE):
        logger.warning(f"Admin access denied for user {user_id}")
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin role required",
        )
    return user_id
