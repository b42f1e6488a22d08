"""FastAPI dependencies for authentication, authorization, and database access."""

import logging
from typing import Generator

import jwt
from fastapi import Depends, HTTPException, Request
from pydantic import ValidationError
from sqlalchemy.orm import Session

from cadetex.core.security import decode_access_token
from cadetex.core.state import AppState, get_app_state
from cadetex.db.session import SessionLocal

logger = logging.getLogger(__name__)

AUTH_HEADER = "Authorization"
BEARER_PREFIX = "bearer "


def get_db() -> Generator[Session, None, None]:
    """
    Database session dependency.

    Yields a database session and ensures it's closed after the request.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_state() -> AppState:
    return get_app_state()


def _bearer_token(request: Request) -> str:
    header = request.headers.get(AUTH_HEADER, "")
    if not header.lower().startswith(BEARER_PREFIX):
        raise HTTPException(status_code=401, detail="Not authenticated")
    token = header[len(BEARER_PREFIX):].strip()
    if not token:
        raise HTTPException(status_code=401, detail="Not authenticated")
    return token


def get_current_session(
    request: Request,
    db: Session = Depends(get_db),
):
    """
    Get the identity context: user_id, org_id, role, email.

    This is the PRIMARY auth dependency for every non-/auth endpoint.

    Validates:
    - Bearer token exists, is signed with a known secret, not expired
    - Role claim is a known role
    - User still exists and is active

    Raises:
        HTTPException 401: Authentication failed
    """
    # Import here to avoid circular imports
    from cadetex.db.enums import Role
    from cadetex.db.models import User
    from cadetex.schemas.auth import TokenPayload, UserSession

    token = _bearer_token(request)
    try:
        claims = TokenPayload.model_validate(decode_access_token(token))
    except (jwt.InvalidTokenError, ValidationError):
        raise HTTPException(status_code=401, detail="Invalid token")

    if not Role.has_value(claims.role):
        raise HTTPException(status_code=401, detail="Invalid token")

    user = db.get(User, claims.sub)
    if not user:
        raise HTTPException(status_code=401, detail="User not found")
    if not user.is_active:
        raise HTTPException(status_code=401, detail="Account disabled")

    return UserSession(
        user_id=user.id,
        org_id=user.organization_id,
        role=Role(user.role),
        email=user.email,
    )


def require_roles(allowed_roles: list):
    """
    Dependency factory for coarse role gates on a whole router or endpoint.

    Tenant checks still happen in the services.

    Usage:
        @router.post("", dependencies=[Depends(require_roles([Role.SUPERADMIN, Role.ORGADMIN]))])
    """
    def dependency(session=Depends(get_current_session)):
        if session.role not in allowed_roles:
            raise HTTPException(
                status_code=403,
                detail=f"Role '{session.role.value}' not authorized for this action"
            )
        return session
    return dependency
