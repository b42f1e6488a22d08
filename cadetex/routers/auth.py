"""Auth router - login, self-service registration, token validation."""

from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from cadetex.core.deps import get_current_session, get_db, get_state
from cadetex.core.rate_limit import LOGIN_LIMIT, limiter
from cadetex.core.state import AppState
from cadetex.schemas.auth import AuthResponse, LoginRequest, RegisterRequest, UserSession
from cadetex.schemas.user import UserRead
from cadetex.services.result import Err, ErrorKind

router = APIRouter()


@router.post("/login", response_model=AuthResponse)
@limiter.limit(LOGIN_LIMIT)
def login(
    request: Request,
    body: LoginRequest,
    db: Session = Depends(get_db),
    state: AppState = Depends(get_state),
):
    """Exchange email and password for a bearer token."""
    result = state.auth.login(db, body.email, body.password)
    if isinstance(result, Err):
        if result.kind == ErrorKind.UNAVAILABLE:
            raise HTTPException(status_code=503, detail=result.message)
        raise HTTPException(status_code=401, detail=result.message)
    return AuthResponse(
        token=result.value.token, user=UserRead.model_validate(result.value.user)
    )


@router.post("/register", response_model=AuthResponse, status_code=201)
def register(
    body: RegisterRequest,
    db: Session = Depends(get_db),
    state: AppState = Depends(get_state),
):
    """
    Create an account and return a token for it.

    Every rejection (duplicate email, bad input, unknown organization) is 400.
    """
    result = state.auth.register(db, body)
    if isinstance(result, Err):
        if result.kind == ErrorKind.UNAVAILABLE:
            raise HTTPException(status_code=503, detail=result.message)
        raise HTTPException(status_code=400, detail=result.message)
    return AuthResponse(
        token=result.value.token, user=UserRead.model_validate(result.value.user)
    )


@router.get("/validate", response_model=UserSession)
def validate(session: UserSession = Depends(get_current_session)):
    """Return the identity carried by the bearer token."""
    return session
