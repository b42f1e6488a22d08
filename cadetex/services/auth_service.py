"""Auth service - credential checks and self-service registration."""

import logging
from dataclasses import dataclass

from sqlalchemy.orm import Session

from cadetex.core.security import create_access_token, verify_password
from cadetex.db.enums import Role
from cadetex.db.models import User
from cadetex.repositories import UserRepository
from cadetex.schemas.auth import RegisterRequest
from cadetex.services.result import (
    Err,
    ErrorKind,
    Ok,
    Result,
    forbidden,
    parse_id,
    transactional,
)
from cadetex.services.user_service import USER_CONFLICTS, UserService

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid email or password"


@dataclass(frozen=True)
class AuthenticatedUser:
    token: str
    user: User


def issue_token(user: User) -> str:
    return create_access_token(
        user_id=user.id,
        org_id=user.organization_id,
        role=user.role,
        email=user.email,
    )


class AuthService:
    def __init__(self, users: UserRepository, user_service: UserService):
        self.users = users
        self.user_service = user_service

    @transactional()
    def login(self, db: Session, email: str, password: str) -> Result[AuthenticatedUser]:
        """Unknown email, wrong password and disabled account look the same."""
        user = self.users.get_by_email(db, email or "")
        if user is None or not verify_password(password or "", user.password_hash):
            logger.info("Failed login attempt")
            return Err(ErrorKind.NOT_FOUND, INVALID_CREDENTIALS)
        if not user.is_active:
            logger.info("Login attempt for disabled account %s", user.id)
            return Err(ErrorKind.FORBIDDEN, INVALID_CREDENTIALS)
        return Ok(AuthenticatedUser(token=issue_token(user), user=user))

    @transactional(USER_CONFLICTS)
    def register(self, db: Session, data: RegisterRequest) -> Result[AuthenticatedUser]:
        if data.role == Role.SUPERADMIN:
            return forbidden("SUPERADMIN accounts cannot be self-registered")
        org_id = parse_id(data.organization_id, "organization_id")
        if isinstance(org_id, Err):
            return org_id
        if org_id is None:
            return Err(ErrorKind.VALIDATION_FAILED, "organization_id is required")

        user = self.user_service.new_user(
            db, org_id, data.name, data.email, data.password, data.role
        )
        if isinstance(user, Err):
            return user
        logger.info("Registered user %s in organization %s", user.id, org_id)
        return Ok(AuthenticatedUser(token=issue_token(user), user=user))
