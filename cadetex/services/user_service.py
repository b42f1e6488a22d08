"""User service - accounts, roles and credentials."""

import logging
from datetime import datetime, timezone
from typing import Any, Sequence
from uuid import UUID

from email_validator import EmailNotValidError, validate_email
from sqlalchemy.orm import Session

from cadetex.core.policies import Action, Resource
from cadetex.core.security import hash_password
from cadetex.core.structured_logging import build_log_context
from cadetex.db.enums import Role
from cadetex.db.models import User
from cadetex.repositories import OrganizationRepository, UserRepository
from cadetex.schemas.auth import UserSession
from cadetex.schemas.user import UserCreate, UserUpdate
from cadetex.services.access import authorize, creation_organization, listing_scope
from cadetex.services.result import (
    Err,
    Ok,
    Result,
    conflict,
    forbidden,
    invalid,
    not_found,
    transactional,
)

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6
# bcrypt rejects longer input
MAX_PASSWORD_BYTES = 72

USER_CONFLICTS = {
    "A user with this email already exists": ("uq_users_email", "users.email"),
}


def normalize_email(raw: str | None) -> str | Err:
    """Validate syntax and lowercase. Deliverability is not checked."""
    candidate = (raw or "").strip()
    if not candidate:
        return invalid("Email is required")
    try:
        validate_email(candidate, check_deliverability=False)
    except EmailNotValidError:
        return invalid("Invalid email address")
    return candidate.lower()


def check_password(password: str | None) -> Err | None:
    if not password or not password.strip() or len(password) < MIN_PASSWORD_LENGTH:
        return invalid(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
    if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        return invalid(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
    return None


class UserService:
    def __init__(self, users: UserRepository, organizations: OrganizationRepository):
        self.users = users
        self.organizations = organizations

    def new_user(
        self,
        db: Session,
        org_id: UUID,
        name: str,
        email: str,
        password: str,
        role: Role,
        is_active: bool = True,
    ) -> User | Err:
        """Validate and insert a user. Caller owns the transaction."""
        if not name or not name.strip():
            return invalid("Name is required")
        normalized = normalize_email(email)
        if isinstance(normalized, Err):
            return normalized
        weak = check_password(password)
        if weak:
            return weak
        if self.organizations.get(db, org_id) is None:
            return not_found("Organization not found")
        if self.users.email_taken(db, normalized):
            return conflict("A user with this email already exists")

        now = datetime.now(timezone.utc)
        user = User(
            organization_id=org_id,
            name=name.strip(),
            email=normalized,
            password_hash=hash_password(password),
            role=role.value,
            is_active=is_active,
            created_at=now,
            updated_at=now,
        )
        self.users.add(db, user)
        return user

    @transactional()
    def list(
        self,
        db: Session,
        actor: UserSession,
        organization_id: UUID | None = None,
        email: str | None = None,
        role: Role | None = None,
    ) -> Result[Sequence[User]]:
        scope = listing_scope(actor, Resource.USER, organization_id)
        if isinstance(scope, Err):
            return scope
        return Ok(self.users.search(db, organization_id=scope, email=email, role=role))

    @transactional()
    def get(self, db: Session, actor: UserSession, user_id: UUID) -> Result[User]:
        user = self.users.get(db, user_id)
        if user is None:
            return not_found("User not found")
        denied = authorize(
            actor,
            Action.READ,
            Resource.USER,
            user.organization_id,
            is_self_action=actor.user_id == user.id,
        )
        if denied:
            return denied
        return Ok(user)

    @transactional(USER_CONFLICTS)
    def create(self, db: Session, actor: UserSession, data: UserCreate) -> Result[User]:
        org_id = creation_organization(actor, Resource.USER, data.organization_id)
        if isinstance(org_id, Err):
            return org_id
        if data.role == Role.SUPERADMIN and actor.role != Role.SUPERADMIN:
            return forbidden("Only a SUPERADMIN can create SUPERADMIN users")

        user = self.new_user(
            db, org_id, data.name, data.email, data.password, data.role, data.is_active
        )
        if isinstance(user, Err):
            return user
        logger.info(
            "Created user %s with role %s",
            user.id,
            user.role,
            extra=build_log_context(user_id=str(actor.user_id), org_id=str(org_id)),
        )
        return Ok(user)

    @transactional(USER_CONFLICTS)
    def update(
        self, db: Session, actor: UserSession, user_id: UUID, data: UserUpdate
    ) -> Result[User]:
        user = self.users.get(db, user_id)
        if user is None:
            return not_found("User not found")
        denied = authorize(actor, Action.WRITE, Resource.USER, user.organization_id)
        if denied:
            return denied

        update_data = data.model_dump(exclude_unset=True)
        values: dict[str, Any] = {}

        if "name" in update_data:
            if not (update_data["name"] or "").strip():
                return invalid("Name cannot be blank")
            values["name"] = update_data["name"].strip()
        if "email" in update_data:
            normalized = normalize_email(update_data["email"])
            if isinstance(normalized, Err):
                return normalized
            if normalized != user.email and self.users.email_taken(
                db, normalized, exclude_id=user.id
            ):
                return conflict("A user with this email already exists")
            values["email"] = normalized
        if "password" in update_data:
            weak = check_password(update_data["password"])
            if weak:
                return weak
            values["password_hash"] = hash_password(update_data["password"])
        if update_data.get("role") is not None:
            role = update_data["role"]
            if role == Role.SUPERADMIN and actor.role != Role.SUPERADMIN:
                return forbidden("Only a SUPERADMIN can grant the SUPERADMIN role")
            values["role"] = role.value
        if update_data.get("is_active") is not None:
            values["is_active"] = update_data["is_active"]

        values["updated_at"] = datetime.now(timezone.utc)
        if self.users.update_fields(db, user.id, values) == 0:
            return not_found("User no longer exists")
        db.refresh(user)
        return Ok(user)

    @transactional()
    def delete(self, db: Session, actor: UserSession, user_id: UUID) -> Result[None]:
        user = self.users.get(db, user_id)
        if user is None:
            return not_found("User not found")
        denied = authorize(actor, Action.DELETE, Resource.USER, user.organization_id)
        if denied:
            return denied
        if user.role == Role.SUPERADMIN.value and actor.role != Role.SUPERADMIN:
            return forbidden("Only a SUPERADMIN can delete SUPERADMIN users")
        self.users.delete(db, user.id)
        return Ok(None)
