"""
Test configuration and fixtures.

Provides:
- A fresh in-memory SQLite database per test (schema from the models)
- Application state wired the same way as at startup
- Users for every role, and bearer tokens for them
- HTTPX AsyncClient bound to the app with get_db overridden
"""
import os
import tempfile
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import AsyncGenerator, Callable, Generator

# Settings are read at import time; configure before importing the app.
os.environ["ENV"] = "test"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["RATE_LIMIT_LOGIN"] = "0"
os.environ["STORAGE_BACKEND"] = "local"
os.environ["LOCAL_STORAGE_PATH"] = tempfile.mkdtemp(prefix="cadetex-photos-")

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from cadetex.core.deps import get_db
from cadetex.core.security import create_access_token, hash_password
from cadetex.core.state import AppState, init_app_state, reset_app_state
from cadetex.db.base import Base
from cadetex.db.enums import Role
from cadetex.db.models import Organization, User
from cadetex.db.session import build_engine
from cadetex.main import app
from cadetex.schemas.auth import UserSession

TEST_PASSWORD = "correct-horse-42"
# bcrypt is deliberately slow; hash once per run.
TEST_PASSWORD_HASH = hash_password(TEST_PASSWORD)


# =============================================================================
# Database Fixtures
# =============================================================================

@pytest.fixture(scope="function")
def engine() -> Generator[Engine, None, None]:
    """One private in-memory database per test."""
    test_engine = build_engine("sqlite://", poolclass=StaticPool)
    Base.metadata.create_all(test_engine)
    yield test_engine
    test_engine.dispose()


@pytest.fixture(scope="function")
def db(engine: Engine) -> Generator[Session, None, None]:
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    yield session
    session.close()


@pytest.fixture(scope="function")
def state() -> Generator[AppState, None, None]:
    """Services wired as at startup (ASGITransport does not run lifespan)."""
    app_state = init_app_state()
    yield app_state
    reset_app_state()


# =============================================================================
# Tenant and User Fixtures
# =============================================================================

def make_org(db: Session, name: str | None = None) -> Organization:
    now = datetime.now(timezone.utc)
    org = Organization(
        id=uuid.uuid4(),
        name=name or f"Org {uuid.uuid4().hex[:8]}",
        created_at=now,
        updated_at=now,
    )
    db.add(org)
    db.commit()
    return org


def make_user(db: Session, org: Organization, role: Role, is_active: bool = True) -> User:
    now = datetime.now(timezone.utc)
    user = User(
        id=uuid.uuid4(),
        organization_id=org.id,
        name=f"{role.value.title()} User",
        email=f"{role.value.lower()}-{uuid.uuid4().hex[:8]}@test.com",
        password_hash=TEST_PASSWORD_HASH,
        role=role.value,
        is_active=is_active,
        created_at=now,
        updated_at=now,
    )
    db.add(user)
    db.commit()
    return user


@pytest.fixture(scope="function")
def platform_org(db: Session) -> Organization:
    return make_org(db, "Platform")


@pytest.fixture(scope="function")
def org_a(db: Session) -> Organization:
    return make_org(db, "Mensajeria Norte")


@pytest.fixture(scope="function")
def org_b(db: Session) -> Organization:
    return make_org(db, "Mensajeria Sur")


@pytest.fixture(scope="function")
def superadmin(db: Session, platform_org: Organization) -> User:
    return make_user(db, platform_org, Role.SUPERADMIN)


@pytest.fixture(scope="function")
def admin_a(db: Session, org_a: Organization) -> User:
    return make_user(db, org_a, Role.ORGADMIN)


@pytest.fixture(scope="function")
def admin_b(db: Session, org_b: Organization) -> User:
    return make_user(db, org_b, Role.ORGADMIN)


@pytest.fixture(scope="function")
def courier_user_a(db: Session, org_a: Organization) -> User:
    return make_user(db, org_a, Role.COURIER)


def session_for(user: User) -> UserSession:
    """Identity context as get_current_session would build it."""
    return UserSession(
        user_id=user.id,
        org_id=user.organization_id,
        role=Role(user.role),
        email=user.email,
    )


@pytest.fixture(scope="function")
def as_actor() -> Callable[[User], UserSession]:
    """Identity factory for calling services directly: as_actor(user)."""
    return session_for


# =============================================================================
# Auth Fixtures
# =============================================================================

@dataclass
class TestAuth:
    """Test authentication context."""
    user: User
    token: str

    @property
    def headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.token}"}


def auth_for(user: User) -> TestAuth:
    token = create_access_token(
        user_id=user.id,
        org_id=user.organization_id,
        role=user.role,
        email=user.email,
    )
    return TestAuth(user=user, token=token)


@pytest.fixture(scope="function")
def headers_for() -> Callable[[User], dict[str, str]]:
    """Bearer header factory: headers_for(user)."""
    return lambda user: auth_for(user).headers


# =============================================================================
# Client Fixtures
# =============================================================================

@pytest.fixture(scope="function")
async def client(db: Session, state: AppState) -> AsyncGenerator[AsyncClient, None]:
    """AsyncClient against the app, sharing the test session."""
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test"
    ) as c:
        yield c

    app.dependency_overrides.clear()
