"""Pydantic schemas for API request/response models."""

from cadetex.schemas.address import AddressInput, AddressRead
from cadetex.schemas.auth import (
    AuthResponse,
    LoginRequest,
    RegisterRequest,
    TokenPayload,
    UserSession,
)
from cadetex.schemas.contact import (
    ClientCreate,
    ClientRead,
    ClientUpdate,
    ProviderCreate,
    ProviderRead,
    ProviderUpdate,
)
from cadetex.schemas.courier import CourierCreate, CourierRead, CourierUpdate
from cadetex.schemas.organization import (
    OrganizationCreate,
    OrganizationRead,
    OrganizationUpdate,
)
from cadetex.schemas.task import (
    PhotoUploadResponse,
    TaskCreate,
    TaskRead,
    TaskStatusChange,
    TaskUpdate,
)
from cadetex.schemas.task_history import (
    TaskHistoryCreate,
    TaskHistoryRead,
    TaskHistoryUpdate,
)
from cadetex.schemas.task_photo import TaskPhotoCreate, TaskPhotoRead, TaskPhotoUpdate
from cadetex.schemas.user import UserCreate, UserRead, UserUpdate
