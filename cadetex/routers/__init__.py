"""API routers."""

from cadetex.routers.auth import router as auth_router
from cadetex.routers.clients import router as clients_router
from cadetex.routers.couriers import router as couriers_router
from cadetex.routers.organizations import router as organizations_router
from cadetex.routers.providers import router as providers_router
from cadetex.routers.task_history import router as task_history_router
from cadetex.routers.task_photos import router as task_photos_router
from cadetex.routers.tasks import router as tasks_router
from cadetex.routers.users import router as users_router
