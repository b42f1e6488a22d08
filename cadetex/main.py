"""FastAPI application entry point."""
import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from sqlalchemy import text

from cadetex.core.config import settings
from cadetex.core.rate_limit import limiter
from cadetex.core.state import init_app_state, reset_app_state
from cadetex.core.structured_logging import build_log_context, configure_logging
from cadetex.db.session import engine
from cadetex.services.storage_service import LOCAL_URL_PREFIX

configure_logging()
logger = logging.getLogger(__name__)

# ============================================================================
# Sentry Integration (optional, for production error tracking)
# ============================================================================

if settings.SENTRY_DSN and settings.ENV != "dev":
    import sentry_sdk
    from sentry_sdk.integrations.fastapi import FastApiIntegration
    from sentry_sdk.integrations.sqlalchemy import SqlalchemyIntegration

    sentry_sdk.init(
        dsn=settings.SENTRY_DSN,
        environment=settings.ENV,
        integrations=[
            FastApiIntegration(transaction_style="endpoint"),
            SqlalchemyIntegration(),
        ],
        traces_sample_rate=0.1,
        send_default_pii=False,
    )
    logger.info("Sentry initialized for error tracking")


@asynccontextmanager
async def lifespan(_app: FastAPI):
    """Wire services once per process."""
    init_app_state()
    logger.info("Cadetex API %s started (env=%s)", settings.VERSION, settings.ENV)
    yield
    reset_app_state()


# ============================================================================
# FastAPI App
# ============================================================================

app = FastAPI(
    title="Cadetex API",
    description="Multi-tenant courier task management API",
    version=settings.VERSION,
    lifespan=lifespan,
    docs_url="/docs" if settings.ENV == "dev" else None,
    redoc_url="/redoc" if settings.ENV == "dev" else None,
)

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    """Log unexpected failures with request context; never leak details."""
    logger.exception(
        "Unhandled error",
        extra=build_log_context(
            request_id=request.headers.get("x-request-id"),
            route=request.url.path,
            method=request.method,
        ),
    )
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


# CORS middleware - must be added before routers
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)

# ============================================================================
# Routers
# ============================================================================

from cadetex.routers import (  # noqa: E402
    auth_router,
    clients_router,
    couriers_router,
    organizations_router,
    providers_router,
    task_history_router,
    task_photos_router,
    tasks_router,
    users_router,
)

app.include_router(auth_router, prefix="/auth", tags=["auth"])
app.include_router(organizations_router, prefix="/organizations", tags=["organizations"])
app.include_router(users_router, prefix="/users", tags=["users"])
app.include_router(couriers_router, prefix="/couriers", tags=["couriers"])
app.include_router(clients_router, prefix="/clients", tags=["clients"])
app.include_router(providers_router, prefix="/providers", tags=["providers"])
app.include_router(tasks_router, prefix="/tasks", tags=["tasks"])
app.include_router(task_photos_router, prefix="/task-photos", tags=["task-photos"])
app.include_router(task_history_router, prefix="/task-history", tags=["task-history"])

# Locally stored photos (dev only; S3 serves its own URLs)
if settings.STORAGE_BACKEND == "local":
    os.makedirs(settings.LOCAL_STORAGE_PATH, exist_ok=True)
    app.mount(
        LOCAL_URL_PREFIX,
        StaticFiles(directory=settings.LOCAL_STORAGE_PATH, check_dir=False),
        name="media",
    )


# ============================================================================
# Health Check
# ============================================================================

@app.get("/health")
def health():
    """
    Health check endpoint.

    Verifies database connectivity and returns environment info.
    """
    with engine.connect() as conn:
        conn.execute(text("SELECT 1"))
    return {"status": "ok", "env": settings.ENV, "version": settings.VERSION}
