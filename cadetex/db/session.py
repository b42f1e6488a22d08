from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import sessionmaker

from cadetex.core.config import settings


def enable_sqlite_foreign_keys(engine: Engine) -> None:
    """SQLite only enforces ON DELETE rules with this pragma set per connection."""

    @event.listens_for(engine, "connect")
    def _set_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def build_engine(database_url: str, **kwargs) -> Engine:
    backend = make_url(database_url).get_backend_name()
    connect_args = kwargs.pop("connect_args", {})
    if backend.startswith("postgresql"):
        connect_args.setdefault("options", "-c timezone=utc")
    elif backend == "sqlite":
        connect_args.setdefault("check_same_thread", False)

    new_engine = create_engine(
        database_url, pool_pre_ping=True, connect_args=connect_args, **kwargs
    )
    if backend == "sqlite":
        enable_sqlite_foreign_keys(new_engine)
    return new_engine


engine = build_engine(settings.DATABASE_URL)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
