from collections.abc import Generator

from sqlalchemy import Engine, event
from sqlmodel import Session, create_engine

from rental_api.core.settings import get_settings

_settings = get_settings()


def enable_sqlite_foreign_keys(target: Engine) -> None:
    """Turn on FK enforcement (and ON DELETE actions) for SQLite connections."""

    @event.listens_for(target, "connect")
    def _set_pragma(dbapi_connection, _connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


connect_args: dict[str, object] = {}
if _settings.database_url.startswith("sqlite"):
    # Required for SQLite when used with FastAPI across threads.
    connect_args = {"check_same_thread": False}

engine = create_engine(
    _settings.database_url,
    echo=False,
    pool_pre_ping=not _settings.database_url.startswith("sqlite"),
    connect_args=connect_args,
)

if engine.dialect.name == "sqlite":
    enable_sqlite_foreign_keys(engine)


def get_session() -> Generator[Session, None, None]:
    with Session(engine) as session:
        yield session
