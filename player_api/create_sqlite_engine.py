from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from player_api.load_secrets import db_echo, sqlite_path


def enable_case_sensitive_like(engine: AsyncEngine) -> AsyncEngine:
    """Make LIKE case-sensitive on every new SQLite connection.

    SQLite compares ASCII letters case-insensitively in LIKE by default,
    while name/title filters must match case-sensitively.
    """

    @event.listens_for(engine.sync_engine, "connect")
    def _set_case_sensitive_like(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA case_sensitive_like = ON")
        cursor.close()

    return engine


sqlite_url = f"sqlite+aiosqlite:///{sqlite_path}"

engine = enable_case_sensitive_like(create_async_engine(url=sqlite_url, echo=db_echo))
