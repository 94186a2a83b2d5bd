from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from player_api.load_secrets import db_backend

if db_backend == "postgres":
    from player_api.create_postgres_engine import engine
else:
    from player_api.create_sqlite_engine import engine

# Centralized session factory to avoid creating it in router modules.
Session = async_sessionmaker(
    autocommit=False,
    class_=AsyncSession,
    autoflush=True,
    expire_on_commit=False,
    bind=engine,
)


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """One session per request; the service layer commits."""
    async with Session() as session:
        yield session
