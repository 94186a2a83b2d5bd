from sqlalchemy.engine import URL
from sqlalchemy.ext.asyncio import create_async_engine

from player_api.load_secrets import (
    db_echo,
    db_max_overflow,
    db_name,
    db_pool_size,
    host,
    password,
    port,
    user,
)

# URL.create quotes special characters in the credentials
POSTGRES_DATABASE_URL = URL.create(
    "postgresql+asyncpg",
    username=user,
    password=password,
    host=host,
    port=int(port),
    database=db_name,
)

engine = create_async_engine(
    POSTGRES_DATABASE_URL,
    echo=db_echo,
    pool_size=db_pool_size,
    max_overflow=db_max_overflow,
    pool_pre_ping=True,
)
