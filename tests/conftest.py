"""
Pytest configuration and shared fixtures for the player registry tests.

Every test gets a fresh in-memory SQLite database; the FastAPI session
dependency is overridden to use it.
"""

from datetime import datetime
from typing import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from player_api.converter import DataConverter
from player_api.create_sqlite_engine import enable_case_sensitive_like
from player_api.db import get_session
from player_api.main import app
from player_api.models.dc_models import PlayerModel, Profession, Race
from player_api.models.schemas import Base
from player_api.services import player_db


def millis(year: int, month: int = 1, day: int = 1) -> int:
    """Epoch milliseconds of a UTC calendar date."""
    return DataConverter.datetime_to_millis(datetime(year, month, day))


@pytest.fixture(scope="function")
async def session_factory() -> AsyncGenerator[async_sessionmaker, None]:
    """
    Create a fresh in-memory database and return a session factory bound to it.

    StaticPool keeps a single connection so every session sees the same data.
    """
    test_engine = enable_case_sensitive_like(
        create_async_engine(
            "sqlite+aiosqlite:///:memory:",
            echo=False,
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
        )
    )

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await test_engine.dispose()


@pytest.fixture(scope="function")
async def test_db(session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


@pytest.fixture(scope="function")
async def client(session_factory) -> AsyncGenerator[AsyncClient, None]:
    """
    Create a test client whose requests each get their own session on the test database.
    """

    async def override_get_session():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_session] = override_get_session

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def player_payload() -> dict:
    """A valid create payload, as the client sends it."""
    return {
        "name": "Ragnar",
        "title": "Keeper of the Gate",
        "race": "HUMAN",
        "profession": "WARRIOR",
        "birthday": millis(2010, 1, 1),
        "experience": 100,
    }


@pytest.fixture
async def roster(session_factory) -> list:
    """
    Store a small mixed roster and return it in insertion order.

    Levels: Aelin 4, Thranduil 5, Legolas 10, Galadriel 11, Boromir 7, Gimli 0.
    """
    payloads = [
        PlayerModel(name="Aelin", title="Scout of the woods", race=Race.ELF,
                    profession=Profession.ROGUE, birthday=millis(2001, 5, 2), experience=1499),
        PlayerModel(name="Thranduil", title="King of the woods", race=Race.ELF,
                    profession=Profession.PALADIN, birthday=millis(2004, 3, 1), experience=1500),
        PlayerModel(name="Legolas", title="Prince of the Woodland", race=Race.ELF,
                    profession=Profession.ROGUE, birthday=millis(2008, 7, 9), experience=5500, banned=True),
        PlayerModel(name="Galadriel", title="Lady of Light", race=Race.ELF,
                    profession=Profession.SORCERER, birthday=millis(2010, 1, 1), experience=6600),
        PlayerModel(name="Boromir", title="Captain of the White Tower", race=Race.HUMAN,
                    profession=Profession.WARRIOR, birthday=millis(2012, 11, 30), experience=2800),
        PlayerModel(name="Gimli", title="Lord of the Glittering Caves", race=Race.DWARF,
                    profession=Profession.WARRIOR, birthday=millis(2015, 2, 14), experience=0, banned=True),
    ]
    created = []
    async with session_factory() as session:
        for payload in payloads:
            created.append(await player_db.create_player(payload, session))
    return created
