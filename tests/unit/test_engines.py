"""
Unit tests for engine construction from the environment settings.
"""

import pytest

from player_api import load_secrets


class TestPostgresEngine:
    @pytest.mark.unit
    def test_engine_uses_configured_settings(self):
        from player_api.create_postgres_engine import POSTGRES_DATABASE_URL, engine

        assert POSTGRES_DATABASE_URL.drivername == "postgresql+asyncpg"
        assert POSTGRES_DATABASE_URL.host == load_secrets.host
        assert POSTGRES_DATABASE_URL.port == int(load_secrets.port)
        assert POSTGRES_DATABASE_URL.database == load_secrets.db_name
        assert engine.pool.size() == load_secrets.db_pool_size
        assert engine.echo == load_secrets.db_echo


class TestSqliteEngine:
    @pytest.mark.unit
    def test_engine_points_at_configured_file(self):
        from player_api.create_sqlite_engine import engine

        assert engine.url.drivername == "sqlite+aiosqlite"
        assert engine.url.database == load_secrets.sqlite_path
