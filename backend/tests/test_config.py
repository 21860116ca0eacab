"""
Developer Registry — Settings and Database Helper Tests
=========================================================

What we test:
    ✅ log_level normalized and validated
    ✅ CORS origin parsing
    ✅ Engine options differ for SQLite and server databases
    ✅ SQLite foreign keys enforced on test connections
    ✅ Connectivity probe
"""

import pytest
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy import text
from sqlalchemy.exc import IntegrityError

from devregistry.config import Settings
from devregistry.database import MAX_ROW_ID, is_database_connected, is_storable_id


class TestSettings:

    def test_log_level_uppercased(self):
        assert Settings(log_level="debug").log_level == "DEBUG"

    def test_invalid_log_level(self):
        with pytest.raises(PydanticValidationError):
            Settings(log_level="chatty")

    def test_cors_origins_list(self):
        settings = Settings(cors_origins="http://a.test, ,http://b.test ")
        assert settings.cors_origins_list == ["http://a.test", "http://b.test"]

    def test_sqlite_engine_options(self):
        settings = Settings(database_url="sqlite+aiosqlite:///./x.sqlite", log_level="INFO")

        options = settings.engine_options()

        assert settings.is_sqlite
        assert options == {"echo": False, "connect_args": {"check_same_thread": False}}

    def test_server_engine_options(self):
        settings = Settings(
            database_url="postgresql+asyncpg://u:p@localhost/devs",
            db_pool_size=3,
            log_level="DEBUG",
        )

        options = settings.engine_options()

        assert not settings.is_sqlite
        assert options["echo"] is True
        assert options["pool_size"] == 3
        assert "connect_args" not in options


class TestDatabaseHelpers:

    def test_storable_id_bounds(self):
        assert is_storable_id(MAX_ROW_ID)
        assert is_storable_id(-MAX_ROW_ID - 1)
        assert not is_storable_id(MAX_ROW_ID + 1)
        assert not is_storable_id(-MAX_ROW_ID - 2)

    @pytest.mark.asyncio
    async def test_connected(self, db_engine):
        assert await is_database_connected(db_engine) is True

    @pytest.mark.asyncio
    async def test_foreign_keys_enforced(self, db_engine):
        with pytest.raises(IntegrityError):
            async with db_engine.begin() as conn:
                await conn.execute(
                    text(
                        "INSERT INTO desenvolvedor (nome, sexo, data_nascimento, idade, hobby, nivel_id) "
                        "VALUES ('Ana', 'F', '1990-01-01', 30, 'Xadrez', 42)"
                    )
                )
