"""
Developer Registry — Developer Service Unit Tests
===================================================

What:  Tests for DeveloperService against an in-memory SQLite session.

What we test:
    ✅ idade = current_year - birth_year, computed on create and update
    ✅ Blank fields, bad dates, future dates and unknown levels rejected
    ✅ Create-then-fetch round trip
    ✅ Enrichment with nivel_nome / "N/A"
    ✅ Sorting by nivel_id orders by level name
    ✅ Delete always permitted, NotFoundError for missing ids
"""

from datetime import date, timedelta

import pytest
from sqlalchemy.exc import OperationalError

from devregistry.exceptions import FetchError, NotFoundError, ValidationError
from devregistry.services.developer_service import DeveloperService
from devregistry.services.level_service import LevelService


class TestDeveloperServiceCreate:

    def setup_method(self):
        self.service = DeveloperService()
        self.levels = LevelService()

    @pytest.mark.asyncio
    async def test_create_computes_age(self, db_session, sample_developer):
        """Dec 31 birthday still counts for the whole current year."""
        dev = await self.service.create_developer(db_session, **sample_developer)

        assert dev.id is not None
        assert dev.idade == date.today().year - 1990
        assert dev.data_nascimento == date(1990, 12, 31)
        assert dev.nivel_id is None

    @pytest.mark.asyncio
    async def test_create_with_level(self, db_session, sample_developer):
        level = await self.levels.create_level(db_session, "Senior")

        dev = await self.service.create_developer(db_session, **sample_developer, level_id=level.id)

        assert dev.nivel_id == level.id

    @pytest.mark.asyncio
    @pytest.mark.parametrize("field", ["name", "sex", "hobby"])
    async def test_blank_text_field_rejected(self, db_session, sample_developer, field):
        sample_developer[field] = "  "
        with pytest.raises(ValidationError, match="must not be empty"):
            await self.service.create_developer(db_session, **sample_developer)

    @pytest.mark.asyncio
    async def test_invalid_birth_date_rejected(self, db_session, sample_developer):
        sample_developer["birth_date"] = "31/12/1990"
        with pytest.raises(ValidationError) as exc_info:
            await self.service.create_developer(db_session, **sample_developer)
        assert exc_info.value.field == "data_nascimento"

    @pytest.mark.asyncio
    async def test_future_birth_date_rejected(self, db_session, sample_developer):
        sample_developer["birth_date"] = (date.today() + timedelta(days=1)).isoformat()
        with pytest.raises(ValidationError, match="future"):
            await self.service.create_developer(db_session, **sample_developer)

    @pytest.mark.asyncio
    async def test_unknown_level_rejected(self, db_session, sample_developer):
        with pytest.raises(ValidationError) as exc_info:
            await self.service.create_developer(db_session, **sample_developer, level_id=99)
        assert exc_info.value.field == "nivel_id"

    @pytest.mark.asyncio
    async def test_out_of_range_level_rejected(self, db_session, sample_developer):
        with pytest.raises(ValidationError) as exc_info:
            await self.service.create_developer(db_session, **sample_developer, level_id=2**64)
        assert exc_info.value.field == "nivel_id"

    @pytest.mark.asyncio
    async def test_round_trip(self, db_session, sample_developer):
        level = await self.levels.create_level(db_session, "Pleno")
        created = await self.service.create_developer(db_session, **sample_developer, level_id=level.id)

        fetched = await self.service.get_developer(db_session, created.id)

        assert fetched.model_dump(exclude={"nivel_nome"}) == created.model_dump()
        assert fetched.nivel_nome == "Pleno"


class TestDeveloperServiceUpdateDelete:

    def setup_method(self):
        self.service = DeveloperService()
        self.levels = LevelService()

    @pytest.mark.asyncio
    async def test_update_replaces_fields_and_recomputes_age(self, db_session, sample_developer):
        senior = await self.levels.create_level(db_session, "Senior")
        dev = await self.service.create_developer(db_session, **sample_developer)

        updated = await self.service.update_developer(
            db_session,
            dev.id,
            name="Ana Lima",
            sex="F",
            birth_date="1980-01-01",
            hobby="Corrida",
            level_id=senior.id,
        )

        assert updated.id == dev.id
        assert updated.nome == "Ana Lima"
        assert updated.hobby == "Corrida"
        assert updated.idade == date.today().year - 1980
        assert updated.nivel_id == senior.id

    @pytest.mark.asyncio
    async def test_update_can_clear_level(self, db_session, sample_developer):
        senior = await self.levels.create_level(db_session, "Senior")
        dev = await self.service.create_developer(db_session, **sample_developer, level_id=senior.id)

        updated = await self.service.update_developer(db_session, dev.id, **sample_developer, level_id=None)

        assert updated.nivel_id is None
        assert (await self.levels.get_level(db_session, senior.id)).developer_count == 0

    @pytest.mark.asyncio
    async def test_update_missing_developer(self, db_session, sample_developer):
        with pytest.raises(NotFoundError):
            await self.service.update_developer(db_session, 123, **sample_developer)

    @pytest.mark.asyncio
    async def test_update_validates_like_create(self, db_session, sample_developer):
        dev = await self.service.create_developer(db_session, **sample_developer)
        sample_developer["birth_date"] = "yesterday"
        with pytest.raises(ValidationError):
            await self.service.update_developer(db_session, dev.id, **sample_developer)

    @pytest.mark.asyncio
    async def test_delete_developer(self, db_session, sample_developer):
        dev = await self.service.create_developer(db_session, **sample_developer)

        await self.service.delete_developer(db_session, dev.id)

        with pytest.raises(NotFoundError):
            await self.service.get_developer(db_session, dev.id)

    @pytest.mark.asyncio
    async def test_delete_missing_developer(self, db_session):
        with pytest.raises(NotFoundError):
            await self.service.delete_developer(db_session, 5)

    @pytest.mark.asyncio
    async def test_out_of_range_id_not_found(self, db_session, sample_developer):
        with pytest.raises(NotFoundError):
            await self.service.get_developer(db_session, 2**64)
        with pytest.raises(NotFoundError):
            await self.service.update_developer(db_session, 2**64, **sample_developer)
        with pytest.raises(NotFoundError):
            await self.service.delete_developer(db_session, -(2**64))


class TestDeveloperServiceList:

    def setup_method(self):
        self.service = DeveloperService()
        self.levels = LevelService()

    @pytest.mark.asyncio
    async def test_enrichment_with_level_name(self, db_session, sample_developer):
        senior = await self.levels.create_level(db_session, "Senior")
        await self.service.create_developer(db_session, **sample_developer, level_id=senior.id)
        await self.service.create_developer(db_session, **sample_developer)

        devs = await self.service.list_developers(db_session)

        assert [d.nivel_nome for d in devs] == ["Senior", "N/A"]

    @pytest.mark.asyncio
    async def test_sort_by_nivel_id_uses_level_name(self, db_session, sample_developer):
        """Levels {1: Senior, 2: Junior}: ascending puts Junior first."""
        senior = await self.levels.create_level(db_session, "Senior")
        junior = await self.levels.create_level(db_session, "Junior")
        assert senior.id < junior.id

        first = await self.service.create_developer(db_session, **sample_developer, level_id=senior.id)
        second = await self.service.create_developer(db_session, **sample_developer, level_id=junior.id)

        devs = await self.service.list_developers(db_session, order_by="nivel_id", order="asc")
        assert [d.id for d in devs] == [second.id, first.id]

        devs = await self.service.list_developers(db_session, order_by="nivel_id", order="desc")
        assert [d.id for d in devs] == [first.id, second.id]

    @pytest.mark.asyncio
    async def test_sort_by_name_desc(self, db_session, sample_developer):
        for name in ("Bruno", "Carla", "Ana"):
            sample_developer["name"] = name
            await self.service.create_developer(db_session, **sample_developer)

        devs = await self.service.list_developers(db_session, order_by="nome", order="desc")
        assert [d.nome for d in devs] == ["Carla", "Bruno", "Ana"]

    @pytest.mark.asyncio
    async def test_unknown_sort_column(self, db_session):
        with pytest.raises(ValidationError):
            await self.service.list_developers(db_session, order_by="salario")

    @pytest.mark.asyncio
    async def test_list_failure_is_fetch_error(self, mock_db_session):
        mock_db_session.execute.side_effect = OperationalError("SELECT", {}, Exception("gone"))

        with pytest.raises(FetchError):
            await self.service.list_developers(mock_db_session)
