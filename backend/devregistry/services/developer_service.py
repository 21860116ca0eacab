"""
Developer Registry — Developer Service
========================================

What:  Business rules for developers: validation, age derivation, level
       reference checks, enrichment with the level name, sorting.
Who:   Called by the /desenvolvedores route handlers.

Write path (create / update):
    1. Reject blank nome / sexo / hobby
    2. Parse data_nascimento (must be a real date, not in the future)
    3. If nivel_id is given, the level must exist
    4. idade = current_year - birth_year, stored with the row
    Update is a full replace of every editable field; idade is recomputed
    from the supplied birth date.

Read path (list / get):
    LEFT OUTER JOIN nivel so each row carries `nivel_nome`, which is
    "N/A" when the developer has no level.
"""

import logging
from datetime import date
from typing import Any, Dict, List, Optional, Union

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from devregistry.database import is_storable_id
from devregistry.exceptions import (
    ConnectivityError,
    FetchError,
    NotFoundError,
    ValidationError,
)
from devregistry.models.developer import Developer
from devregistry.models.level import Level
from devregistry.schemas.developer import DeveloperListItem, DeveloperResponse
from devregistry.services.derived import compute_age, level_display_name, parse_birth_date
from devregistry.services.query_engine import (
    DEVELOPER_SORT_SUBSTITUTIONS,
    SortOrder,
    apply_query,
)

logger = logging.getLogger(__name__)

DEVELOPER_SORT_COLUMNS = (
    "id",
    "nome",
    "sexo",
    "data_nascimento",
    "idade",
    "hobby",
    "nivel_id",
    "nivel_nome",
)


def _require_text(value: Optional[str], field: str) -> str:
    if value is None or not value.strip():
        raise ValidationError(f"Field '{field}' must not be empty", field=field)
    return value


def _to_response(developer: Developer) -> DeveloperResponse:
    return DeveloperResponse(
        id=developer.id,
        nome=developer.name,
        sexo=developer.sex,
        data_nascimento=developer.birth_date,
        idade=developer.age,
        hobby=developer.hobby,
        nivel_id=developer.level_id,
    )


def _to_list_item(developer: Developer, level_name: Optional[str]) -> DeveloperListItem:
    return DeveloperListItem(
        **_to_response(developer).model_dump(),
        nivel_nome=level_display_name(level_name),
    )


class DeveloperService:
    """Business logic layer for developer operations."""

    async def _get_row(self, db: AsyncSession, developer_id: int) -> Developer:
        developer = await db.get(Developer, developer_id) if is_storable_id(developer_id) else None
        if developer is None:
            raise NotFoundError(resource="desenvolvedor", resource_id=developer_id)
        return developer

    async def _level_missing(self, db: AsyncSession, level_id: int) -> bool:
        return not is_storable_id(level_id) or await db.get(Level, level_id) is None

    async def _validated_fields(
        self,
        db: AsyncSession,
        name: str,
        sex: str,
        birth_date: Union[str, date],
        hobby: str,
        level_id: Optional[int],
    ) -> Dict[str, Any]:
        """Validate a full developer record and derive its age."""
        name = _require_text(name, "nome")
        sex = _require_text(sex, "sexo")
        hobby = _require_text(hobby, "hobby")
        parsed_birth_date = parse_birth_date(birth_date)

        if level_id is not None and await self._level_missing(db, level_id):
            raise ValidationError(
                f"nivel with ID '{level_id}' does not exist",
                field="nivel_id",
                context={"nivel_id": level_id},
            )

        return {
            "name": name,
            "sex": sex,
            "birth_date": parsed_birth_date,
            "age": compute_age(parsed_birth_date),
            "hobby": hobby,
            "level_id": level_id,
        }

    async def create_developer(
        self,
        db: AsyncSession,
        name: str,
        sex: str,
        birth_date: Union[str, date],
        hobby: str,
        level_id: Optional[int] = None,
    ) -> DeveloperResponse:
        """
        Insert a developer with a freshly computed age.

        Raises:
            ValidationError: blank field, bad/future birth date, unknown level (→ 400)
            ConnectivityError: the insert failed (→ 500)
        """
        try:
            fields = await self._validated_fields(db, name, sex, birth_date, hobby, level_id)
            developer = Developer(**fields)
            db.add(developer)
            await db.flush()
        except IntegrityError:
            # Level removed between the existence check and the insert
            raise ValidationError(
                f"nivel with ID '{level_id}' does not exist",
                field="nivel_id",
            )
        except SQLAlchemyError as e:
            logger.error("Database error creating desenvolvedor: %s", str(e), exc_info=True)
            raise ConnectivityError(
                message="Failed to create desenvolvedor",
                context={"error_type": type(e).__name__},
            )

        logger.info("Desenvolvedor %d created (idade=%d)", developer.id, developer.age)
        return _to_response(developer)

    async def get_developer(self, db: AsyncSession, developer_id: int) -> DeveloperListItem:
        """Single developer enriched with its level name. NotFoundError if absent."""
        if not is_storable_id(developer_id):
            raise NotFoundError(resource="desenvolvedor", resource_id=developer_id)
        try:
            result = await db.execute(
                select(Developer, Level.name)
                .outerjoin(Level, Developer.level_id == Level.id)
                .where(Developer.id == developer_id)
            )
            row = result.first()
        except SQLAlchemyError as e:
            logger.error("Database error fetching desenvolvedor %s: %s", developer_id, str(e))
            raise ConnectivityError(
                message="Could not retrieve the desenvolvedor. Please try again.",
                context={"developer_id": developer_id},
            )

        if row is None:
            raise NotFoundError(resource="desenvolvedor", resource_id=developer_id)
        developer, level_name = row
        return _to_list_item(developer, level_name)

    async def update_developer(
        self,
        db: AsyncSession,
        developer_id: int,
        name: str,
        sex: str,
        birth_date: Union[str, date],
        hobby: str,
        level_id: Optional[int] = None,
    ) -> DeveloperResponse:
        """
        Replace every editable field of a developer and recompute its age.

        Raises:
            NotFoundError: no developer with this id (→ 404)
            ValidationError: same rules as create_developer (→ 400)
        """
        try:
            developer = await self._get_row(db, developer_id)

            fields = await self._validated_fields(db, name, sex, birth_date, hobby, level_id)
            for attr, value in fields.items():
                setattr(developer, attr, value)
            await db.flush()
        except IntegrityError:
            raise ValidationError(
                f"nivel with ID '{level_id}' does not exist",
                field="nivel_id",
            )
        except SQLAlchemyError as e:
            logger.error("Database error updating desenvolvedor %s: %s", developer_id, str(e), exc_info=True)
            raise ConnectivityError(
                message="Failed to update desenvolvedor",
                context={"developer_id": developer_id, "error_type": type(e).__name__},
            )

        logger.info("Desenvolvedor %d updated (idade=%d)", developer.id, developer.age)
        return _to_response(developer)

    async def delete_developer(self, db: AsyncSession, developer_id: int) -> None:
        """Remove a developer. Always permitted when the developer exists."""
        try:
            developer = await self._get_row(db, developer_id)
            await db.delete(developer)
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error deleting desenvolvedor %s: %s", developer_id, str(e), exc_info=True)
            raise ConnectivityError(
                message="Failed to delete desenvolvedor",
                context={"developer_id": developer_id, "error_type": type(e).__name__},
            )

        logger.info("Desenvolvedor %d deleted", developer_id)

    async def list_developers(
        self,
        db: AsyncSession,
        order_by: Optional[str] = None,
        order: SortOrder = "asc",
    ) -> List[DeveloperListItem]:
        """
        All developers enriched with `nivel_nome`, optionally sorted.

        Sorting by `nivel_id` orders by the level's name, not its id.

        Raises:
            ValidationError: unknown sort column or order (→ 400)
            FetchError: the query failed (→ 404)
        """
        try:
            result = await db.execute(
                select(Developer, Level.name)
                .outerjoin(Level, Developer.level_id == Level.id)
                .order_by(Developer.id)
            )
            rows = result.all()
        except SQLAlchemyError as e:
            logger.error("Database error listing desenvolvedores: %s", str(e), exc_info=True)
            raise FetchError(resource="desenvolvedores", context={"error_type": type(e).__name__})

        developers = [_to_list_item(developer, level_name) for developer, level_name in rows]
        return apply_query(
            developers,
            order_by,
            order,
            sortable=DEVELOPER_SORT_COLUMNS,
            substitutions=DEVELOPER_SORT_SUBSTITUTIONS,
        )


# ── Singleton Instance ────────────────────────────────────────────────────
developer_service = DeveloperService()
