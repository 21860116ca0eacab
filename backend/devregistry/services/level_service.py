"""
Developer Registry — Level Service
====================================

What:  Business rules for levels: CRUD, live developer counts, and the
       referential-integrity guard on deletion.
Who:   Called by the /niveis route handlers.

Integrity rule:
    A level referenced by at least one developer cannot be deleted.
    delete_level() counts referencing developers first and raises
    ReferentialIntegrityError when the count is positive. If a developer is
    inserted between that count and the DELETE, the store's foreign key
    rejects the statement and the IntegrityError is reported the same way.

Developer counts are never stored: every read runs one grouped
LEFT OUTER JOIN so a level with no developers reports 0.

Design Decision:
    LevelService is stateless and receives the AsyncSession on every call,
    exactly like the other services.
"""

import logging
from typing import List, Optional

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from devregistry.database import is_storable_id
from devregistry.exceptions import (
    ConnectivityError,
    FetchError,
    NotFoundError,
    ReferentialIntegrityError,
    ValidationError,
)
from devregistry.models.developer import Developer
from devregistry.models.level import Level
from devregistry.schemas.level import LevelResponse
from devregistry.services.query_engine import SortOrder, apply_query

logger = logging.getLogger(__name__)

LEVEL_SORT_COLUMNS = ("id", "nivel", "developer_count")


def _validate_name(name: Optional[str]) -> str:
    if name is None or not name.strip():
        raise ValidationError("Field 'nivel' must not be empty", field="nivel")
    return name


class LevelService:
    """
    Business logic layer for level operations.

    Error Handling Strategy:
        Missing rows become NotFoundError, blocked deletions become
        ReferentialIntegrityError. Any other SQLAlchemy failure is logged and
        wrapped in ConnectivityError (FetchError for listings) so no driver
        details reach the client.
    """

    async def _get_row(self, db: AsyncSession, level_id: int) -> Level:
        level = await db.get(Level, level_id) if is_storable_id(level_id) else None
        if level is None:
            raise NotFoundError(resource="nivel", resource_id=level_id)
        return level

    async def count_developers(self, db: AsyncSession, level_id: int) -> int:
        """Number of developers whose nivel_id equals `level_id`."""
        result = await db.execute(
            select(func.count(Developer.id)).where(Developer.level_id == level_id)
        )
        return result.scalar_one()

    async def create_level(self, db: AsyncSession, name: str) -> LevelResponse:
        """
        Insert a new level.

        Raises:
            ValidationError: name is empty or blank (→ 400)
            ConnectivityError: the insert failed (→ 500)
        """
        name = _validate_name(name)
        try:
            level = Level(name=name)
            db.add(level)
            await db.flush()  # assigns the autoincrement id
        except SQLAlchemyError as e:
            logger.error("Database error creating nivel: %s", str(e), exc_info=True)
            raise ConnectivityError(
                message="Failed to create nivel",
                context={"error_type": type(e).__name__},
            )

        logger.info("Nivel %d created: %s", level.id, level.name)
        return LevelResponse(id=level.id, nivel=level.name, developer_count=0)

    async def get_level(self, db: AsyncSession, level_id: int) -> LevelResponse:
        """Single level with its live developer count. NotFoundError if absent."""
        try:
            level = await self._get_row(db, level_id)
            count = await self.count_developers(db, level_id)
        except SQLAlchemyError as e:
            logger.error("Database error fetching nivel %s: %s", level_id, str(e))
            raise ConnectivityError(
                message="Could not retrieve the nivel. Please try again.",
                context={"level_id": level_id},
            )
        return LevelResponse(id=level.id, nivel=level.name, developer_count=count)

    async def update_level(self, db: AsyncSession, level_id: int, name: str) -> LevelResponse:
        """
        Replace the label of an existing level.

        Raises:
            NotFoundError: no level with this id (checked first)
            ValidationError: name is empty or blank
        """
        try:
            level = await self._get_row(db, level_id)
            level.name = _validate_name(name)
            await db.flush()
            count = await self.count_developers(db, level_id)
        except SQLAlchemyError as e:
            logger.error("Database error updating nivel %s: %s", level_id, str(e), exc_info=True)
            raise ConnectivityError(
                message="Failed to update nivel",
                context={"level_id": level_id, "error_type": type(e).__name__},
            )

        logger.info("Nivel %d renamed to %s", level.id, level.name)
        return LevelResponse(id=level.id, nivel=level.name, developer_count=count)

    async def delete_level(self, db: AsyncSession, level_id: int) -> None:
        """
        Permanently remove a level that no developer references.

        Raises:
            NotFoundError: no level with this id (→ 404)
            ReferentialIntegrityError: developers still reference it (→ 401)
            ConnectivityError: the delete failed for another reason (→ 500)
        """
        try:
            level = await self._get_row(db, level_id)
            count = await self.count_developers(db, level_id)
        except SQLAlchemyError as e:
            logger.error("Database error loading nivel %s: %s", level_id, str(e))
            raise ConnectivityError(
                message="Failed to delete nivel",
                context={"level_id": level_id},
            )

        if count > 0:
            logger.warning(
                "Refusing to delete nivel %d: referenced by %d desenvolvedor(es)",
                level_id,
                count,
            )
            raise ReferentialIntegrityError(level_id=level_id, developer_count=count)

        try:
            await db.delete(level)
            await db.flush()
        except IntegrityError:
            # A developer referencing this level was inserted after the count
            logger.warning("Foreign key blocked deletion of nivel %d", level_id)
            raise ReferentialIntegrityError(level_id=level_id)
        except SQLAlchemyError as e:
            logger.error("Database error deleting nivel %s: %s", level_id, str(e), exc_info=True)
            raise ConnectivityError(
                message="Failed to delete nivel",
                context={"level_id": level_id, "error_type": type(e).__name__},
            )

        logger.info("Nivel %d deleted", level_id)

    async def list_levels(
        self,
        db: AsyncSession,
        filter_text: Optional[str] = None,
        order_by: Optional[str] = None,
        order: SortOrder = "asc",
    ) -> List[LevelResponse]:
        """
        All levels with their live developer counts, filtered and sorted.

        Query plan:
            SELECT n.id, n.nivel, COUNT(d.id)
            FROM nivel n LEFT OUTER JOIN desenvolvedor d ON d.nivel_id = n.id
            GROUP BY n.id, n.nivel ORDER BY n.id

        Args:
            db: Async database session
            filter_text: case-insensitive substring matched against `nivel`
            order_by: one of id, nivel, developer_count; None keeps id order
            order: "asc" or "desc"

        Raises:
            ValidationError: unknown sort column or order (→ 400)
            FetchError: the query failed (→ 404)
        """
        try:
            result = await db.execute(
                select(Level.id, Level.name, func.count(Developer.id))
                .outerjoin(Developer, Developer.level_id == Level.id)
                .group_by(Level.id, Level.name)
                .order_by(Level.id)
            )
            rows = result.all()
        except SQLAlchemyError as e:
            logger.error("Database error listing niveis: %s", str(e), exc_info=True)
            raise FetchError(resource="niveis", context={"error_type": type(e).__name__})

        levels = [
            LevelResponse(id=level_id, nivel=name, developer_count=count)
            for level_id, name, count in rows
        ]
        return apply_query(
            levels,
            order_by,
            order,
            filter_text=filter_text,
            filter_field="nivel",
            sortable=LEVEL_SORT_COLUMNS,
        )


# ── Singleton Instance ────────────────────────────────────────────────────
level_service = LevelService()
