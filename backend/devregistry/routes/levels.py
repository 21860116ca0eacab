"""
Developer Registry — Level Route Handlers
===========================================

What:  /niveis endpoints (list, get, create, update, delete).
How:   Extracts path/query/body data, delegates to LevelService, returns JSON.
       Errors are raised as application exceptions and formatted by the
       global handlers in main.py.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from devregistry.database import get_db_session
from devregistry.schemas.common import ErrorResponse, MessageResponse
from devregistry.schemas.level import LevelPayload, LevelResponse
from devregistry.services.level_service import level_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/niveis", tags=["Niveis"])


@router.get(
    "",
    response_model=List[LevelResponse],
    responses={
        400: {"description": "Unknown sort column or order", "model": ErrorResponse},
        404: {"description": "Levels could not be fetched", "model": ErrorResponse},
    },
    summary="List levels with developer counts",
)
async def list_levels(
    q: Optional[str] = Query(
        default=None,
        description="Case-insensitive substring filter on the level name",
    ),
    order_by: Optional[str] = Query(
        default=None,
        description="Sort column: id, nivel or developer_count. Omit to keep id order.",
    ),
    order: str = Query(default="asc", description="Sort direction: asc or desc"),
    db: AsyncSession = Depends(get_db_session),
) -> List[LevelResponse]:
    return await level_service.list_levels(db, filter_text=q, order_by=order_by, order=order)


@router.get(
    "/{level_id}",
    response_model=LevelResponse,
    responses={404: {"description": "Level not found", "model": ErrorResponse}},
    summary="Get a single level",
)
async def get_level(
    level_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> LevelResponse:
    return await level_service.get_level(db, level_id)


@router.post(
    "",
    status_code=201,
    response_model=LevelResponse,
    responses={400: {"description": "Blank level name", "model": ErrorResponse}},
    summary="Create a level",
)
async def create_level(
    payload: LevelPayload,
    db: AsyncSession = Depends(get_db_session),
) -> LevelResponse:
    return await level_service.create_level(db, payload.nivel)


@router.put(
    "/{level_id}",
    response_model=LevelResponse,
    responses={
        400: {"description": "Blank level name", "model": ErrorResponse},
        404: {"description": "Level not found", "model": ErrorResponse},
    },
    summary="Rename a level",
)
async def update_level(
    level_id: int,
    payload: LevelPayload,
    db: AsyncSession = Depends(get_db_session),
) -> LevelResponse:
    return await level_service.update_level(db, level_id, payload.nivel)


@router.delete(
    "/{level_id}",
    response_model=MessageResponse,
    responses={
        401: {"description": "Level still has developers", "model": ErrorResponse},
        404: {"description": "Level not found", "model": ErrorResponse},
    },
    summary="Delete a level without developers",
    description=(
        "Deletes the level permanently. Levels still referenced by developers "
        "cannot be deleted and answer 401."
    ),
)
async def delete_level(
    level_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    await level_service.delete_level(db, level_id)
    return MessageResponse(message="Nivel deleted successfully")
