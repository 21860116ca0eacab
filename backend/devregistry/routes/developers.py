"""
Developer Registry — Developer Route Handlers
===============================================

What:  /desenvolvedores endpoints (list, get, create, update, delete).
How:   Unpacks the request body into DeveloperService calls. idade is never
       taken from the client; the service derives it from data_nascimento.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from devregistry.database import get_db_session
from devregistry.schemas.common import ErrorResponse, MessageResponse
from devregistry.schemas.developer import (
    DeveloperListItem,
    DeveloperPayload,
    DeveloperResponse,
)
from devregistry.services.developer_service import developer_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/desenvolvedores", tags=["Desenvolvedores"])


@router.get(
    "",
    response_model=List[DeveloperListItem],
    responses={
        400: {"description": "Unknown sort column or order", "model": ErrorResponse},
        404: {"description": "Developers could not be fetched", "model": ErrorResponse},
    },
    summary="List developers with their level names",
)
async def list_developers(
    order_by: Optional[str] = Query(
        default=None,
        description=(
            "Sort column: id, nome, sexo, data_nascimento, idade, hobby, nivel_id "
            "or nivel_nome. nivel_id sorts by level name."
        ),
    ),
    order: str = Query(default="asc", description="Sort direction: asc or desc"),
    db: AsyncSession = Depends(get_db_session),
) -> List[DeveloperListItem]:
    return await developer_service.list_developers(db, order_by=order_by, order=order)


@router.get(
    "/{developer_id}",
    response_model=DeveloperListItem,
    responses={404: {"description": "Developer not found", "model": ErrorResponse}},
    summary="Get a single developer",
)
async def get_developer(
    developer_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> DeveloperListItem:
    return await developer_service.get_developer(db, developer_id)


@router.post(
    "",
    status_code=201,
    response_model=DeveloperResponse,
    responses={400: {"description": "Invalid developer data", "model": ErrorResponse}},
    summary="Create a developer",
)
async def create_developer(
    payload: DeveloperPayload,
    db: AsyncSession = Depends(get_db_session),
) -> DeveloperResponse:
    return await developer_service.create_developer(
        db,
        name=payload.nome,
        sex=payload.sexo,
        birth_date=payload.data_nascimento,
        hobby=payload.hobby,
        level_id=payload.nivel_id,
    )


@router.put(
    "/{developer_id}",
    response_model=DeveloperResponse,
    responses={
        400: {"description": "Invalid developer data", "model": ErrorResponse},
        404: {"description": "Developer not found", "model": ErrorResponse},
    },
    summary="Replace a developer's fields",
)
async def update_developer(
    developer_id: int,
    payload: DeveloperPayload,
    db: AsyncSession = Depends(get_db_session),
) -> DeveloperResponse:
    return await developer_service.update_developer(
        db,
        developer_id,
        name=payload.nome,
        sex=payload.sexo,
        birth_date=payload.data_nascimento,
        hobby=payload.hobby,
        level_id=payload.nivel_id,
    )


@router.delete(
    "/{developer_id}",
    response_model=MessageResponse,
    responses={404: {"description": "Developer not found", "model": ErrorResponse}},
    summary="Delete a developer",
)
async def delete_developer(
    developer_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    await developer_service.delete_developer(db, developer_id)
    return MessageResponse(message="Desenvolvedor deleted successfully")
