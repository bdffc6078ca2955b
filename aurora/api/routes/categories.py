"""Event Category Routes — system defaults and user-owned categories.

Invariants:
    - System categories are visible to everyone and editable by no one (403)
    - Deleting a category moves its events first (reassign_to_category_id or the first system category)
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from aurora.api.dependencies import get_current_user_id, not_found
from aurora.infrastructure.database import get_db
from aurora.schemas.category import (
    EventCategoryCreate, EventCategoryResponse, EventCategoryUpdate,
)
from aurora.services import category_service

router = APIRouter(prefix="/api/v1/event-categories", tags=["categories"])


@router.get("", response_model=list[EventCategoryResponse])
async def list_categories(
    user_id: UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    return await category_service.list_available(db, user_id)


@router.get("/system", response_model=list[EventCategoryResponse])
async def list_system_categories(db: AsyncSession = Depends(get_db)):
    return await category_service.list_system(db)


@router.get("/custom", response_model=list[EventCategoryResponse])
async def list_custom_categories(
    user_id: UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    return await category_service.list_custom(db, user_id)


@router.get("/{category_id}", response_model=EventCategoryResponse)
async def get_category(
    category_id: UUID,
    user_id: UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    category = await category_service.get_category(db, user_id, category_id)
    if category is None:
        raise not_found("EventCategory", category_id)
    return category


@router.post("", response_model=EventCategoryResponse, status_code=status.HTTP_201_CREATED)
async def create_category(
    body: EventCategoryCreate,
    user_id: UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    return await category_service.create_category(db, user_id, body)


@router.put("/{category_id}", response_model=EventCategoryResponse)
async def update_category(
    category_id: UUID,
    body: EventCategoryUpdate,
    user_id: UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    return await category_service.update_category(db, user_id, category_id, body)


@router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_category(
    category_id: UUID,
    reassign_to_category_id: UUID | None = Query(None),
    user_id: UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    await category_service.delete_category(db, user_id, category_id, reassign_to_category_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
