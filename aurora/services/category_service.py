"""Category Service — system and user-owned event categories.

Invariants:
    - Names are unique (case-insensitive) among the categories a user can see
    - Only the owner may edit or delete a custom category; system defaults are read-only
    - Deleting a category never orphans events: they move to a target category first

Design Decisions:
    - Soft delete (is_active = False) so historical analytics keep the category name
    - ensure_system_categories() is idempotent and runs once at startup
      (ADR: seed through the ORM, not a data migration, so tests get the same rows)
"""

import logging
from uuid import UUID

from sqlalchemy import or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from aurora.core.category_rules import (
    AUTO_CREATED_DESCRIPTION, AUTO_CREATED_ICON, AUTO_CREATED_SORT_ORDER,
    SYSTEM_CATEGORIES, find_by_name, is_custom, pick_palette_color, sort_categories,
)
from aurora.core.errors import (
    BusinessRuleError, ConflictError, ErrorContext, ForbiddenError,
    InvalidInputError, ResourceNotFoundError,
)
from aurora.models.event import Event
from aurora.models.event_category import EventCategory
from aurora.schemas.category import EventCategoryCreate, EventCategoryUpdate

logger = logging.getLogger(__name__)


def _available_query(user_id: UUID):
    return (
        select(EventCategory)
        .where(
            EventCategory.is_active.is_(True),
            or_(
                EventCategory.is_system_default.is_(True),
                EventCategory.user_id == user_id,
            ),
        )
        .order_by(EventCategory.sort_order, EventCategory.name)
    )


async def list_available(db: AsyncSession, user_id: UUID) -> list[EventCategory]:
    """System defaults plus the user's own categories, by sort order then name."""
    result = await db.execute(_available_query(user_id))
    return sort_categories(result.scalars().all())


async def get_category(
    db: AsyncSession, user_id: UUID, category_id: UUID,
) -> EventCategory | None:
    """Category if the user can see it, else None."""
    result = await db.execute(
        _available_query(user_id).where(EventCategory.id == category_id),
    )
    return result.scalar_one_or_none()


async def list_system(db: AsyncSession) -> list[EventCategory]:
    result = await db.execute(
        select(EventCategory)
        .where(
            EventCategory.is_active.is_(True),
            EventCategory.is_system_default.is_(True),
        )
        .order_by(EventCategory.sort_order, EventCategory.name),
    )
    return list(result.scalars().all())


async def list_custom(db: AsyncSession, user_id: UUID) -> list[EventCategory]:
    result = await db.execute(
        select(EventCategory)
        .where(
            EventCategory.is_active.is_(True),
            EventCategory.is_system_default.is_(False),
            EventCategory.user_id == user_id,
        )
        .order_by(EventCategory.sort_order, EventCategory.name),
    )
    return list(result.scalars().all())


async def _ensure_unique_name(
    db: AsyncSession, user_id: UUID, name: str, exclude_id: UUID | None = None,
) -> None:
    available = [c for c in await list_available(db, user_id) if c.id != exclude_id]
    if find_by_name(available, name) is not None:
        raise ConflictError(
            f"A category named '{name}' already exists",
            context=ErrorContext(user_id=str(user_id), operation="category_name"),
        )


async def create_category(
    db: AsyncSession, user_id: UUID, data: EventCategoryCreate,
) -> EventCategory:
    await _ensure_unique_name(db, user_id, data.name)
    category = EventCategory(
        name=data.name,
        description=data.description,
        color=data.color,
        icon=data.icon,
        sort_order=data.sort_order,
        is_system_default=False,
        user_id=user_id,
    )
    db.add(category)
    await db.commit()
    await db.refresh(category)
    logger.info(
        f"Category created: {category.name}",
        extra={"user_id": str(user_id)},
    )
    return category


async def create_auto_category(
    db: AsyncSession, user_id: UUID, name: str,
) -> EventCategory:
    """Category created on the fly for an AI-suggested name. Not committed."""
    category = EventCategory(
        name=name.strip()[:50],
        description=AUTO_CREATED_DESCRIPTION,
        color=pick_palette_color(),
        icon=AUTO_CREATED_ICON,
        sort_order=AUTO_CREATED_SORT_ORDER,
        is_system_default=False,
        user_id=user_id,
    )
    db.add(category)
    await db.flush()
    logger.info(
        f"Auto-created category {category.name!r}",
        extra={"user_id": str(user_id)},
    )
    return category


async def _get_owned_custom(
    db: AsyncSession, user_id: UUID, category_id: UUID,
) -> EventCategory:
    category = await get_category(db, user_id, category_id)
    if category is None:
        raise ResourceNotFoundError("EventCategory", str(category_id))
    if not is_custom(category) or category.user_id != user_id:
        raise ForbiddenError(
            "System categories cannot be modified",
            context=ErrorContext(user_id=str(user_id), resource_id=str(category_id)),
        )
    return category


async def update_category(
    db: AsyncSession, user_id: UUID, category_id: UUID, data: EventCategoryUpdate,
) -> EventCategory:
    category = await _get_owned_custom(db, user_id, category_id)
    await _ensure_unique_name(db, user_id, data.name, exclude_id=category.id)

    category.name = data.name
    category.description = data.description
    category.color = data.color
    category.icon = data.icon
    category.sort_order = data.sort_order
    await db.commit()
    await db.refresh(category)
    return category


async def delete_category(
    db: AsyncSession,
    user_id: UUID,
    category_id: UUID,
    reassign_to: UUID | None = None,
) -> None:
    """Move the category's events to a target, then soft-delete it."""
    category = await _get_owned_custom(db, user_id, category_id)
    target = await _resolve_reassign_target(db, user_id, category, reassign_to)

    moved = await db.execute(
        update(Event)
        .where(Event.event_category_id == category.id, Event.user_id == user_id)
        .values(event_category_id=target.id),
    )
    category.is_active = False
    await db.commit()
    logger.info(
        f"Category {category.name!r} deleted, {moved.rowcount} events moved to {target.name!r}",
        extra={"user_id": str(user_id)},
    )


async def _resolve_reassign_target(
    db: AsyncSession,
    user_id: UUID,
    category: EventCategory,
    reassign_to: UUID | None,
) -> EventCategory:
    if reassign_to is not None:
        if reassign_to == category.id:
            raise InvalidInputError(
                "Events cannot be reassigned to the category being deleted",
                "reassign_to_category_id",
            )
        target = await get_category(db, user_id, reassign_to)
        if target is None:
            raise InvalidInputError(
                "The target category is not available", "reassign_to_category_id",
            )
        return target

    system = await list_system(db)
    if not system:
        raise BusinessRuleError(
            "No system category is available to receive the events",
            "NO_FALLBACK_CATEGORY",
        )
    return system[0]


async def ensure_system_categories(db: AsyncSession) -> int:
    """Create any missing default categories. Returns how many were added."""
    existing = await list_system(db)
    created = 0
    for default in SYSTEM_CATEGORIES:
        if find_by_name(existing, default.name) is not None:
            continue
        db.add(EventCategory(
            name=default.name,
            description=default.description,
            color=default.color,
            icon=default.icon,
            sort_order=default.sort_order,
            is_system_default=True,
            user_id=None,
        ))
        created += 1
    if created:
        await db.commit()
        logger.info(f"Seeded {created} system categories")
    return created
