"""Category Rules — availability, ownership and defaults for event categories.

Invariants:
    - System defaults are visible to every user; custom categories only to their owner
    - Inactive (soft-deleted) categories are never available
    - Available categories are ordered by sort_order, then name

Design Decisions:
    - Work detection looks at icon first, then name: users rename categories more
      often than they change icons
"""

import random
from dataclasses import dataclass
from uuid import UUID

from aurora.core.repository_protocols import CategoryLike

CATEGORY_PALETTE: tuple[str, ...] = (
    "#3b82f6", "#8b5cf6", "#10b981", "#f59e0b", "#ef4444",
    "#06b6d4", "#ec4899", "#14b8a6", "#f97316", "#6366f1",
)

AUTO_CREATED_DESCRIPTION = "auto-created"
AUTO_CREATED_ICON = "category"
AUTO_CREATED_SORT_ORDER = 100


@dataclass(frozen=True)
class DefaultCategory:
    name: str
    description: str
    color: str
    icon: str
    sort_order: int


SYSTEM_CATEGORIES: tuple[DefaultCategory, ...] = (
    DefaultCategory("Work", "Work and professional commitments", "#3b82f6", "work", 1),
    DefaultCategory("Personal", "Personal errands and time for yourself", "#8b5cf6", "home", 2),
    DefaultCategory("Health", "Exercise, medical visits and wellbeing", "#10b981", "health", 3),
    DefaultCategory("Social", "Friends, family and social plans", "#f59e0b", "social", 4),
)

_WORK_ICONS = {
    "work", "briefcase", "briefcase-business", "business", "office", "suitcase", "laptop",
}
_WORK_ICON_FRAGMENTS = ("work", "briefcase", "business", "office")
_WORK_ICON_EMOJI = ("💼", "👔")
_WORK_NAME_FRAGMENTS = ("trabajo", "work", "laboral")


def is_custom(category: CategoryLike) -> bool:
    return category.user_id is not None and not category.is_system_default


def is_available_for_user(category: CategoryLike, user_id: UUID) -> bool:
    if not category.is_active:
        return False
    if category.is_system_default:
        return True
    return category.user_id == user_id


def sort_categories(categories):
    return sorted(categories, key=lambda c: (c.sort_order, c.name.lower()))


def find_by_name(categories, name: str) -> CategoryLike | None:
    """Case-insensitive, whitespace-tolerant name lookup."""
    wanted = name.strip().lower()
    for category in categories:
        if category.name.strip().lower() == wanted:
            return category
    return None


def is_work_category(category: CategoryLike | None) -> bool:
    if category is None:
        return False

    if category.icon and category.icon.strip():
        icon = category.icon.strip().lower()
        if icon in _WORK_ICONS:
            return True
        if any(fragment in icon for fragment in _WORK_ICON_FRAGMENTS):
            return True
        if any(emoji in category.icon for emoji in _WORK_ICON_EMOJI):
            return True

    name = (category.name or "").strip().lower()
    if not name:
        return False
    return any(fragment in name for fragment in _WORK_NAME_FRAGMENTS)


def pick_palette_color(rng: random.Random | None = None) -> str:
    return (rng or random).choice(CATEGORY_PALETTE)  # nosec B311
