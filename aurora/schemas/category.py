"""Category Schemas — request/response models for event categories.

Invariants:
    - name: 1-50 chars, stripped, non-empty
    - color: #rrggbb hex string
"""

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator


class EventCategoryCreate(BaseModel):
    name: str = Field(min_length=1, max_length=50)
    description: str | None = Field(None, max_length=200)
    color: str = Field(pattern=r"^#[0-9a-fA-F]{6}$")
    icon: str | None = Field(None, max_length=50)
    sort_order: int = Field(0, ge=0)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty or whitespace")
        return v


class EventCategoryUpdate(EventCategoryCreate):
    """Full replacement of a custom category's editable fields."""


class EventCategoryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    description: str | None = None
    color: str
    icon: str | None = None
    is_system_default: bool
    sort_order: int
    user_id: UUID | None = None
