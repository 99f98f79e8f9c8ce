"""Post schemas."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel

from miniblog.apps.blog.models.post import as_utc


class PostCreate(BaseModel):
    """Schema for creating a post.

    Both fields are optional here so that a missing field reaches the
    service and is reported as a validation error, not a framework 422.
    """
    title: Optional[str] = None
    content: Optional[str] = None


class PostUpdate(BaseModel):
    """Schema for updating a post. Updates always replace both fields."""
    title: Optional[str] = None
    content: Optional[str] = None


class PostRead(BaseModel):
    """Post as it goes over the wire."""

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        alias_generator=to_camel,
    )

    id: str
    title: str
    content: str
    created_at: datetime
    updated_at: datetime

    @field_validator("created_at", "updated_at")
    @classmethod
    def _assume_utc(cls, value: datetime) -> datetime:
        return as_utc(value)
