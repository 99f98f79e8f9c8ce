"""Post model."""

import uuid
from datetime import datetime, timedelta, timezone
from typing import Any, Tuple

from sqlmodel import Column, DateTime, Field, SQLModel

from miniblog.core.exceptions import ValidationException
from miniblog.core.response.schemas import ErrorDetail

REQUIRED_FIELDS_MESSAGE = "Title and content are required"


def generate_id() -> str:
    return uuid.uuid4().hex


def as_utc(value: datetime) -> datetime:
    """Attach UTC to naive datetimes read back from stores that drop tzinfo."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def clean_fields(title: Any, content: Any) -> Tuple[str, str]:
    """Strip title and content, rejecting either one when missing or blank."""
    cleaned = {}
    errors = []
    for name, value in (("title", title), ("content", content)):
        if isinstance(value, str) and value.strip():
            cleaned[name] = value.strip()
        else:
            errors.append(
                ErrorDetail(field=name, code="REQUIRED", message=f"{name} is required")
            )
    if errors:
        raise ValidationException(REQUIRED_FIELDS_MESSAGE, error_details=errors)
    return cleaned["title"], cleaned["content"]


class Post(SQLModel, table=True):
    """Post model class.

    Table models skip pydantic validation, so instances must be built with
    :meth:`new` and changed with :meth:`revise`, which hold the invariants:
    title and content are never blank and ``updated_at`` never precedes
    ``created_at``.
    """

    __tablename__ = "posts"  # type: ignore

    id: str = Field(default_factory=generate_id, primary_key=True)
    title: str = Field(nullable=False)
    content: str = Field(nullable=False)
    created_at: datetime = Field(
        sa_column=Column(DateTime(timezone=True), nullable=False, index=True)
    )
    updated_at: datetime = Field(
        sa_column=Column(DateTime(timezone=True), nullable=False)
    )

    @classmethod
    def new(cls, title: Any, content: Any, now: datetime) -> "Post":
        title, content = clean_fields(title, content)
        stamp = as_utc(now)
        return cls(title=title, content=content, created_at=stamp, updated_at=stamp)

    def revise(self, title: Any, content: Any, now: datetime) -> None:
        """Replace title and content wholesale and move ``updated_at`` forward."""
        title, content = clean_fields(title, content)
        previous = as_utc(self.updated_at)
        stamp = as_utc(now)
        # Clocks can repeat a reading; an update must still land strictly later.
        if stamp <= previous:
            stamp = previous + timedelta(microseconds=1)
        self.title = title
        self.content = content
        self.updated_at = stamp
