"""Club (organization) owning members, activities and dues."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import ClassVar, Optional

from sqlmodel import Field, SQLModel


class Club(SQLModel, table=True):
    """Top-level organization every other row is scoped to."""

    __tablename__: ClassVar[str] = "club"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(nullable=False, max_length=120)
    phone: str = Field(default="", max_length=32)
    email: str = Field(default="", max_length=120)
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
