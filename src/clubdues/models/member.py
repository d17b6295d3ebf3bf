"""Roster entities: members and the activities they enroll in."""

from __future__ import annotations

from datetime import date
from typing import ClassVar, Optional

from sqlmodel import Field, SQLModel

MEMBER_ACTIVE = "active"
MEMBER_INACTIVE = "inactive"


class Member(SQLModel, table=True):
    """A person on the club roster."""

    __tablename__: ClassVar[str] = "member"

    id: Optional[int] = Field(default=None, primary_key=True)
    club_id: int = Field(foreign_key="club.id", nullable=False, index=True)
    name: str = Field(nullable=False, max_length=120, index=True)
    phone: str = Field(default="", max_length=32)
    birth_date: Optional[date] = Field(default=None)
    status: str = Field(default=MEMBER_ACTIVE, nullable=False, max_length=16)
    deactivated_on: Optional[date] = Field(default=None)


class Activity(SQLModel, table=True):
    """A recurring activity (sport, class) members pay monthly dues for."""

    __tablename__: ClassVar[str] = "activity"

    id: Optional[int] = Field(default=None, primary_key=True)
    club_id: int = Field(foreign_key="club.id", nullable=False, index=True)
    name: str = Field(nullable=False, max_length=80)
