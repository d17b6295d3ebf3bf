"""Enrollment of a member in a recurring activity."""

from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING, ClassVar, Optional

from sqlalchemy.orm import relationship
from sqlmodel import Field, Relationship, SQLModel

if TYPE_CHECKING:  # pragma: no cover
    from .payment import PaymentRecord

ENROLLMENT_ACTIVE = "active"
ENROLLMENT_INACTIVE = "inactive"


class Enrollment(SQLModel, table=True):
    """A (member, activity) pairing with the monthly fee currently in force."""

    __tablename__: ClassVar[str] = "enrollment"

    id: Optional[int] = Field(default=None, primary_key=True)
    club_id: int = Field(foreign_key="club.id", nullable=False, index=True)
    member_id: int = Field(foreign_key="member.id", nullable=False, index=True)
    activity_id: int = Field(foreign_key="activity.id", nullable=False, index=True)
    monthly_fee: float = Field(nullable=False, ge=0)
    start_date: date = Field(nullable=False)
    status: str = Field(default=ENROLLMENT_ACTIVE, nullable=False, max_length=16)

    # Removing an enrollment removes its payment history with it.
    payments: list["PaymentRecord"] = Relationship(
        back_populates="enrollment",
        sa_relationship=relationship(
            "PaymentRecord",
            back_populates="enrollment",
            cascade="all, delete-orphan",
        ),
    )

    @property
    def is_active(self) -> bool:
        return self.status == ENROLLMENT_ACTIVE
