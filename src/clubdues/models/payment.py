"""Persisted payment state for one month of an enrollment."""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import TYPE_CHECKING, ClassVar, Optional

from sqlalchemy import UniqueConstraint
from sqlalchemy.orm import relationship
from sqlmodel import Field, Relationship, SQLModel

if TYPE_CHECKING:  # pragma: no cover
    from .enrollment import Enrollment

STATUS_PAID = "paid"
STATUS_PENDING = "pending"
STATUS_OVERDUE = "overdue"
PAYMENT_STATUSES = (STATUS_PAID, STATUS_PENDING, STATUS_OVERDUE)


class PaymentRecord(SQLModel, table=True):
    """Dues record; at most one exists per (enrollment, month)."""

    __tablename__: ClassVar[str] = "payment_record"
    __table_args__ = (
        UniqueConstraint("enrollment_id", "month", name="uq_payment_enrollment_month"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    club_id: int = Field(foreign_key="club.id", nullable=False, index=True)
    enrollment_id: int = Field(foreign_key="enrollment.id", nullable=False, index=True)
    month: str = Field(nullable=False, max_length=7, index=True, description="YYYY-MM")
    amount: float = Field(nullable=False)
    paid_on: Optional[date] = Field(default=None)
    status: str = Field(default=STATUS_PENDING, nullable=False, max_length=16)
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    enrollment: "Enrollment" = Relationship(
        back_populates="payments",
        sa_relationship=relationship("Enrollment", back_populates="payments"),
    )
