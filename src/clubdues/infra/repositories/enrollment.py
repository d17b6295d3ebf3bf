"""SQLModel implementation of Enrollment repository."""

from __future__ import annotations

from typing import Optional

from sqlmodel import Session, select

from ...errors import NotFoundError, ValidationError
from ...models.enrollment import ENROLLMENT_ACTIVE, ENROLLMENT_INACTIVE, Enrollment
from ...models.member import MEMBER_ACTIVE, Member
from ..database import SessionFactory, storage_errors


class SQLModelEnrollmentRepository:
    """SQLModel-based enrollment repository implementation."""

    def __init__(self, session_factory: SessionFactory):
        """Initialize with a session factory."""
        self.session_factory = session_factory

    def _load(self, session: Session, enrollment_id: int, club_id: int) -> Enrollment:
        enrollment = session.exec(
            select(Enrollment).where(Enrollment.id == enrollment_id, Enrollment.club_id == club_id)
        ).first()
        if enrollment is None:
            raise NotFoundError("Enrollment", enrollment_id)
        return enrollment

    def get_by_id(self, enrollment_id: int, *, club_id: int) -> Optional[Enrollment]:
        """Retrieve an enrollment by ID."""
        with storage_errors("loading enrollment"), self.session_factory() as session:
            obj = session.exec(
                select(Enrollment).where(
                    Enrollment.id == enrollment_id, Enrollment.club_id == club_id
                )
            ).first()
            if obj:
                session.expunge(obj)
            return obj

    def list_all(self, *, club_id: int) -> list[Enrollment]:
        """List every enrollment of the club."""
        with storage_errors("listing enrollments"), self.session_factory() as session:
            statement = (
                select(Enrollment)
                .where(Enrollment.club_id == club_id)
                .order_by(Enrollment.id)  # type: ignore
            )
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def list_active(self, *, club_id: int) -> list[Enrollment]:
        """List active enrollments whose member is also active."""
        with storage_errors("listing active enrollments"), self.session_factory() as session:
            statement = (
                select(Enrollment)
                .join(Member, Member.id == Enrollment.member_id)  # type: ignore[arg-type]
                .where(Enrollment.club_id == club_id)
                .where(Enrollment.status == ENROLLMENT_ACTIVE)
                .where(Member.status == MEMBER_ACTIVE)
                .order_by(Enrollment.id)  # type: ignore
            )
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def create(self, enrollment: Enrollment, *, club_id: int) -> Enrollment:
        """Create a new enrollment."""
        if enrollment.monthly_fee is None or enrollment.monthly_fee < 0:
            raise ValidationError("Monthly fee must be zero or positive")
        with storage_errors("creating enrollment"), self.session_factory() as session:
            enrollment.club_id = club_id
            session.add(enrollment)
            session.commit()
            session.refresh(enrollment)
            session.expunge(enrollment)
            return enrollment

    def update_fee(self, enrollment_id: int, monthly_fee: float, *, club_id: int) -> Enrollment:
        """Change the fee; already persisted payment records keep their amount."""
        if monthly_fee < 0:
            raise ValidationError("Monthly fee must be zero or positive")
        with storage_errors("updating enrollment fee"), self.session_factory() as session:
            enrollment = self._load(session, enrollment_id, club_id)
            enrollment.monthly_fee = float(monthly_fee)
            session.add(enrollment)
            session.commit()
            session.refresh(enrollment)
            session.expunge(enrollment)
            return enrollment

    def deactivate(self, enrollment_id: int, *, club_id: int) -> Enrollment:
        """Mark an enrollment inactive so the sync pass skips it."""
        with storage_errors("deactivating enrollment"), self.session_factory() as session:
            enrollment = self._load(session, enrollment_id, club_id)
            enrollment.status = ENROLLMENT_INACTIVE
            session.add(enrollment)
            session.commit()
            session.refresh(enrollment)
            session.expunge(enrollment)
            return enrollment

    def delete(self, enrollment_id: int, *, club_id: int) -> None:
        """Delete an enrollment; its payment records go in the same transaction."""
        with storage_errors("deleting enrollment"), self.session_factory() as session:
            enrollment = self._load(session, enrollment_id, club_id)
            session.delete(enrollment)
            session.commit()


__all__ = ["SQLModelEnrollmentRepository"]
