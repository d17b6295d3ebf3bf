"""SQLModel implementation of PaymentRecord repository."""

from __future__ import annotations

from typing import Iterable, Optional

from sqlalchemy import update
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from ...errors import DuplicatePaymentError, NotFoundError, PersistenceError
from ...models.payment import PaymentRecord
from ..database import SessionFactory, storage_errors


class SQLModelPaymentRepository:
    """SQLModel-based payment record repository implementation."""

    def __init__(self, session_factory: SessionFactory):
        """Initialize with a session factory."""
        self.session_factory = session_factory

    def get_by_id(self, record_id: int, *, club_id: int) -> Optional[PaymentRecord]:
        """Retrieve a record by ID."""
        with storage_errors("loading payment"), self.session_factory() as session:
            obj = session.exec(
                select(PaymentRecord).where(
                    PaymentRecord.id == record_id, PaymentRecord.club_id == club_id
                )
            ).first()
            if obj:
                session.expunge(obj)
            return obj

    def find_by_month(
        self, enrollment_id: int, month: str, *, club_id: int
    ) -> Optional[PaymentRecord]:
        """Return the record for (enrollment, month) if one exists."""
        with storage_errors("looking up payment month"), self.session_factory() as session:
            obj = session.exec(
                select(PaymentRecord).where(
                    PaymentRecord.club_id == club_id,
                    PaymentRecord.enrollment_id == enrollment_id,
                    PaymentRecord.month == month,
                )
            ).first()
            if obj:
                session.expunge(obj)
            return obj

    def list_for_enrollment(self, enrollment_id: int, *, club_id: int) -> list[PaymentRecord]:
        """List an enrollment's records ordered by month."""
        with storage_errors("listing payments"), self.session_factory() as session:
            statement = (
                select(PaymentRecord)
                .where(PaymentRecord.club_id == club_id)
                .where(PaymentRecord.enrollment_id == enrollment_id)
                .order_by(PaymentRecord.month)  # type: ignore
            )
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def list_all(self, *, club_id: int) -> list[PaymentRecord]:
        """List every record of the club."""
        with storage_errors("listing payments"), self.session_factory() as session:
            statement = (
                select(PaymentRecord)
                .where(PaymentRecord.club_id == club_id)
                .order_by(PaymentRecord.enrollment_id, PaymentRecord.month)  # type: ignore
            )
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    @staticmethod
    def _taken_months(session: Session, rows: list[PaymentRecord]) -> list[str]:
        """Months among ``rows`` that another writer already recorded."""
        taken = []
        for record in rows:
            exists = session.exec(
                select(PaymentRecord.id).where(
                    PaymentRecord.enrollment_id == record.enrollment_id,
                    PaymentRecord.month == record.month,
                )
            ).first()
            if exists is not None:
                taken.append(record.month)
        return taken

    def create(self, record: PaymentRecord, *, club_id: int) -> PaymentRecord:
        """Insert one record; a taken month raises DuplicatePaymentError."""
        return self.create_many([record], club_id=club_id)[0]

    def create_many(
        self, records: Iterable[PaymentRecord], *, club_id: int
    ) -> list[PaymentRecord]:
        """Insert several records in a single transaction."""
        rows = list(records)
        with storage_errors("creating payments"), self.session_factory() as session:
            for record in rows:
                record.club_id = club_id
                session.add(record)
            try:
                session.commit()
            except IntegrityError as exc:
                session.rollback()
                taken = self._taken_months(session, rows)
                if not taken:
                    raise PersistenceError(f"creating payments failed: {exc}") from exc
                raise DuplicatePaymentError(
                    taken, enrollment_id=rows[0].enrollment_id if rows else None
                ) from exc
            for record in rows:
                session.refresh(record)
            session.expunge_all()
            return rows

    def update(self, record: PaymentRecord, *, club_id: int) -> PaymentRecord:
        """Persist edits to an existing record."""
        with storage_errors("updating payment"), self.session_factory() as session:
            current = session.exec(
                select(PaymentRecord).where(
                    PaymentRecord.id == record.id, PaymentRecord.club_id == club_id
                )
            ).first()
            if current is None:
                raise NotFoundError("Payment", record.id)
            current.month = record.month
            current.amount = record.amount
            current.paid_on = record.paid_on
            current.status = record.status
            session.add(current)
            try:
                session.commit()
            except IntegrityError as exc:
                session.rollback()
                raise DuplicatePaymentError(
                    [record.month], enrollment_id=record.enrollment_id
                ) from exc
            session.refresh(current)
            session.expunge(current)
            return current

    def delete(self, record_id: int, *, club_id: int) -> None:
        """Delete a record by ID."""
        with storage_errors("deleting payment"), self.session_factory() as session:
            record = session.exec(
                select(PaymentRecord).where(
                    PaymentRecord.id == record_id, PaymentRecord.club_id == club_id
                )
            ).first()
            if record:
                session.delete(record)
                session.commit()

    def apply_changes(
        self,
        *,
        creates: Iterable[PaymentRecord],
        status_updates: Iterable[tuple[int, str, str]],
        club_id: int,
    ) -> int:
        """Insert records and change statuses in one transaction.

        Each status update is ``(record_id, expected_status, new_status)`` and
        only applies while the stored status still equals ``expected_status``;
        records changed or deleted by another writer since they were read are
        left alone. Returns the number of status updates applied.

        Any failure, including a unique-month collision with a concurrent
        writer, rolls back every staged change.
        """
        with storage_errors("applying payment changes"), self.session_factory() as session:
            try:
                for record in creates:
                    record.club_id = club_id
                    session.add(record)
                applied = 0
                for record_id, expected, status in status_updates:
                    # Compare-and-set; a record another writer moved on is skipped.
                    outcome = session.execute(
                        update(PaymentRecord)
                        .where(PaymentRecord.id == record_id)
                        .where(PaymentRecord.club_id == club_id)
                        .where(PaymentRecord.status == expected)
                        .values(status=status)
                    )
                    applied += outcome.rowcount
                session.commit()
                return applied
            except Exception:
                session.rollback()
                raise


__all__ = ["SQLModelPaymentRepository"]
