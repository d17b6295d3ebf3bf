"""Application context: repositories wired to the dues operations."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Optional

from .config import BaseConfig
from .errors import NotFoundError
from .infra.database import SessionFactory, bootstrap_database
from .infra.repositories import (
    SQLModelEnrollmentRepository,
    SQLModelPaymentRepository,
    SQLModelSettingsRepository,
)
from .models.enrollment import Enrollment
from .models.payment import STATUS_PAID, PaymentRecord
from .scheduler import SyncScheduler, create_scheduler
from .services import advance, payments, reconcile, stats
from .services.sync import SyncResult


@dataclass
class DuesContext:
    """Entry point the UI/CLI layer calls into, scoped to one club."""

    config: BaseConfig
    club_id: int
    session_factory: SessionFactory

    enrollment_repo: SQLModelEnrollmentRepository
    payment_repo: SQLModelPaymentRepository
    settings_repo: SQLModelSettingsRepository
    scheduler: SyncScheduler

    def require_enrollment(self, enrollment_id: int) -> Enrollment:
        """Return the enrollment or raise NotFoundError."""
        enrollment = self.enrollment_repo.get_by_id(enrollment_id, club_id=self.club_id)
        if enrollment is None:
            raise NotFoundError("Enrollment", enrollment_id)
        return enrollment

    # Read path

    def build_ledger(self, enrollment_id: int, as_of: date | None = None) -> list[reconcile.LedgerEntry]:
        enrollment = self.require_enrollment(enrollment_id)
        records = self.payment_repo.list_for_enrollment(enrollment_id, club_id=self.club_id)
        return reconcile.reconcile(enrollment, records, as_of, locale=self.config.LOCALE)

    def upcoming(
        self, enrollment_id: int, as_of: date | None = None, *, months: int = 3
    ) -> list[reconcile.LedgerEntry]:
        enrollment = self.require_enrollment(enrollment_id)
        records = self.payment_repo.list_for_enrollment(enrollment_id, club_id=self.club_id)
        return reconcile.upcoming(
            enrollment, records, as_of, months=months, locale=self.config.LOCALE
        )

    def enrollment_totals(self, enrollment_id: int, as_of: date | None = None) -> stats.DuesTotals:
        enrollment = self.require_enrollment(enrollment_id)
        records = self.payment_repo.list_for_enrollment(enrollment_id, club_id=self.club_id)
        return stats.enrollment_totals(enrollment, records, as_of)

    def summary(self, as_of: date | None = None) -> stats.ClubSummary:
        return stats.club_summary(self.payment_repo.list_all(club_id=self.club_id), as_of)

    def monthly_revenue(
        self, as_of: date | None = None, *, months: int = 6
    ) -> list[tuple[str, float]]:
        return stats.monthly_revenue(
            self.payment_repo.list_all(club_id=self.club_id), as_of, months=months
        )

    # Write paths

    def run_sync(self, force: bool = False, today: date | None = None) -> Optional[SyncResult]:
        """Run the daily sync; ``None`` when it already ran today and ``force`` is off."""
        if force:
            return self.scheduler.force(self.club_id, today)
        return self.scheduler.run_if_due(self.club_id, today)

    def create_advance_batch(
        self,
        enrollment_id: int,
        start_month: str,
        count: int,
        *,
        now: datetime | None = None,
    ) -> list[PaymentRecord]:
        enrollment = self.require_enrollment(enrollment_id)
        return advance.create_batch(
            enrollment,
            start_month,
            count,
            payments=self.payment_repo,
            now=now,
            max_months=self.config.ADVANCE_MAX_MONTHS,
        )

    def add_payment(
        self,
        enrollment_id: int,
        month: str,
        amount: float | None = None,
        status: str = STATUS_PAID,
        paid_on: date | None = None,
        *,
        today: date | None = None,
    ) -> PaymentRecord:
        """Record one month; ``amount`` defaults to the enrollment's fee."""
        enrollment = self.require_enrollment(enrollment_id)
        return payments.add_payment(
            enrollment,
            month,
            enrollment.monthly_fee if amount is None else amount,
            status,
            paid_on,
            payments=self.payment_repo,
            today=today,
        )

    def edit_payment(self, record_id: int, **changes: Any) -> PaymentRecord:
        return payments.edit_payment(
            record_id, payments=self.payment_repo, club_id=self.club_id, **changes
        )

    def mark_paid(
        self, record_id: int, paid_on: date | None = None, *, today: date | None = None
    ) -> PaymentRecord:
        return payments.mark_paid(
            record_id,
            payments=self.payment_repo,
            club_id=self.club_id,
            paid_on=paid_on,
            today=today,
        )

    def delete_payment(self, record_id: int) -> PaymentRecord:
        return payments.delete_payment(
            record_id, payments=self.payment_repo, club_id=self.club_id
        )


def create_context(
    config: Optional[BaseConfig] = None,
    *,
    session_factory: SessionFactory | None = None,
    club_id: int | None = None,
) -> DuesContext:
    """Create and initialize the dues context.

    A ``session_factory`` may be supplied (tests do); otherwise the engine is
    built from ``config`` and the schema is created if missing.
    """

    if config is None:
        config = BaseConfig()

    if session_factory is None:
        _, session_factory = bootstrap_database(config)

    enrollment_repo = SQLModelEnrollmentRepository(session_factory)
    payment_repo = SQLModelPaymentRepository(session_factory)
    settings_repo = SQLModelSettingsRepository(session_factory)

    return DuesContext(
        config=config,
        club_id=config.CLUB_ID if club_id is None else club_id,
        session_factory=session_factory,
        enrollment_repo=enrollment_repo,
        payment_repo=payment_repo,
        settings_repo=settings_repo,
        scheduler=create_scheduler(
            enrollments=enrollment_repo,
            payments=payment_repo,
            settings=settings_repo,
        ),
    )
