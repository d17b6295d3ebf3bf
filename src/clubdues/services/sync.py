"""Whole-roster reconciliation pass that materializes missing dues.

For every active enrollment the pass creates a record for each owed month
that has none and moves stale ``pending`` records to ``overdue``. All staged
changes go to storage in one transaction, so a failed run leaves nothing
behind and can simply be retried.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from ..domain.repositories import EnrollmentRepository, PaymentRepository
from ..logging_config import get_logger
from ..models.payment import STATUS_OVERDUE, PaymentRecord
from .months import current_month
from .obligations import classify_missing, generate, is_stale_pending
from .payments import transition_allowed

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class SyncResult:
    """Counts reported by a sync pass."""

    created: int = 0
    promoted: int = 0

    @property
    def total(self) -> int:
        return self.created + self.promoted


def run_sync_pass(
    *,
    club_id: int,
    enrollments: EnrollmentRepository,
    payments: PaymentRepository,
    today: date | None = None,
) -> SyncResult:
    """Create missing records and promote stale pending ones for the club.

    Raises PersistenceError when storage fails; nothing is written then.
    """

    current = current_month(today)
    creates: list[PaymentRecord] = []
    promotions: list[tuple[int, str, str]] = []

    for enrollment in enrollments.list_active(club_id=club_id):
        existing = payments.list_for_enrollment(enrollment.id, club_id=club_id)
        recorded = {p.month for p in existing}

        for obligation in generate(enrollment, current):
            if obligation.month in recorded:
                continue
            # Another session may have written this month since the snapshot.
            if payments.find_by_month(enrollment.id, obligation.month, club_id=club_id):
                logger.debug(
                    "Skipping month recorded concurrently",
                    extra={"enrollment_id": enrollment.id, "month": obligation.month},
                )
                continue
            creates.append(
                PaymentRecord(
                    club_id=club_id,
                    enrollment_id=enrollment.id,
                    month=obligation.month,
                    amount=obligation.expected_amount,
                    paid_on=None,
                    status=classify_missing(obligation.month, current),
                )
            )
            logger.debug(
                "Staged missing month",
                extra={"enrollment_id": enrollment.id, "month": obligation.month},
            )

        for record in existing:
            if is_stale_pending(record.status, record.month, current) and transition_allowed(
                record.status, STATUS_OVERDUE, automatic=True
            ):
                promotions.append((record.id, record.status, STATUS_OVERDUE))
                logger.debug(
                    "Staged overdue promotion",
                    extra={"payment_id": record.id, "month": record.month},
                )

    promoted = 0
    if creates or promotions:
        promoted = payments.apply_changes(
            creates=creates, status_updates=promotions, club_id=club_id
        )
        if promoted < len(promotions):
            logger.info(
                "Skipped promotions changed by another writer",
                extra={"club_id": club_id, "skipped": len(promotions) - promoted},
            )

    result = SyncResult(created=len(creates), promoted=promoted)
    logger.info(
        "Sync pass complete",
        extra={
            "club_id": club_id,
            "month": current,
            "created_count": result.created,
            "promoted_count": result.promoted,
        },
    )
    return result


__all__ = ["SyncResult", "run_sync_pass"]
