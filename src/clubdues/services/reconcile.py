"""Display ledger: obligations merged with recorded payments."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Iterable, Optional

from ..models.enrollment import Enrollment
from ..models.payment import PaymentRecord
from .months import add_months, current_month, format_month
from .obligations import classify_missing, generate

# Tag for preview months that are not due yet; never stored on a record.
STATUS_UPCOMING = "upcoming"


@dataclass(slots=True)
class LedgerEntry:
    """One month of an enrollment as shown to the user."""

    month: str
    label: str
    status: str
    expected_amount: float
    record: Optional[PaymentRecord] = None
    is_auto_generated: bool = False

    @property
    def amount(self) -> float:
        return self.record.amount if self.record is not None else self.expected_amount

    @property
    def paid_on(self) -> Optional[date]:
        return self.record.paid_on if self.record is not None else None


def _by_month(enrollment: Enrollment, payments: Iterable[PaymentRecord]) -> dict[str, PaymentRecord]:
    return {p.month: p for p in payments if p.enrollment_id == enrollment.id}


def reconcile(
    enrollment: Enrollment,
    payments: Iterable[PaymentRecord],
    as_of: date | None = None,
    *,
    locale: str = "fr",
) -> list[LedgerEntry]:
    """Build the ledger from the start month through ``as_of``'s month.

    Months backed by a record show the record's own status. Missing months
    get a derived status (overdue for past months, pending for the current
    one) and are flagged ``is_auto_generated``.
    """

    current = current_month(as_of)
    recorded = _by_month(enrollment, payments)
    ledger: list[LedgerEntry] = []
    for obligation in generate(enrollment, current):
        record = recorded.get(obligation.month)
        if record is not None:
            status = record.status
        else:
            status = classify_missing(obligation.month, current)
        ledger.append(
            LedgerEntry(
                month=obligation.month,
                label=format_month(obligation.month, locale),
                status=status,
                expected_amount=obligation.expected_amount,
                record=record,
                is_auto_generated=record is None,
            )
        )
    return ledger


def upcoming(
    enrollment: Enrollment,
    payments: Iterable[PaymentRecord],
    as_of: date | None = None,
    *,
    months: int = 3,
    locale: str = "fr",
) -> list[LedgerEntry]:
    """Forward preview of the ``months`` months after ``as_of``.

    Months already paid in advance keep their record; the rest carry the
    ``upcoming`` tag rather than one of the real statuses.
    """

    current = current_month(as_of)
    recorded = _by_month(enrollment, payments)
    fee = float(enrollment.monthly_fee)
    preview: list[LedgerEntry] = []
    for offset in range(1, max(months, 0) + 1):
        month = add_months(current, offset)
        record = recorded.get(month)
        preview.append(
            LedgerEntry(
                month=month,
                label=format_month(month, locale),
                status=record.status if record is not None else STATUS_UPCOMING,
                expected_amount=fee,
                record=record,
                is_auto_generated=record is None,
            )
        )
    return preview


__all__ = ["LedgerEntry", "STATUS_UPCOMING", "reconcile", "upcoming"]
