"""Dues totals for member profiles and the club dashboard."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Iterable

from ..models.enrollment import Enrollment
from ..models.payment import STATUS_OVERDUE, STATUS_PAID, STATUS_PENDING, PaymentRecord
from .months import add_months, current_month
from .reconcile import reconcile


@dataclass(slots=True)
class DuesTotals:
    """Amounts per status for one enrollment's ledger."""

    paid: float = 0.0
    pending: float = 0.0
    overdue: float = 0.0
    expected: float = 0.0

    @property
    def outstanding(self) -> float:
        return round(self.pending + self.overdue, 2)


@dataclass(slots=True)
class ClubSummary:
    """Headline figures for the whole club."""

    collected_this_month: float
    pending_count: int
    overdue_count: int
    total_revenue: float


def enrollment_totals(
    enrollment: Enrollment, payments: Iterable[PaymentRecord], as_of: date | None = None
) -> DuesTotals:
    """Sum the reconciled ledger by status.

    Months with no record yet count at the expected amount under their
    derived status.
    """

    totals = DuesTotals()
    for entry in reconcile(enrollment, payments, as_of):
        totals.expected += entry.expected_amount
        if entry.status == STATUS_PAID:
            totals.paid += entry.amount
        elif entry.status == STATUS_PENDING:
            totals.pending += entry.amount
        elif entry.status == STATUS_OVERDUE:
            totals.overdue += entry.amount
    totals.paid = round(totals.paid, 2)
    totals.pending = round(totals.pending, 2)
    totals.overdue = round(totals.overdue, 2)
    totals.expected = round(totals.expected, 2)
    return totals


def club_summary(records: Iterable[PaymentRecord], as_of: date | None = None) -> ClubSummary:
    """Collected this month, open counts and lifetime revenue from stored records."""

    current = current_month(as_of)
    collected = 0.0
    revenue = 0.0
    pending = 0
    overdue = 0
    for record in records:
        if record.status == STATUS_PAID:
            revenue += record.amount
            if record.month == current:
                collected += record.amount
        elif record.status == STATUS_PENDING:
            pending += 1
        elif record.status == STATUS_OVERDUE:
            overdue += 1
    return ClubSummary(
        collected_this_month=round(collected, 2),
        pending_count=pending,
        overdue_count=overdue,
        total_revenue=round(revenue, 2),
    )


def monthly_revenue(
    records: Iterable[PaymentRecord], as_of: date | None = None, *, months: int = 6
) -> list[tuple[str, float]]:
    """Paid amounts per month for the last ``months`` months, oldest first."""

    current = current_month(as_of)
    window = [add_months(current, -offset) for offset in range(max(months, 0) - 1, -1, -1)]
    buckets = {month: 0.0 for month in window}
    for record in records:
        if record.status == STATUS_PAID and record.month in buckets:
            buckets[record.month] += record.amount
    return [(month, round(buckets[month], 2)) for month in window]


__all__ = [
    "ClubSummary",
    "DuesTotals",
    "club_summary",
    "enrollment_totals",
    "monthly_revenue",
]
