"""Monthly obligations derived from an enrollment.

Obligations are never persisted; they are recomputed from the enrollment's
start date and current fee every time a ledger is built or a sync runs.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Iterator, Optional

from ..models.enrollment import Enrollment
from ..models.payment import STATUS_OVERDUE, STATUS_PENDING
from .months import compare, current_month, month_of, month_range


@dataclass(frozen=True, slots=True)
class Obligation:
    """Amount due for one month of one enrollment."""

    enrollment_id: int
    month: str
    expected_amount: float


def generate(enrollment: Enrollment, as_of: date | str | None = None) -> Iterator[Obligation]:
    """Yield obligations from the enrollment's start month through ``as_of``.

    ``as_of`` may be a date or a month key; it defaults to today. The
    sequence is empty when the enrollment starts after ``as_of``.
    """

    end = as_of if isinstance(as_of, str) else current_month(as_of)
    fee = float(enrollment.monthly_fee)
    for month in month_range(month_of(enrollment.start_date), end):
        yield Obligation(enrollment_id=enrollment.id, month=month, expected_amount=fee)


def classify_missing(month: str, current: str) -> Optional[str]:
    """Status of a month that has no payment record yet.

    Past months are overdue, the current month is pending, and later months
    are not due at all (``None``). The ledger and the sync pass both rely on
    this rule so display and storage always agree.
    """

    order = compare(month, current)
    if order < 0:
        return STATUS_OVERDUE
    if order == 0:
        return STATUS_PENDING
    return None


def is_stale_pending(status: str, month: str, current: str) -> bool:
    """True for a pending record whose month has already ended."""

    return status == STATUS_PENDING and classify_missing(month, current) == STATUS_OVERDUE


__all__ = ["Obligation", "classify_missing", "generate", "is_stale_pending"]
