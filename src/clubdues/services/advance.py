"""Advance payments: several months recorded as paid in one go."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from ..domain.repositories import PaymentRepository
from ..errors import DuplicatePaymentError, ValidationError
from ..logging_config import get_logger
from ..models.enrollment import Enrollment
from ..models.payment import STATUS_PAID, PaymentRecord
from .months import add_months, format_month, parse_month

logger = get_logger(__name__)

DEFAULT_MAX_MONTHS = 12


def target_months(start_month: str, count: int, *, max_months: int = DEFAULT_MAX_MONTHS) -> list[str]:
    """Return the ``count`` consecutive months starting at ``start_month``."""

    parse_month(start_month)
    if not 1 <= count <= max_months:
        raise ValidationError(f"Number of months must be between 1 and {max_months}, got {count}")
    return [add_months(start_month, i) for i in range(count)]


def preview_batch(
    enrollment: Enrollment,
    start_month: str,
    count: int,
    *,
    max_months: int = DEFAULT_MAX_MONTHS,
    locale: str = "fr",
) -> tuple[list[tuple[str, str, float]], float]:
    """Return ``([(month, label, amount), ...], total)`` for a prospective batch."""

    fee = float(enrollment.monthly_fee)
    rows = [
        (month, format_month(month, locale), fee)
        for month in target_months(start_month, count, max_months=max_months)
    ]
    return rows, round(fee * len(rows), 2)


def create_batch(
    enrollment: Enrollment,
    start_month: str,
    count: int,
    *,
    payments: PaymentRepository,
    now: Optional[datetime] = None,
    max_months: int = DEFAULT_MAX_MONTHS,
) -> list[PaymentRecord]:
    """Record ``count`` months starting at ``start_month`` as paid.

    The whole batch is rejected, naming every conflicting month, if any
    target month already has a record. Nothing is written in that case.
    """

    months = target_months(start_month, count, max_months=max_months)
    club_id = enrollment.club_id

    conflicts = [
        month
        for month in months
        if payments.find_by_month(enrollment.id, month, club_id=club_id) is not None
    ]
    if conflicts:
        logger.info(
            "Advance batch rejected",
            extra={"enrollment_id": enrollment.id, "conflicts": conflicts},
        )
        raise DuplicatePaymentError(conflicts, enrollment_id=enrollment.id)

    paid_on = (now or datetime.now()).date()
    fee = float(enrollment.monthly_fee)
    records = [
        PaymentRecord(
            club_id=club_id,
            enrollment_id=enrollment.id,
            month=month,
            amount=fee,
            paid_on=paid_on,
            status=STATUS_PAID,
        )
        for month in months
    ]
    created = payments.create_many(records, club_id=club_id)
    logger.info(
        "Advance batch recorded",
        extra={"enrollment_id": enrollment.id, "months": months, "total": fee * len(months)},
    )
    return created


__all__ = ["DEFAULT_MAX_MONTHS", "create_batch", "preview_batch", "target_months"]
