"""Manual payment entry, editing and deletion.

Every path here checks the (enrollment, month) uniqueness against the
payment store before writing, the same way the sync pass and advance
batches do.

Status machine::

    pending --(automatic, month ended)--> overdue
    pending/overdue --(manual)--> paid         sets paid_on
    paid --(manual)--> pending/overdue         clears paid_on

Nothing ever leaves ``paid`` automatically.
"""

from __future__ import annotations

from datetime import date
from typing import Optional

from ..domain.repositories import PaymentRepository
from ..errors import DuplicatePaymentError, NotFoundError, ValidationError
from ..logging_config import get_logger
from ..models.enrollment import Enrollment
from ..models.payment import (
    PAYMENT_STATUSES,
    STATUS_OVERDUE,
    STATUS_PAID,
    STATUS_PENDING,
    PaymentRecord,
)
from .months import parse_month

logger = get_logger(__name__)

_AUTOMATIC_TRANSITIONS = {(STATUS_PENDING, STATUS_OVERDUE)}


def transition_allowed(old: str, new: str, *, automatic: bool = False) -> bool:
    """Whether a record may move from ``old`` to ``new``."""

    if old not in PAYMENT_STATUSES or new not in PAYMENT_STATUSES:
        return False
    if automatic:
        return (old, new) in _AUTOMATIC_TRANSITIONS
    return True


def _validate_status(status: str) -> str:
    normalized = (status or "").strip().lower()
    if normalized not in PAYMENT_STATUSES:
        raise ValidationError(
            f"Invalid status {status!r}; expected one of {', '.join(PAYMENT_STATUSES)}"
        )
    return normalized


def _validate_amount(amount: float) -> float:
    try:
        value = float(amount)
    except (TypeError, ValueError) as exc:
        raise ValidationError(f"Amount must be numeric, got {amount!r}") from exc
    if value < 0:
        raise ValidationError("Amount must be zero or positive")
    return value


def _require(payments: PaymentRepository, record_id: int, club_id: int) -> PaymentRecord:
    record = payments.get_by_id(record_id, club_id=club_id)
    if record is None:
        raise NotFoundError("Payment", record_id)
    return record


def add_payment(
    enrollment: Enrollment,
    month: str,
    amount: float,
    status: str = STATUS_PAID,
    paid_on: Optional[date] = None,
    *,
    payments: PaymentRepository,
    today: date | None = None,
) -> PaymentRecord:
    """Record a single month by hand; rejects a month that already has a record."""

    parse_month(month)
    status = _validate_status(status)
    value = _validate_amount(amount)

    existing = payments.find_by_month(enrollment.id, month, club_id=enrollment.club_id)
    if existing is not None:
        raise DuplicatePaymentError([month], enrollment_id=enrollment.id)

    record = PaymentRecord(
        club_id=enrollment.club_id,
        enrollment_id=enrollment.id,
        month=month,
        amount=value,
        status=status,
        paid_on=(paid_on or today or date.today()) if status == STATUS_PAID else None,
    )
    created = payments.create(record, club_id=enrollment.club_id)
    logger.info(
        "Payment added",
        extra={"enrollment_id": enrollment.id, "month": month, "status": status},
    )
    return created


def edit_payment(
    record_id: int,
    *,
    payments: PaymentRepository,
    club_id: int,
    month: Optional[str] = None,
    amount: Optional[float] = None,
    status: Optional[str] = None,
    paid_on: Optional[date] = None,
    today: date | None = None,
) -> PaymentRecord:
    """Edit fields of an existing record.

    Moving the record to another month re-checks uniqueness, ignoring the
    record itself. Entering ``paid`` sets the payment date; leaving it
    clears the date.
    """

    record = _require(payments, record_id, club_id)

    if month is not None and month != record.month:
        parse_month(month)
        other = payments.find_by_month(record.enrollment_id, month, club_id=club_id)
        if other is not None and other.id != record.id:
            raise DuplicatePaymentError([month], enrollment_id=record.enrollment_id)
        record.month = month

    if amount is not None:
        record.amount = _validate_amount(amount)

    new_status = _validate_status(status) if status is not None else record.status
    if not transition_allowed(record.status, new_status):
        raise ValidationError(f"Cannot change status from {record.status} to {new_status}")
    if new_status == STATUS_PAID:
        if paid_on is not None:
            record.paid_on = paid_on
        elif record.status != STATUS_PAID or record.paid_on is None:
            record.paid_on = today or date.today()
    else:
        record.paid_on = None
    previous_status = record.status
    record.status = new_status

    updated = payments.update(record, club_id=club_id)
    logger.info(
        "Payment edited",
        extra={
            "payment_id": record_id,
            "month": updated.month,
            "from_status": previous_status,
            "to_status": new_status,
        },
    )
    return updated


def mark_paid(
    record_id: int,
    *,
    payments: PaymentRepository,
    club_id: int,
    paid_on: Optional[date] = None,
    today: date | None = None,
) -> PaymentRecord:
    """Settle a pending or overdue record."""

    return edit_payment(
        record_id,
        payments=payments,
        club_id=club_id,
        status=STATUS_PAID,
        paid_on=paid_on,
        today=today,
    )


def delete_payment(record_id: int, *, payments: PaymentRepository, club_id: int) -> PaymentRecord:
    """Delete a record. A still-due month comes back on the next sync pass."""

    record = _require(payments, record_id, club_id)
    payments.delete(record_id, club_id=club_id)
    logger.info(
        "Payment deleted",
        extra={"payment_id": record_id, "enrollment_id": record.enrollment_id, "month": record.month},
    )
    return record


__all__ = [
    "add_payment",
    "delete_payment",
    "edit_payment",
    "mark_paid",
    "transition_allowed",
]
