"""Ledger reconciliation tests."""

from __future__ import annotations

from datetime import date

from clubdues.models import STATUS_OVERDUE, STATUS_PAID, STATUS_PENDING, Enrollment, PaymentRecord
from clubdues.services.reconcile import STATUS_UPCOMING, reconcile, upcoming


def _enrollment() -> Enrollment:
    return Enrollment(
        id=3, club_id=1, member_id=1, activity_id=1, monthly_fee=200.0, start_date=date(2024, 6, 1)
    )


def _record(month: str, status: str, amount: float = 200.0, paid_on: date | None = None) -> PaymentRecord:
    return PaymentRecord(
        id=int(month.replace("-", "")), club_id=1, enrollment_id=3, month=month,
        amount=amount, status=status, paid_on=paid_on,
    )


def test_reconcile_without_records_derives_statuses():
    ledger = reconcile(_enrollment(), [], date(2024, 9, 15))

    assert [e.month for e in ledger] == ["2024-06", "2024-07", "2024-08", "2024-09"]
    assert [e.status for e in ledger] == [STATUS_OVERDUE] * 3 + [STATUS_PENDING]
    assert all(e.is_auto_generated for e in ledger)
    assert all(e.amount == 200.0 for e in ledger)
    assert ledger[-1].label == "septembre 2024"


def test_recorded_months_keep_their_own_status_and_amount():
    paid = _record("2024-07", STATUS_PAID, amount=180.0, paid_on=date(2024, 7, 3))
    ledger = reconcile(_enrollment(), [paid], date(2024, 9, 15), locale="en")

    july = next(e for e in ledger if e.month == "2024-07")
    assert july.status == STATUS_PAID
    assert july.amount == 180.0
    assert july.expected_amount == 200.0
    assert july.paid_on == date(2024, 7, 3)
    assert not july.is_auto_generated
    assert july.label == "July 2024"


def test_pending_record_is_shown_as_stored():
    # Display follows the stored status; promotion is the sync pass's job.
    stale = _record("2024-06", STATUS_PENDING)
    ledger = reconcile(_enrollment(), [stale], date(2024, 9, 15))
    assert ledger[0].status == STATUS_PENDING


def test_records_of_other_enrollments_are_ignored():
    foreign = PaymentRecord(
        id=99, club_id=1, enrollment_id=4, month="2024-06", amount=1.0, status=STATUS_PAID
    )
    ledger = reconcile(_enrollment(), [foreign], date(2024, 6, 10))
    assert ledger[0].record is None
    assert ledger[0].status == STATUS_PENDING


def test_ledger_empty_before_start():
    assert reconcile(_enrollment(), [], date(2024, 5, 31)) == []


def test_upcoming_preview_tags_future_months():
    advance = _record("2024-11", STATUS_PAID, paid_on=date(2024, 9, 1))
    preview = upcoming(_enrollment(), [advance], date(2024, 9, 15), months=3)

    assert [e.month for e in preview] == ["2024-10", "2024-11", "2024-12"]
    assert [e.status for e in preview] == [STATUS_UPCOMING, STATUS_PAID, STATUS_UPCOMING]
    assert preview[1].record is advance
