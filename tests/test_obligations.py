"""Obligation generation and the missing-month status rule."""

from __future__ import annotations

from datetime import date

from clubdues.models import STATUS_OVERDUE, STATUS_PAID, STATUS_PENDING, Enrollment
from clubdues.services.obligations import classify_missing, generate, is_stale_pending


def _enrollment(start: date, fee: float = 150.0) -> Enrollment:
    return Enrollment(
        id=7, club_id=1, member_id=1, activity_id=1, monthly_fee=fee, start_date=start
    )


def test_generate_from_start_month_through_as_of():
    obligations = list(generate(_enrollment(date(2024, 1, 20)), date(2024, 4, 2)))

    assert [o.month for o in obligations] == ["2024-01", "2024-02", "2024-03", "2024-04"]
    assert all(o.expected_amount == 150.0 for o in obligations)
    assert all(o.enrollment_id == 7 for o in obligations)


def test_generate_accepts_month_key():
    months = [o.month for o in generate(_enrollment(date(2024, 11, 1)), "2025-01")]
    assert months == ["2024-11", "2024-12", "2025-01"]


def test_generate_empty_when_start_is_in_the_future():
    assert list(generate(_enrollment(date(2025, 3, 1)), date(2025, 2, 28))) == []


def test_generate_uses_current_fee_for_every_month():
    obligations = list(generate(_enrollment(date(2024, 1, 1), fee=220.0), date(2024, 3, 1)))
    assert {o.expected_amount for o in obligations} == {220.0}


def test_classify_missing():
    assert classify_missing("2024-08", "2024-09") == STATUS_OVERDUE
    assert classify_missing("2024-09", "2024-09") == STATUS_PENDING
    assert classify_missing("2024-10", "2024-09") is None


def test_is_stale_pending_only_for_past_pending_months():
    assert is_stale_pending(STATUS_PENDING, "2024-08", "2024-09")
    assert not is_stale_pending(STATUS_PENDING, "2024-09", "2024-09")
    assert not is_stale_pending(STATUS_PAID, "2024-08", "2024-09")
    assert not is_stale_pending(STATUS_OVERDUE, "2024-08", "2024-09")
