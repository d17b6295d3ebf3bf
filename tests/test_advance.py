"""Advance payment batches."""

from __future__ import annotations

from datetime import date, datetime

import pytest

from clubdues.errors import DuplicatePaymentError, ValidationError
from clubdues.models import STATUS_PAID
from clubdues.services.advance import create_batch, preview_batch, target_months

NOW = datetime(2024, 9, 15, 10, 30)


def test_target_months_span_year_end():
    assert target_months("2024-11", 4) == ["2024-11", "2024-12", "2025-01", "2025-02"]


@pytest.mark.parametrize("count", [0, -1, 13])
def test_target_months_rejects_out_of_range_counts(count):
    with pytest.raises(ValidationError):
        target_months("2024-10", count)


def test_target_months_honours_configured_maximum():
    assert len(target_months("2024-10", 18, max_months=24)) == 18
    with pytest.raises(ValidationError):
        target_months("2024-10", 4, max_months=3)


def test_preview_batch_totals(enrollment_factory):
    enrollment = enrollment_factory(monthly_fee=175.5)

    rows, total = preview_batch(enrollment, "2024-12", 3, locale="en")

    assert [label for _, label, _ in rows] == ["December 2024", "January 2025", "February 2025"]
    assert total == 526.5


def test_create_batch_records_paid_months(enrollment_factory, payment_repo, club_id):
    enrollment = enrollment_factory(monthly_fee=200.0, start_date=date(2024, 6, 1))

    created = create_batch(enrollment, "2024-10", 3, payments=payment_repo, now=NOW)

    assert [r.month for r in created] == ["2024-10", "2024-11", "2024-12"]
    stored = payment_repo.list_for_enrollment(enrollment.id, club_id=club_id)
    assert len(stored) == 3
    assert all(r.status == STATUS_PAID for r in stored)
    assert all(r.paid_on == date(2024, 9, 15) for r in stored)
    assert all(r.amount == 200.0 for r in stored)
    assert all(r.id is not None for r in created)


def test_conflict_rejects_whole_batch(enrollment_factory, payment_factory, payment_repo, club_id):
    enrollment = enrollment_factory(start_date=date(2024, 6, 1))
    payment_factory(enrollment, "2024-12", status=STATUS_PAID, paid_on=date(2024, 9, 1))

    with pytest.raises(DuplicatePaymentError) as excinfo:
        create_batch(enrollment, "2024-10", 5, payments=payment_repo, now=NOW)

    assert excinfo.value.months == ["2024-12"]
    assert "2024-12" in str(excinfo.value)
    months = [p.month for p in payment_repo.list_for_enrollment(enrollment.id, club_id=club_id)]
    assert months == ["2024-12"]


def test_conflict_error_lists_every_taken_month(enrollment_factory, payment_factory, payment_repo):
    enrollment = enrollment_factory(start_date=date(2024, 6, 1))
    payment_factory(enrollment, "2024-10")
    payment_factory(enrollment, "2025-01", status=STATUS_PAID, paid_on=date(2024, 9, 1))

    with pytest.raises(DuplicatePaymentError) as excinfo:
        create_batch(enrollment, "2024-10", 6, payments=payment_repo, now=NOW)

    assert excinfo.value.months == ["2024-10", "2025-01"]
    assert excinfo.value.enrollment_id == enrollment.id


def test_batch_before_start_date_is_allowed(enrollment_factory, payment_repo):
    enrollment = enrollment_factory(start_date=date(2025, 1, 1))

    created = create_batch(enrollment, "2024-12", 2, payments=payment_repo, now=NOW)

    assert [r.month for r in created] == ["2024-12", "2025-01"]


def test_context_batch_uses_configured_limit(dues, enrollment_factory):
    enrollment = enrollment_factory()
    dues.config.ADVANCE_MAX_MONTHS = 2

    with pytest.raises(ValidationError):
        dues.create_advance_batch(enrollment.id, "2024-10", 3, now=NOW)

    created = dues.create_advance_batch(enrollment.id, "2024-10", 2, now=NOW)
    assert len(created) == 2
