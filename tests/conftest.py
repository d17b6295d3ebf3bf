"""Pytest configuration and shared fixtures for ClubDues tests.

Database fixtures, roster factories and repository fixtures for testing the
dues engine without touching the real app database.
"""

from __future__ import annotations

import tempfile
from datetime import date
from pathlib import Path

import pytest
from sqlmodel import Session, SQLModel, create_engine

from clubdues.config import TestConfig
from clubdues.context import create_context
from clubdues.infra.repositories import (
    SQLModelEnrollmentRepository,
    SQLModelPaymentRepository,
    SQLModelSettingsRepository,
)

# Import all models to ensure they're registered with SQLModel metadata
from clubdues.models import (
    MEMBER_ACTIVE,
    STATUS_PENDING,
    Activity,
    Club,
    Enrollment,
    Member,
    PaymentRecord,
)

# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture(scope="function")
def db_engine():
    """Create an isolated SQLite database file for each test.

    Yields:
        Engine: SQLModel engine connected to test database
    """
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        db_path = Path(f.name)

    engine = create_engine(f"sqlite:///{db_path}", echo=False)
    SQLModel.metadata.create_all(engine)

    yield engine

    engine.dispose()
    db_path.unlink(missing_ok=True)


@pytest.fixture(scope="function")
def db_session(db_engine):
    """Session used by the factories to seed rows."""
    session = Session(db_engine, expire_on_commit=False)
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


@pytest.fixture(scope="function")
def session_factory(db_engine):
    """Session factory matching what the repositories expect.

    A default club is bootstrapped and exposed as ``factory.club_id``.
    """

    def factory():
        return Session(db_engine, expire_on_commit=False)

    with factory() as session:
        club = Club(name="Club Atlas")
        session.add(club)
        session.commit()
        session.refresh(club)
        factory.club_id = club.id  # type: ignore[attr-defined]

    return factory


@pytest.fixture
def club_id(session_factory) -> int:
    return session_factory.club_id  # type: ignore[attr-defined]


# =============================================================================
# Repository Fixtures
# =============================================================================


@pytest.fixture
def payment_repo(session_factory) -> SQLModelPaymentRepository:
    return SQLModelPaymentRepository(session_factory)


@pytest.fixture
def enrollment_repo(session_factory) -> SQLModelEnrollmentRepository:
    return SQLModelEnrollmentRepository(session_factory)


@pytest.fixture
def settings_repo(session_factory) -> SQLModelSettingsRepository:
    return SQLModelSettingsRepository(session_factory)


@pytest.fixture
def dues(session_factory, club_id, tmp_path):
    """Fully wired context on the test database."""
    config = TestConfig(data_dir=tmp_path / "instance")
    return create_context(config, session_factory=session_factory, club_id=club_id)


# =============================================================================
# Test Data Factories
# =============================================================================


@pytest.fixture
def member_factory(db_session, club_id):
    """Factory for creating roster members."""

    def _create_member(name: str = "Yassine B.", status: str = MEMBER_ACTIVE) -> Member:
        member = Member(club_id=club_id, name=name, phone="0600000000", status=status)
        db_session.add(member)
        db_session.commit()
        db_session.refresh(member)
        return member

    return _create_member


@pytest.fixture
def activity_factory(db_session, club_id):
    """Factory for creating activities."""

    def _create_activity(name: str = "Judo") -> Activity:
        activity = Activity(club_id=club_id, name=name)
        db_session.add(activity)
        db_session.commit()
        db_session.refresh(activity)
        return activity

    return _create_activity


@pytest.fixture
def enrollment_factory(db_session, club_id, member_factory, activity_factory):
    """Factory for creating enrollments; a member and activity are created when omitted.

    Returns:
        Callable: Function that creates and persists Enrollment instances
    """

    def _create_enrollment(
        monthly_fee: float = 200.0,
        start_date: date = date(2024, 6, 1),
        member: Member | None = None,
        activity: Activity | None = None,
        status: str = "active",
    ) -> Enrollment:
        member = member or member_factory()
        activity = activity or activity_factory()
        enrollment = Enrollment(
            club_id=club_id,
            member_id=member.id,
            activity_id=activity.id,
            monthly_fee=monthly_fee,
            start_date=start_date,
            status=status,
        )
        db_session.add(enrollment)
        db_session.commit()
        db_session.refresh(enrollment)
        db_session.expunge(enrollment)
        return enrollment

    return _create_enrollment


@pytest.fixture
def payment_factory(db_session, club_id):
    """Factory for inserting payment records directly."""

    def _create_payment(
        enrollment: Enrollment,
        month: str,
        status: str = STATUS_PENDING,
        amount: float | None = None,
        paid_on: date | None = None,
    ) -> PaymentRecord:
        record = PaymentRecord(
            club_id=club_id,
            enrollment_id=enrollment.id,
            month=month,
            amount=enrollment.monthly_fee if amount is None else amount,
            status=status,
            paid_on=paid_on,
        )
        db_session.add(record)
        db_session.commit()
        db_session.refresh(record)
        db_session.expunge(record)
        return record

    return _create_payment
