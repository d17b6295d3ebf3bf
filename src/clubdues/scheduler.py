"""Trigger policy for the automatic sync pass.

There is no background thread: callers ask the scheduler at startup (or on a
user action) and it decides whether today's pass already happened, using a
marker persisted in the settings table so every session sees the same state.
"""

from __future__ import annotations

from datetime import date
from typing import Optional

from .domain.repositories import EnrollmentRepository, PaymentRepository, SettingsRepository
from .logging_config import get_logger
from .services.sync import SyncResult, run_sync_pass

logger = get_logger(__name__)

MARKER_PREFIX = "sync.last_run"


def marker_key(club_id: int) -> str:
    return f"{MARKER_PREFIX}.{club_id}"


class SyncScheduler:
    """Runs the sync pass at most once per calendar day per club."""

    def __init__(
        self,
        *,
        enrollments: EnrollmentRepository,
        payments: PaymentRepository,
        settings: SettingsRepository,
    ):
        """Initialize the scheduler with the repositories the pass needs.

        Args:
            enrollments: Source of active enrollments
            payments: Authoritative payment store
            settings: Store holding the last-run marker
        """
        self.enrollments = enrollments
        self.payments = payments
        self.settings = settings

    def last_run(self, club_id: int) -> Optional[date]:
        """Date of the last successful pass, if any."""
        setting = self.settings.get(marker_key(club_id))
        if setting is None:
            return None
        try:
            return date.fromisoformat(setting.value)
        except ValueError:
            logger.warning(
                "Ignoring unreadable sync marker", extra={"club_id": club_id, "value": setting.value}
            )
            return None

    def is_due(self, club_id: int, today: date | None = None) -> bool:
        """True when no pass has succeeded yet today."""
        today = today or date.today()
        return self.last_run(club_id) != today

    def run_if_due(self, club_id: int, today: date | None = None) -> Optional[SyncResult]:
        """Run the pass unless it already succeeded today; ``None`` when skipped."""
        today = today or date.today()
        if not self.is_due(club_id, today):
            logger.debug("Sync already ran today", extra={"club_id": club_id})
            return None
        return self._run(club_id, today)

    def force(self, club_id: int, today: date | None = None) -> SyncResult:
        """Clear the marker and run a full pass regardless of the last run."""
        today = today or date.today()
        self.settings.delete(marker_key(club_id))
        logger.info("Forced sync requested", extra={"club_id": club_id})
        return self._run(club_id, today)

    def _run(self, club_id: int, today: date) -> SyncResult:
        try:
            result = run_sync_pass(
                club_id=club_id,
                enrollments=self.enrollments,
                payments=self.payments,
                today=today,
            )
        except Exception as exc:
            # Marker stays as-is so the next trigger retries the whole pass.
            logger.error(f"Sync pass failed: {exc}", exc_info=True, extra={"club_id": club_id})
            raise
        self.settings.set(
            marker_key(club_id),
            today.isoformat(),
            description="Date of the last successful automatic payment sync",
        )
        return result


def create_scheduler(
    *,
    enrollments: EnrollmentRepository,
    payments: PaymentRepository,
    settings: SettingsRepository,
) -> SyncScheduler:
    """Create a SyncScheduler bound to the given repositories."""
    return SyncScheduler(enrollments=enrollments, payments=payments, settings=settings)


__all__ = ["MARKER_PREFIX", "SyncScheduler", "create_scheduler", "marker_key"]
