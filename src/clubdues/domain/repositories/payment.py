"""Payment record repository protocol.

Every method reads or writes the authoritative store directly; callers never
cache results across logical operations.
"""

from __future__ import annotations

from typing import Iterable, Optional, Protocol

from ...models.payment import PaymentRecord


class PaymentRepository(Protocol):
    """Repository for per-month payment records."""

    def get_by_id(self, record_id: int, *, club_id: int) -> Optional[PaymentRecord]:
        """Retrieve a record by ID."""
        ...

    def find_by_month(
        self, enrollment_id: int, month: str, *, club_id: int
    ) -> Optional[PaymentRecord]:
        """Return the record for (enrollment, month) if one exists."""
        ...

    def list_for_enrollment(self, enrollment_id: int, *, club_id: int) -> list[PaymentRecord]:
        """List an enrollment's records ordered by month."""
        ...

    def list_all(self, *, club_id: int) -> list[PaymentRecord]:
        """List every record of the club."""
        ...

    def create(self, record: PaymentRecord, *, club_id: int) -> PaymentRecord:
        """Insert one record; raises DuplicatePaymentError on a taken month."""
        ...

    def create_many(
        self, records: Iterable[PaymentRecord], *, club_id: int
    ) -> list[PaymentRecord]:
        """Insert several records in a single transaction."""
        ...

    def update(self, record: PaymentRecord, *, club_id: int) -> PaymentRecord:
        """Persist edits to an existing record."""
        ...

    def delete(self, record_id: int, *, club_id: int) -> None:
        """Delete a record by ID."""
        ...

    def apply_changes(
        self,
        *,
        creates: Iterable[PaymentRecord],
        status_updates: Iterable[tuple[int, str, str]],
        club_id: int,
    ) -> int:
        """Insert records and change statuses atomically: all or nothing.

        Status updates are ``(record_id, expected_status, new_status)`` and
        skip records whose stored status no longer matches. Returns the
        number of status updates applied.
        """
        ...
