"""Enrollment repository protocol."""

from __future__ import annotations

from typing import Optional, Protocol

from ...models.enrollment import Enrollment


class EnrollmentRepository(Protocol):
    """Repository for enrollments (member x activity with a monthly fee)."""

    def get_by_id(self, enrollment_id: int, *, club_id: int) -> Optional[Enrollment]:
        """Retrieve an enrollment by ID."""
        ...

    def list_all(self, *, club_id: int) -> list[Enrollment]:
        """List every enrollment of the club."""
        ...

    def list_active(self, *, club_id: int) -> list[Enrollment]:
        """List active enrollments whose member is also active."""
        ...

    def create(self, enrollment: Enrollment, *, club_id: int) -> Enrollment:
        """Create a new enrollment."""
        ...

    def update_fee(self, enrollment_id: int, monthly_fee: float, *, club_id: int) -> Enrollment:
        """Change the fee used for obligations generated from now on."""
        ...

    def deactivate(self, enrollment_id: int, *, club_id: int) -> Enrollment:
        """Mark an enrollment inactive so the sync pass skips it."""
        ...

    def delete(self, enrollment_id: int, *, club_id: int) -> None:
        """Delete an enrollment together with all of its payment records."""
        ...
