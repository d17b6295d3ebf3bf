"""Exception types raised by the dues engine."""

from __future__ import annotations

from typing import Iterable, Optional


class DuesError(Exception):
    """Base class for every error raised by ClubDues."""


class ValidationError(DuesError, ValueError):
    """Input rejected before any write was attempted."""


class DuplicatePaymentError(ValidationError):
    """One or more months already have a payment record for the enrollment."""

    def __init__(self, months: Iterable[str], *, enrollment_id: Optional[int] = None):
        self.months = list(months)
        self.enrollment_id = enrollment_id
        joined = ", ".join(self.months)
        super().__init__(f"Payment already exists for: {joined}")


class NotFoundError(DuesError, LookupError):
    """Referenced enrollment or payment record does not exist."""

    def __init__(self, entity: str, entity_id: object):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} {entity_id} not found")


class PersistenceError(DuesError, RuntimeError):
    """The storage layer failed to read or write."""


__all__ = [
    "DuesError",
    "DuplicatePaymentError",
    "NotFoundError",
    "PersistenceError",
    "ValidationError",
]
