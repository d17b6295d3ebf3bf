"""Repository protocol definitions for domain layer."""

from .enrollment import EnrollmentRepository
from .payment import PaymentRepository
from .settings import SettingsRepository

__all__ = [
    "EnrollmentRepository",
    "PaymentRepository",
    "SettingsRepository",
]
