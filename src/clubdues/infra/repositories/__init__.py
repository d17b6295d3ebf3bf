"""Concrete repository implementations using SQLModel."""

from .enrollment import SQLModelEnrollmentRepository
from .payment import SQLModelPaymentRepository
from .settings import SQLModelSettingsRepository

__all__ = [
    "SQLModelEnrollmentRepository",
    "SQLModelPaymentRepository",
    "SQLModelSettingsRepository",
]
