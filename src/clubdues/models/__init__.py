"""SQLModel table exports."""

from .club import Club
from .enrollment import ENROLLMENT_ACTIVE, ENROLLMENT_INACTIVE, Enrollment
from .member import MEMBER_ACTIVE, MEMBER_INACTIVE, Activity, Member
from .payment import (
    PAYMENT_STATUSES,
    STATUS_OVERDUE,
    STATUS_PAID,
    STATUS_PENDING,
    PaymentRecord,
)
from .settings import AppSetting

__all__ = [
    "Activity",
    "AppSetting",
    "Club",
    "Enrollment",
    "ENROLLMENT_ACTIVE",
    "ENROLLMENT_INACTIVE",
    "Member",
    "MEMBER_ACTIVE",
    "MEMBER_INACTIVE",
    "PaymentRecord",
    "PAYMENT_STATUSES",
    "STATUS_OVERDUE",
    "STATUS_PAID",
    "STATUS_PENDING",
]
