"""Service module exports."""

from . import advance, months, obligations, payments, reconcile, stats, sync

__all__ = [
    "advance",
    "months",
    "obligations",
    "payments",
    "reconcile",
    "stats",
    "sync",
]
