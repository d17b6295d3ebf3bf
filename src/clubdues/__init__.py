"""ClubDues: monthly dues tracking for club members."""

from __future__ import annotations

from .config import BaseConfig
from .context import DuesContext, create_context

__all__ = ["BaseConfig", "DuesContext", "create_context"]
