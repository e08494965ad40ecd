"""Database layer for LandScore: SQLAlchemy 2.0 async."""

from __future__ import annotations

from landscore.db.base import Base
from landscore.db.engine import DatabaseManager

__all__ = ["Base", "DatabaseManager"]
