"""SQLAlchemy ORM models."""

from roster.models.account import AccountRecord, ProfileRecord
from roster.models.base import Base

__all__ = ["AccountRecord", "Base", "ProfileRecord"]
