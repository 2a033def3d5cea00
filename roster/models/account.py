"""ORM models for accounts and their one-to-one profiles."""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, ForeignKey, String, Text, Uuid
from sqlalchemy.orm import relationship

from roster.models.base import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AccountRecord(Base):
    """
    Identity and security row. Email is stored normalized (trimmed, lower-case),
    so the unique index gives case-insensitive uniqueness.
    """

    __tablename__ = "accounts"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(32), nullable=False, default="Guest", index=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, index=True)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    profile = relationship(
        "ProfileRecord",
        back_populates="account",
        uselist=False,
        lazy="joined",
        cascade="all, delete-orphan",
    )


class ProfileRecord(Base):
    """Personal fields; every column except the keys is nullable."""

    __tablename__ = "profiles"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    account_id = Column(
        Uuid,
        ForeignKey("accounts.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )
    first_name = Column(String(255), nullable=True)
    middle_name = Column(String(255), nullable=True)
    last_name = Column(String(255), nullable=True)
    handle = Column(String(255), nullable=True, unique=True, index=True)
    avatar_url = Column(Text, nullable=True)
    bio = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    account = relationship("AccountRecord", back_populates="profile")
