"""
Account store schema.

A single table: one row per account with its unique username, password
hash, saved level and creation time. The level is the only progress that
is persisted.
"""

from datetime import datetime, timezone

from sqlalchemy import CheckConstraint, DateTime, Integer, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """Declarative base of the account store."""


class Account(Base):
    """A registered player account."""

    __tablename__ = "accounts"
    __table_args__ = (CheckConstraint("level >= 1", name="ck_accounts_level_positive"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    username: Mapped[str] = mapped_column(
        String(24),
        nullable=False,
        unique=True,
        doc="Account name, unique across the store",
    )

    password_hash: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        doc="Salted PBKDF2 hash, never the plain password",
    )

    level: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=1,
        doc="Highest player level saved for this account",
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
        doc="When the account was registered (UTC)",
    )

    def __repr__(self) -> str:
        return f"Account(username={self.username!r}, level={self.level})"
