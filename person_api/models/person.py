"""
Person API - Person SQLAlchemy Model
=====================================

What:  ORM model representing the `persons` table.
How:   Inherits from the shared DeclarativeBase; Alembic reads this for migrations.
Who:   Used by SqlAlchemyPersonRepository for CRUD and search queries.
When:  Instantiated from a client payload on create; loaded on every lookup.

Table Design:
    - id: identity column, assigned by the database on the first INSERT
    - firstname / lastname: NOT NULL, the only required attributes
    - email: optional and NOT unique (lookups return the first match)
    - created_at: stamped once on INSERT, never touched by updates

    Index on email:
        Serves find_by_email(); plain index, not a unique constraint.
"""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import BigInteger, DateTime, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from person_api.database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Person(Base):
    """
    A person record.

    Lifecycle:
        1. Built from a client payload without id / created_at (transient)
        2. First save: INSERT assigns id, created_at is stamped
        3. Updates copy firstname, lastname and email only
        4. Deleted by id lookup followed by removal
    """

    __tablename__ = "persons"

    # ── Primary Key ───────────────────────────────────────────────────────
    # BIGINT identity; SQLite only autoincrements an INTEGER primary key
    id: Mapped[int] = mapped_column(
        BigInteger().with_variant(Integer, "sqlite"),
        primary_key=True,
        autoincrement=True,
    )

    # ── Name ──────────────────────────────────────────────────────────────
    firstname: Mapped[str] = mapped_column(String(255), nullable=False)
    lastname: Mapped[str] = mapped_column(String(255), nullable=False)

    # ── Contact ───────────────────────────────────────────────────────────
    email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True, default=None)

    # ── Timestamps ────────────────────────────────────────────────────────
    # UTC, set by the INSERT only (no onupdate)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        default=_utcnow,
    )

    __table_args__ = (
        Index("idx_persons_email", "email"),
    )

    def __repr__(self) -> str:
        return (
            f"<Person(id={self.id}, firstname='{self.firstname}', "
            f"lastname='{self.lastname}', email='{self.email}', "
            f"created_at='{self.created_at}')>"
        )
