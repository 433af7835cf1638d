"""
Declarative base and column mixins for the portfolio schema.

Base pins a constraint naming convention so generated DDL (and any later
migration) names indexes and keys the same way on PostgreSQL and SQLite.

Dependencies: sqlalchemy
System role: Foundation for all database models
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, MetaData, Uuid, inspect
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_N_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """Registry for portfolio, attachment, skill and user tables."""

    metadata = MetaData(naming_convention=NAMING_CONVENTION)

    def __repr__(self) -> str:
        # Reads the identity key only, so an expired instance never triggers a load
        identity = inspect(self).identity
        key = identity[0] if identity else "transient"
        return f"<{type(self).__name__}(id={key})>"


class UUIDMixin:
    """
    UUID v4 primary key generated client-side.

    The generic Uuid type is native UUID on PostgreSQL and CHAR(32) on
    SQLite, so the in-memory test database shares the models.
    """

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )


class TimestampMixin:
    """
    created_at / updated_at in UTC.

    Both are Python-side defaults, so they are populated on the instance
    as soon as the row is flushed.
    """

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        onupdate=utcnow,
        nullable=False,
    )
