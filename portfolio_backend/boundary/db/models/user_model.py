"""
User ORM model.

Represents the account that owns portfolios. Identity verification
happens elsewhere; this core only checks that the user exists.

Dependencies: sqlalchemy, portfolio_backend.boundary.db.base
System role: Owner lookup for permission checks and name search
"""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from portfolio_backend.boundary.db.base import Base, UUIDMixin, TimestampMixin


class UserModel(Base, UUIDMixin, TimestampMixin):
    """
    User ORM model.

    Attributes:
        id: UUID primary key (auto-generated)
        name: Display name, matched by the "userName" search category
        email: Optional unique contact address
    """

    __tablename__ = "users"

    name: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        index=True,
        doc="Display name",
    )

    email: Mapped[str | None] = mapped_column(
        String(255),
        nullable=True,
        unique=True,
        default=None,
        doc="Contact email",
    )
