"""
Portfolio input models.

Request shapes accepted by PortfolioService create and update.

Dependencies: pydantic
System role: Portfolio operation contracts
"""

import uuid

from pydantic import BaseModel, Field


class PortfolioCreate(BaseModel):
    """Fields for a new portfolio."""

    user_id: uuid.UUID = Field(description="Owning user ID")
    title: str = Field(min_length=1, max_length=255, description="Portfolio title")
    description: str | None = Field(default=None, description="Short summary")
    git_link: str | None = Field(default=None, description="Repository or external link")
    content: str | None = Field(default=None, description="Free-form body")


class PortfolioUpdate(BaseModel):
    """
    Patch for an existing portfolio.

    Any scalar field left as None keeps its stored value.
    """

    user_id: uuid.UUID = Field(description="Acting user ID, must own the portfolio")
    title: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    git_link: str | None = None
    content: str | None = None

    def changed_fields(self) -> dict[str, str]:
        """Return the scalar fields that carry a value."""
        return self.model_dump(
            include={"title", "description", "git_link", "content"},
            exclude_none=True,
        )
