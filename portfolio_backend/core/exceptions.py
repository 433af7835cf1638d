"""
Exception hierarchy for the portfolio backend.

Provides layered exception structure for domain-specific errors.
All exceptions include context for observability and debugging.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class PortfolioServiceException(Exception):
    """Base exception for all portfolio backend errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ValidationError(PortfolioServiceException):
    """Raised when input validation fails."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize validation error.

        Args:
            message: Error message
            field: Field name that failed validation
            details: Additional context
        """
        details = details or {}
        if field:
            details["field"] = field
        super().__init__(message, details)


class PermissionDeniedError(PortfolioServiceException):
    """
    Raised when a caller may not create or mutate a portfolio.

    An unknown user and a user who is not the owner are reported with the
    same error; ``details["reason"]`` tells them apart in logs.
    """

    def __init__(
        self,
        action: str,
        user_id: Any = None,
        portfolio_id: Any = None,
        reason: str | None = None,
    ) -> None:
        """
        Initialize permission error.

        Args:
            action: Attempted action (create, update, delete)
            user_id: Acting user ID
            portfolio_id: Target portfolio ID, if any
            reason: Internal reason code (user_not_found, not_owner)
        """
        details: dict[str, Any] = {"action": action}
        if user_id is not None:
            details["user_id"] = str(user_id)
        if portfolio_id is not None:
            details["portfolio_id"] = str(portfolio_id)
        if reason:
            details["reason"] = reason
        super().__init__(f"No permission to {action} portfolio", details)


class PortfolioNotFoundError(PortfolioServiceException):
    """Raised when a portfolio cannot be found."""

    def __init__(self, portfolio_id: Any, details: dict[str, Any] | None = None) -> None:
        """
        Initialize portfolio not found error.

        Args:
            portfolio_id: ID of the missing portfolio
            details: Additional context
        """
        details = details or {}
        details["portfolio_id"] = str(portfolio_id)
        super().__init__(f"Portfolio not found: {portfolio_id}", details)


class NoPortfoliosMatchedError(PortfolioNotFoundError):
    """Raised when a listing or search query matches nothing."""

    def __init__(self, details: dict[str, Any] | None = None) -> None:
        """
        Initialize empty-result error.

        Args:
            details: Query parameters that produced no rows
        """
        details = details or {}
        PortfolioServiceException.__init__(
            self, "No portfolios matched the query", details
        )


class InvalidSearchConditionError(PortfolioServiceException):
    """Raised for an unrecognized search category or sort key."""

    def __init__(self, field: str, value: Any) -> None:
        """
        Initialize search condition error.

        Args:
            field: Parameter name (category, sort_by)
            value: Rejected value
        """
        super().__init__(
            f"Invalid search condition: {field}={value!r}",
            {"field": field, "value": str(value)},
        )


class MissingSkillsError(PortfolioServiceException):
    """Raised when a create or update call supplies no skill list."""

    def __init__(self, details: dict[str, Any] | None = None) -> None:
        super().__init__("Skill list is required", details)


class UnknownSkillError(PortfolioServiceException):
    """Raised when a skill name is not in the catalog."""

    def __init__(self, skill_name: str) -> None:
        """
        Initialize unknown skill error.

        Args:
            skill_name: Normalized skill name that failed to resolve
        """
        self.skill_name = skill_name
        super().__init__(f"Unknown skill: {skill_name}", {"skill_name": skill_name})


class StorageError(PortfolioServiceException):
    """Raised when a blob store operation fails."""

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        url: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize storage error.

        Args:
            message: Error message
            operation: Operation that failed (put, delete, list)
            url: Object URL involved, if known
            details: Additional context
        """
        details = details or {}
        if operation:
            details["operation"] = operation
        if url:
            details["url"] = url
        super().__init__(message, details)
