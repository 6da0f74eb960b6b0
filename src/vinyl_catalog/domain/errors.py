"""Domain error classes.

Protocol-agnostic errors that represent catalog failures.
Entrypoints translate them to transport formats (the HTTP layer maps them to status codes).
"""

from typing import Any


class DomainError(Exception):
    """Base class for all domain errors.

    Carries a human-readable message, a stable error code and free-form
    context that protocol adapters may expose to clients.
    """

    # Stable error code (usable as an i18n key)
    error_code: str = "DOMAIN_ERROR"

    def __init__(self, message: str, **context: Any) -> None:
        """Create a domain error.

        Args:
            message: Human-readable error message
            **context: Additional context (e.g., product_id, quantity)
        """
        self.message = message
        self.context = context
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """Convert to structured format for protocol translation."""
        return {
            "message": self.message,
            "code": self.error_code,
            **self.context,
        }


class ValidationError(DomainError):
    """Input outside its declared domain.

    Raised before any storage access, so a rejected request never has partial effect.

    Examples:
        - page < 1 or limit > 100
        - unknown sort_by value
        - price <= 0 on create
        - zero stock delta, or a delta that would push stock outside [0, 1000]

    Protocol mappings:
        - REST: 422 Unprocessable Entity
    """

    error_code: str = "VALIDATION_ERROR"

    def __init__(
        self,
        message: str | None = None,
        errors: list[dict[str, str]] | None = None,
        **context: Any,
    ) -> None:
        """Create a validation error.

        Args:
            message: Overall validation error message (optional if errors provided)
            errors: List of field-specific errors, each with 'field', 'message' and 'code'
                   Example: [{"field": "limit", "message": "Must be <= 100", "code": "OUT_OF_RANGE"}]
            **context: Additional context
        """
        self.errors: list[dict[str, str]] | None
        if errors:
            self.errors = errors
            msg = message or "Validation failed"
        else:
            self.errors = None
            msg = message or "Validation error"

        super().__init__(msg, **context)

    @classmethod
    def for_field(cls, field: str, message: str, code: str, **context: Any) -> "ValidationError":
        """Shortcut for a single field-level failure."""
        return cls(
            message=message,
            errors=[{"field": field, "message": message, "code": code}],
            **context,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to structured format."""
        if self.errors:
            return {
                "message": self.message,
                "code": self.error_code,
                "errors": self.errors,
                **self.context,
            }
        return super().to_dict()


class NotFoundError(DomainError):
    """Referenced product does not exist.

    Protocol mappings:
        - REST: 404 Not Found
    """

    error_code: str = "NOT_FOUND"

    def __init__(self, resource: str, identifier: str | None = None, **context: Any) -> None:
        """Create a not found error.

        Args:
            resource: Type of resource (e.g., "Product")
            identifier: Resource identifier
            **context: Additional context
        """
        if identifier:
            message = f"{resource} with id {identifier} not found"
        else:
            message = f"{resource} not found"

        super().__init__(message, resource=resource, identifier=identifier, **context)


class ConflictError(DomainError):
    """Uniqueness violation.

    Examples:
        - A product with the same (title, artist) already exists

    Protocol mappings:
        - REST: 409 Conflict
    """

    error_code: str = "CONFLICT"


class UnauthorizedError(DomainError):
    """Authentication required or failed.

    Protocol mappings:
        - REST: 401 Unauthorized
    """

    error_code: str = "UNAUTHORIZED"
