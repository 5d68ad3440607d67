"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Domain validation error.

    Carries field-level messages so callers can render them next to the
    offending input, e.g. ``{"login": ["Login has already been taken"]}``.
    """

    def __init__(self, errors: dict[str, list[str]]):
        self.errors = errors
        details = "; ".join(
            f"{field}: {', '.join(messages)}" for field, messages in errors.items()
        )
        super().__init__(f"Validation failed: {details}")

    @classmethod
    def single(cls, field: str, message: str) -> "ValidationError":
        """Build an error for one field."""
        return cls({field: [message]})


class BusinessRuleViolationError(DomainError):
    """Business rule violation error."""

    pass


class AuthenticationError(DomainError):
    """Raised when credentials are rejected or the account cannot sign in."""

    pass


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")
