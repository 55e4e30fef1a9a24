class AppError(Exception):
    """Base exception for the ticket service."""


class NotFoundError(AppError):
    """The requested ticket does not exist."""


class RepositoryError(AppError):
    """The ticket store failed to complete an operation."""


class ExternalServiceError(AppError):
    """A third-party service (LLM provider) is misconfigured or failing."""
