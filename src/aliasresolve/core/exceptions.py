"""Custom exception hierarchy for aliasresolve."""

from typing import Any


class AliasResolveError(Exception):
    """Base exception for all aliasresolve errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ValidationError(AliasResolveError):
    """Input validation failed."""

    pass


class ResolutionError(AliasResolveError):
    """Failed to resolve an alias."""

    pass


class ResolverUnavailableError(ResolutionError):
    """External naming-system API is unavailable."""

    def __init__(
        self,
        message: str,
        source: str,
        status_code: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.source = source
        self.status_code = status_code


class RateLimitError(ResolutionError):
    """Rate limit exceeded for a resolver."""

    def __init__(
        self,
        message: str,
        source: str,
        retry_after: float | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.source = source
        self.retry_after = retry_after


class ResolverNotImplementedError(ResolutionError):
    """A resolver recognised the alias but cannot resolve it in this deployment.

    Unlike other plugin failures this one is surfaced to the caller instead
    of being downgraded to an empty result.
    """

    def __init__(
        self,
        message: str,
        source: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.source = source


class VerificationError(AliasResolveError):
    """Ownership verification could not be carried out."""

    pass


class NotFoundError(AliasResolveError):
    """Resource not found."""

    pass


class DatabaseError(AliasResolveError):
    """Database operation failed."""

    pass


class CacheError(AliasResolveError):
    """Cache operation failed."""

    pass


class AlertDeliveryError(AliasResolveError):
    """An alert could not be delivered on one channel."""

    def __init__(
        self,
        message: str,
        channel: str,
        status_code: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.channel = channel
        self.status_code = status_code
