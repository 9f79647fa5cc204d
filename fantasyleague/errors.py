"""Error types raised by the application services."""

from __future__ import annotations


class ServiceError(Exception):
    """Base class for errors that the API layer maps to HTTP responses."""

    message = "service error"

    def __init__(self, detail: str | None = None) -> None:
        self.detail = detail
        text = f"{self.message}: {detail}" if detail else self.message
        super().__init__(text)


class InvalidInputError(ServiceError):
    """The caller supplied a request that cannot be processed."""

    message = "invalid input"


class NotFoundError(ServiceError):
    """A requested resource does not exist."""

    message = "resource not found"


class UnauthorizedError(ServiceError):
    """The caller is not authenticated."""

    message = "unauthorized"


class DependencyUnavailableError(ServiceError):
    """An upstream dependency could not be reached."""

    message = "dependency unavailable"