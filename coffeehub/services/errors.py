"""Errors raised by the catalog services, one class per response kind."""

from typing import Optional, Sequence


class CatalogError(Exception):
    """Base class for errors surfaced to API clients."""

    status_code = 500

    def __init__(self, message: str, details: Optional[Sequence[str]] = None):
        super().__init__(message)
        self.message = message
        self.details = list(details) if details else []


class BadRequestError(CatalogError):
    """Malformed identifier or request body."""

    status_code = 400


class ValidationError(CatalogError):
    """One or more field rules were violated; ``details`` lists all of them."""

    status_code = 400

    def __init__(self, details: Sequence[str], message: str = "Validation failed"):
        super().__init__(message, details)


class NotFoundError(CatalogError):
    """No product exists for the given identifier."""

    status_code = 404


class InternalError(CatalogError):
    """The store failed; the message never carries backend details."""

    status_code = 500
