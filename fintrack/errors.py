"""Error taxonomy surfaced to API callers.

Each error carries the HTTP status it maps to and a fixed, caller-facing
message. Handlers in ``fintrack.main`` render them into the standard
``{"success": false, "error": ...}`` envelope.
"""
from typing import Optional


class FinanceAPIError(Exception):
    """Base class for errors returned to the caller as-is."""

    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class Unauthenticated(FinanceAPIError):
    """No bearer token was presented."""

    status_code = 401
    default_message = "Access token required"


class InvalidToken(FinanceAPIError):
    """Bearer token failed signature, expiry or claim checks."""

    status_code = 403
    default_message = "Invalid or expired token"


class InvalidIdentifier(FinanceAPIError):
    """Route identifier is not a positive integer."""

    status_code = 400
    default_message = "Invalid ID parameter"


class InvalidReference(FinanceAPIError):
    """Referenced account, category or goal is missing or owned by someone else."""

    status_code = 400
    default_message = "Invalid reference"


class InvalidInput(FinanceAPIError):
    status_code = 400
    default_message = "Invalid request"


class InvalidCredentials(FinanceAPIError):
    status_code = 401
    default_message = "Invalid credentials"


class NotFound(FinanceAPIError):
    """Entity is missing or not owned by the requester."""

    status_code = 404
    default_message = "Not found"


class InternalFailure(FinanceAPIError):
    """Unexpected error; the cause is logged, never returned."""

    status_code = 500
    default_message = "Internal server error"
