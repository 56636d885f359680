"""FastAPI dependencies resolving per-request collaborators from ``app.state``."""
from typing import Optional

from fastapi import Header, Request

from fintrack.auth.authenticator import Authenticator, parse_identifier
from fintrack.auth.tokens import Identity, TokenVerifier
from fintrack.services.ledger import LedgerService
from fintrack.storage.base import EntityStore


def get_store(request: Request) -> EntityStore:
    return request.app.state.store


def get_ledger(request: Request) -> LedgerService:
    return request.app.state.ledger


def get_verifier(request: Request) -> TokenVerifier:
    return request.app.state.verifier


def current_identity(
    request: Request,
    authorization: Optional[str] = Header(None),
) -> Identity:
    """Authenticated caller; raises before any handler logic runs."""
    authenticator: Authenticator = request.app.state.authenticator
    return authenticator.authenticate(authorization)


def valid_id(id: str) -> int:
    """Positive integer ``{id}`` path parameter."""
    return parse_identifier(id)
