"""Request authentication: bearer header -> identity."""
import logging
from typing import Optional

from fintrack.auth.cache import CredentialCache
from fintrack.auth.tokens import Identity, TokenVerifier
from fintrack.errors import InvalidIdentifier, InvalidToken, Unauthenticated

logger = logging.getLogger(__name__)


def extract_bearer_token(authorization: Optional[str]) -> Optional[str]:
    """Second space-separated part of the Authorization header, if any."""
    if not authorization:
        return None
    parts = authorization.split(" ")
    if len(parts) < 2 or not parts[1]:
        return None
    return parts[1]


class Authenticator:
    """Composes a ``TokenVerifier`` with a ``CredentialCache``."""

    def __init__(self, verifier: TokenVerifier, cache: CredentialCache):
        self.verifier = verifier
        self.cache = cache

    def authenticate(self, authorization: Optional[str]) -> Identity:
        """
        Resolve the caller behind an Authorization header.

        Raises:
            Unauthenticated: No token present
            InvalidToken: Token failed verification
        """
        token = extract_bearer_token(authorization)
        if token is None:
            raise Unauthenticated()

        identity = self.cache.get(token)
        if identity is not None:
            return identity

        try:
            identity = self.verifier.verify(token)
        except InvalidToken:
            self.cache.invalidate(token)
            raise

        self.cache.put(token, identity)
        return identity


def parse_identifier(raw: str) -> int:
    """
    Parse a route identifier.

    Raises:
        InvalidIdentifier: Unless ``raw`` is a positive base-10 integer
    """
    value = str(raw).strip()
    if not value.isdigit() or not value.isascii():
        raise InvalidIdentifier()
    parsed = int(value)
    if parsed <= 0:
        raise InvalidIdentifier()
    return parsed
