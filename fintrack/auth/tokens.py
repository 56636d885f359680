"""Bearer token issuing and verification (HS256 JWT)."""
import logging
from dataclasses import dataclass
from datetime import timedelta
from typing import Any, Dict, Optional

from jose import JWTError, jwt

from fintrack.errors import InvalidToken
from fintrack.utils.timestamp import utc_now

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Identity:
    """Authenticated caller attached to a request."""

    user_id: int
    email: str

    def to_claims(self) -> Dict[str, Any]:
        return {"userId": self.user_id, "email": self.email}


class TokenVerifier:
    """Stateless token codec: identity -> token and token -> identity."""

    def __init__(self, secret: str, algorithm: str = "HS256", expire_minutes: int = 24 * 60):
        self.secret = secret
        self.algorithm = algorithm
        self.expire_minutes = expire_minutes

    def issue(self, identity: Identity, expires_delta: Optional[timedelta] = None) -> str:
        """Sign a token carrying the identity claims and an ``exp`` claim."""
        claims = identity.to_claims()
        claims["exp"] = utc_now() + (expires_delta or timedelta(minutes=self.expire_minutes))
        return jwt.encode(claims, self.secret, algorithm=self.algorithm)

    def verify(self, token: str) -> Identity:
        """
        Check signature and expiry, then extract the identity.

        Raises:
            InvalidToken: If the token is malformed, forged, expired or lacks
                the identity claims
        """
        try:
            claims = jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except JWTError as e:
            logger.info("Token verification failed", extra={"reason": str(e)})
            raise InvalidToken() from e

        user_id = claims.get("userId")
        email = claims.get("email")
        if not isinstance(user_id, int) or isinstance(user_id, bool) or not isinstance(email, str):
            logger.info("Token verification failed", extra={"reason": "missing identity claims"})
            raise InvalidToken()
        return Identity(user_id=user_id, email=email)
