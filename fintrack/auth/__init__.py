from .authenticator import Authenticator, extract_bearer_token, parse_identifier
from .cache import CacheEntry, CacheSweeper, CredentialCache
from .tokens import Identity, TokenVerifier

__all__ = [
    "Authenticator",
    "extract_bearer_token",
    "parse_identifier",
    "CacheEntry",
    "CacheSweeper",
    "CredentialCache",
    "Identity",
    "TokenVerifier",
]
