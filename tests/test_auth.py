"""Tests for token verification, the credential cache and the authenticator."""
import asyncio
from datetime import timedelta

import pytest
from jose import jwt

from fintrack.auth.authenticator import Authenticator, extract_bearer_token, parse_identifier
from fintrack.auth.cache import CacheSweeper, CredentialCache
from fintrack.auth.tokens import Identity, TokenVerifier
from fintrack.errors import InvalidIdentifier, InvalidToken, Unauthenticated

SECRET = "test-secret"


class FakeClock:
    def __init__(self, start=1000.0):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


class CountingVerifier(TokenVerifier):
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.calls = 0

    def verify(self, token):
        self.calls += 1
        return super().verify(token)


@pytest.fixture
def identity():
    return Identity(user_id=1, email="demo@example.com")


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def verifier():
    return CountingVerifier(SECRET)


@pytest.fixture
def cache(clock):
    return CredentialCache(ttl=300, clock=clock)


@pytest.fixture
def authenticator(verifier, cache):
    return Authenticator(verifier, cache)


def test_issue_and_verify_roundtrip(verifier, identity):
    """Test that an issued token verifies to the same identity."""
    token = verifier.issue(identity)
    assert verifier.verify(token) == identity


def test_verify_rejects_wrong_secret(identity):
    """Test token signed with another secret."""
    token = TokenVerifier("other-secret").issue(identity)
    with pytest.raises(InvalidToken):
        TokenVerifier(SECRET).verify(token)


def test_verify_rejects_expired_token(verifier, identity):
    """Test token past its expiry."""
    token = verifier.issue(identity, expires_delta=timedelta(seconds=-10))
    with pytest.raises(InvalidToken):
        verifier.verify(token)


def test_verify_rejects_malformed_token(verifier):
    """Test a string that is not a JWT."""
    with pytest.raises(InvalidToken):
        verifier.verify("not-a-jwt")


def test_verify_rejects_token_without_identity_claims(verifier):
    """Test a valid JWT lacking userId and email."""
    token = jwt.encode({"sub": "someone"}, SECRET, algorithm="HS256")
    with pytest.raises(InvalidToken):
        verifier.verify(token)


@pytest.mark.parametrize("header,expected", [
    (None, None),
    ("", None),
    ("Bearer", None),
    ("Bearer ", None),
    ("Bearer abc", "abc"),
    ("Token abc", "abc"),
])
def test_extract_bearer_token(header, expected):
    """Test Authorization header parsing."""
    assert extract_bearer_token(header) == expected


def test_missing_token_is_unauthenticated(authenticator):
    """Test authenticating without a header."""
    with pytest.raises(Unauthenticated) as exc_info:
        authenticator.authenticate(None)
    assert exc_info.value.message == "Access token required"
    assert exc_info.value.status_code == 401


def test_invalid_token_is_rejected_and_not_cached(authenticator, cache):
    """Test that failed verification caches nothing."""
    with pytest.raises(InvalidToken) as exc_info:
        authenticator.authenticate("Bearer garbage")
    assert exc_info.value.message == "Invalid or expired token"
    assert exc_info.value.status_code == 403
    assert "garbage" not in cache


def test_cache_hit_skips_verification_within_ttl(authenticator, verifier, clock, identity):
    """Test that a cached token is not re-verified before the TTL."""
    token = verifier.issue(identity)
    header = f"Bearer {token}"

    assert authenticator.authenticate(header) == identity
    assert verifier.calls == 1

    clock.advance(299.999)
    assert authenticator.authenticate(header) == identity
    assert verifier.calls == 1


def test_cache_entry_reverified_at_ttl(authenticator, verifier, clock, identity):
    """Test that a token is re-verified once the TTL is reached."""
    token = verifier.issue(identity)
    header = f"Bearer {token}"
    authenticator.authenticate(header)

    clock.advance(300)
    assert authenticator.authenticate(header) == identity
    assert verifier.calls == 2


def test_stale_entry_removed_when_reverification_fails(clock, identity):
    """Test that a failed re-verification evicts the entry."""
    cache = CredentialCache(ttl=300, clock=clock)
    issuer = TokenVerifier(SECRET)
    token = issuer.issue(identity)
    authenticator = Authenticator(issuer, cache)
    authenticator.authenticate(f"Bearer {token}")
    assert token in cache

    # Rotated secret: the cached token no longer verifies once the entry expires
    authenticator.verifier = TokenVerifier("rotated-secret")
    clock.advance(301)
    with pytest.raises(InvalidToken):
        authenticator.authenticate(f"Bearer {token}")
    assert token not in cache


def test_sweep_removes_only_expired_entries(cache, clock, identity):
    """Test cache sweep."""
    cache.put("old", identity)
    clock.advance(200)
    cache.put("fresh", identity)
    clock.advance(100)

    assert cache.sweep() == 1
    assert "old" not in cache
    assert cache.get("fresh") == identity
    assert len(cache) == 1


def test_invalidate(cache, identity):
    """Test cache invalidation."""
    cache.put("token", identity)
    cache.invalidate("token")
    cache.invalidate("unknown")
    assert cache.get("token") is None


@pytest.mark.asyncio
async def test_sweeper_runs_periodically(identity):
    """Test that the sweeper clears expired entries in the background."""
    clock = FakeClock()
    cache = CredentialCache(ttl=300, clock=clock)
    cache.put("token", identity)
    clock.advance(301)

    sweeper = CacheSweeper(cache, interval=0.01)
    sweeper.start()
    assert sweeper.running
    for _ in range(100):
        if len(cache) == 0:
            break
        await asyncio.sleep(0.01)
    await sweeper.stop()

    assert len(cache) == 0
    assert not sweeper.running


@pytest.mark.asyncio
async def test_sweeper_stop_without_start_is_noop(cache):
    """Test stopping a sweeper that never started."""
    sweeper = CacheSweeper(cache, interval=60)
    await sweeper.stop()
    assert not sweeper.running


@pytest.mark.parametrize("raw,expected", [("1", 1), ("42", 42), (" 7 ", 7)])
def test_parse_identifier_accepts_positive_integers(raw, expected):
    """Test valid route ids."""
    assert parse_identifier(raw) == expected


@pytest.mark.parametrize("raw", ["0", "-1", "abc", "1.5", "", "12abc", "١٢"])
def test_parse_identifier_rejects_everything_else(raw):
    """Test invalid route ids."""
    with pytest.raises(InvalidIdentifier) as exc_info:
        parse_identifier(raw)
    assert exc_info.value.status_code == 400
