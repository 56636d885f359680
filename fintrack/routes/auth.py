"""Registration, login and profile endpoints."""
import logging

from fastapi import APIRouter, Depends

from fintrack.auth.tokens import Identity, TokenVerifier
from fintrack.dependencies import current_identity, get_store, get_verifier
from fintrack.errors import InvalidCredentials, InvalidInput, NotFound
from fintrack.models.entities import User
from fintrack.models.requests import ChangePasswordRequest, LoginRequest, RegisterRequest
from fintrack.models.responses import ApiResponse, AuthPayload, MessagePayload, PublicUser
from fintrack.storage.base import EntityStore
from fintrack.storage.seed import UNVERIFIED_PASSWORD_HASH

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])

MIN_PASSWORD_LENGTH = 6


def _auth_payload(user: User, verifier: TokenVerifier) -> AuthPayload:
    token = verifier.issue(Identity(user_id=user.id, email=user.email))
    return AuthPayload(user=PublicUser(**user.model_dump()), token=token)


@router.post("/register", response_model=ApiResponse[AuthPayload], status_code=201)
async def register(
    payload: RegisterRequest,
    store: EntityStore = Depends(get_store),
    verifier: TokenVerifier = Depends(get_verifier),
):
    """Create a user and return a bearer token for it."""
    with store.atomic():
        if store.users.list(email=payload.email):
            raise InvalidInput("User already exists")
        user = store.users.create(
            email=payload.email,
            password_hash=UNVERIFIED_PASSWORD_HASH,
            first_name=payload.first_name,
            last_name=payload.last_name,
        )
    logger.info("User registered", extra={"user_id": user.id})
    return ApiResponse(data=_auth_payload(user, verifier))


@router.post("/login", response_model=ApiResponse[AuthPayload])
async def login(
    payload: LoginRequest,
    store: EntityStore = Depends(get_store),
    verifier: TokenVerifier = Depends(get_verifier),
):
    """
    Issue a bearer token for a known email.

    Passwords are not verified.
    """
    users = store.users.list(email=payload.email)
    if not users:
        raise InvalidCredentials()
    return ApiResponse(data=_auth_payload(users[0], verifier))


@router.get("/profile", response_model=ApiResponse[PublicUser])
async def profile(
    identity: Identity = Depends(current_identity),
    store: EntityStore = Depends(get_store),
):
    user = store.users.get(identity.user_id)
    if user is None:
        raise NotFound("User not found")
    return ApiResponse(data=PublicUser(**user.model_dump()))


@router.post("/change-password", response_model=ApiResponse[MessagePayload])
async def change_password(
    payload: ChangePasswordRequest,
    identity: Identity = Depends(current_identity),
    store: EntityStore = Depends(get_store),
):
    if not payload.current_password or not payload.new_password:
        raise InvalidInput("Current password and new password are required")
    if len(payload.new_password) < MIN_PASSWORD_LENGTH:
        raise InvalidInput(f"New password must be at least {MIN_PASSWORD_LENGTH} characters long")

    user = store.users.get(identity.user_id)
    if user is None:
        raise NotFound("User not found")

    # Password material is a placeholder; only the record's timestamp moves.
    store.users.update(user.id, password_hash=UNVERIFIED_PASSWORD_HASH)
    return ApiResponse(data=MessagePayload(message="Password changed successfully"))
