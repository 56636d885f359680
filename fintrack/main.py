"""FastAPI main application."""
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from fintrack.auth.authenticator import Authenticator
from fintrack.auth.cache import CacheSweeper, CredentialCache
from fintrack.auth.tokens import TokenVerifier
from fintrack.config import Settings, settings as default_settings
from fintrack.errors import FinanceAPIError, InternalFailure
from fintrack.logging_config import configure_logging
from fintrack.models.responses import HealthResponse
from fintrack.routes import (
    accounts_router,
    auth_router,
    categories_router,
    savings_goals_router,
    transactions_router,
)
from fintrack.services.ledger import LedgerService
from fintrack.storage.base import EntityStore
from fintrack.storage.memory import InMemoryStore
from fintrack.storage.seed import seed_demo_data
from fintrack.utils.timestamp import utc_now

logger = logging.getLogger(__name__)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "error": message})


async def finance_error_handler(request: Request, exc: FinanceAPIError) -> JSONResponse:
    return _error(exc.status_code, exc.message)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"{location}: {first.get('msg')}" if location else str(first.get("msg"))
    else:
        message = "Invalid request"
    return _error(400, message)


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == 404:
        return _error(404, "Endpoint not found")
    return _error(exc.status_code, str(exc.detail))


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error", extra={"path": request.url.path, "method": request.method})
    return await finance_error_handler(request, InternalFailure())


def create_app(
    app_settings: Optional[Settings] = None,
    store: Optional[EntityStore] = None,
    cache: Optional[CredentialCache] = None,
) -> FastAPI:
    """
    Build the application and its collaborators.

    Args:
        app_settings: Settings override (defaults to environment settings)
        store: Entity store; a fresh in-memory store when omitted
        cache: Credential cache; one sized from settings when omitted

    Returns:
        Configured FastAPI app. The cache sweeper runs for the app's lifespan.
    """
    app_settings = app_settings or default_settings
    configure_logging(app_settings.log_level)

    if store is None:
        store = InMemoryStore()
        if app_settings.seed_demo_data:
            seed_demo_data(store)
    cache = cache or CredentialCache(ttl=app_settings.token_cache_ttl_seconds)
    verifier = TokenVerifier(
        secret=app_settings.jwt_secret,
        algorithm=app_settings.jwt_algorithm,
        expire_minutes=app_settings.access_token_expire_minutes,
    )
    sweeper = CacheSweeper(cache, interval=app_settings.token_cache_sweep_interval_seconds)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        sweeper.start()
        try:
            yield
        finally:
            await sweeper.stop()

    app = FastAPI(title=app_settings.app_name, debug=app_settings.debug, lifespan=lifespan)

    app.state.settings = app_settings
    app.state.store = store
    app.state.ledger = LedgerService(store)
    app.state.verifier = verifier
    app.state.token_cache = cache
    app.state.authenticator = Authenticator(verifier, cache)
    app.state.sweeper = sweeper

    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(FinanceAPIError, finance_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    @app.get("/api/health", response_model=HealthResponse, tags=["health"])
    async def health():
        """Liveness probe."""
        return HealthResponse(message="Finance Tracker API is running", timestamp=utc_now())

    app.include_router(auth_router)
    app.include_router(accounts_router)
    app.include_router(categories_router)
    app.include_router(transactions_router)
    app.include_router(savings_goals_router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=5001)
