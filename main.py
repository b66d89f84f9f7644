"""
Main API module for Thingful.

Responsibilities:
    - Expose user registration and the authenticated "current user" endpoint
    - Protect routes with the bearer-credential Auth Gate
    - Render auth failures as 401 `{"error": ...}` bodies and store failures as 500s

Architecture:
    - App Factory pattern (create_app) for test isolation and DI.
    - In-memory user store by default; THINGFUL_STORAGE_BACKEND=postgres swaps in psycopg.
    - UsersService owns password policy, hashing and serialization; AuthGate owns
      request authentication. Both receive the store explicitly.

LLM Prompt Example:
    "Explain how to structure a FastAPI service with an application factory,
    injected dependencies, and an authentication dependency that attaches the
    verified user to the request."
"""

import logging
from typing import Any, Dict, Optional

from fastapi import Depends, FastAPI, Request, Response
from fastapi.responses import JSONResponse

from auth import AuthError, AuthGate
from auth.dependencies import build_require_auth
from auth.schemas import ErrorOut, UserCreate, UserOut
from thingful.config import settings
from thingful.storage.base import BaseUserStore, StoreFailure
from thingful.storage.storage_factory import get_user_store
from thingful.users.users_service import RegistrationError, UsersService


def create_app(
    store: Optional[BaseUserStore] = None,
    bcrypt_rounds: Optional[int] = None,
    lookup_timeout: Optional[float] = settings.AUTH_LOOKUP_TIMEOUT,
) -> FastAPI:
    """
    Factory function to build and configure a new FastAPI app instance.

    Args:
        store (Optional[BaseUserStore]): User store; defaults to the configured backend.
        bcrypt_rounds (Optional[int]): bcrypt cost; defaults to settings.BCRYPT_ROUNDS.
        lookup_timeout (Optional[float]): Seconds allowed for the auth lookup; None disables.

    Returns:
        FastAPI: A fully configured application instance with its own store,
                 UsersService and AuthGate.
    """
    app = FastAPI(
        title="Thingful",
        description="Things and reviews API; user registration and bearer-credential authentication",
        docs_url="/docs",
    )
    log = logging.getLogger("thingful")

    # basic console logging unless the host process configured it already
    if not logging.getLogger().handlers:
        logging.basicConfig(level=settings.LOG_LEVEL)

    # ----------------------------------------------------------------
    # Per-app instances (isolated for tests, swappable for production)
    # ----------------------------------------------------------------
    store = store if store is not None else get_user_store()
    users_service = UsersService(
        store=store,
        rounds=bcrypt_rounds if bcrypt_rounds is not None else settings.BCRYPT_ROUNDS,
    )
    gate = AuthGate(store=store, users_service=users_service, lookup_timeout=lookup_timeout)
    require_auth = build_require_auth(gate)

    log.info("Thingful user store: %s", type(store).__name__)

    # ----------------------------------------------------------------
    # Error rendering
    # ----------------------------------------------------------------
    @app.exception_handler(AuthError)
    async def auth_error_handler(request: Request, exc: AuthError) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.message},
            headers={"WWW-Authenticate": "Bearer"},
        )

    @app.exception_handler(StoreFailure)
    async def store_failure_handler(request: Request, exc: StoreFailure) -> JSONResponse:
        log.error("Store failure on %s %s", request.method, request.url.path, exc_info=exc)
        return JSONResponse(status_code=500, content={"error": "Server error"})

    # Health check
    @app.get("/health")
    def health():
        return {"status": "ok"}

    # ----------------------------------------------------------------
    # Routes
    # ----------------------------------------------------------------
    @app.post(
        "/api/users",
        status_code=201,
        response_model=UserOut,
        responses={400: {"model": ErrorOut}},
    )
    def register_user(req: UserCreate, response: Response) -> Any:
        """
        Register a new user.

        Returns:
            UserOut: The serialized user, with a Location header pointing at it.

        Raises:
            400 `{"error": ...}` for a missing field, a password policy
            violation or a taken user name.
        """
        try:
            user = users_service.register(req.model_dump())
        except RegistrationError as err:
            return JSONResponse(status_code=err.status_code, content={"error": err.message})
        response.headers["Location"] = f"/api/users/{user['id']}"
        return user

    @app.get(
        "/api/users/me",
        response_model=UserOut,
        responses={401: {"model": ErrorOut}},
    )
    def read_current_user(user: Dict[str, Any] = Depends(require_auth)) -> Any:
        """Return the authenticated user's public view."""
        return users_service.serialize_user(user)

    return app


# `uvicorn main:app --reload` and `from main import app` continue to work.
app = create_app()
