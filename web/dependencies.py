"""
Dependency injection

Dependency management via FastAPI Depends.
"""

from typing import AsyncGenerator

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from adapters.db.sqlite_adapter import SQLiteAdapter
from core.auth import ACCOUNTS_PERMISSION, decode_token
from core.config.loader import Settings, get_settings
from core.ledger.categories import CategoryRegistry, get_default_registry
from core.ledger.errors import ForbiddenError, UnauthorizedError
from core.types import Actor

bearer_scheme = HTTPBearer(auto_error=False)


def get_app_settings() -> Settings:
    """Return application settings"""
    return get_settings()


async def get_db() -> AsyncGenerator[SQLiteAdapter, None]:
    """DB session (read-only)

    Used by listings and statements.
    """
    settings = get_settings()
    async with SQLiteAdapter(settings.db_path, readonly=True) as db:
        yield db


async def get_db_write() -> AsyncGenerator[SQLiteAdapter, None]:
    """DB session (writable)

    Used by ledger writes and manual balance sheet items.
    """
    settings = get_settings()
    async with SQLiteAdapter(settings.db_path, readonly=False) as db:
        yield db


def get_registry() -> CategoryRegistry:
    """Accounting category registry (built once per process)"""
    return get_default_registry()


# =========================================================================
# Session
# =========================================================================


def get_actor(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    settings: Settings = Depends(get_app_settings),
) -> Actor:
    """Authenticated actor from the bearer token

    Raises:
        UnauthorizedError: missing or invalid token
    """
    if credentials is None or not credentials.credentials:
        raise UnauthorizedError("Unauthorized")
    return decode_token(
        credentials.credentials,
        settings.web_secret_key,
        settings.token_algorithm,
    )


def require_accounts(actor: Actor = Depends(get_actor)) -> Actor:
    """Actor allowed to use the accounting endpoints

    Raises:
        ForbiddenError: actor lacks the accounts permission
    """
    if not actor.has_permission(ACCOUNTS_PERMISSION):
        raise ForbiddenError("Forbidden")
    return actor
