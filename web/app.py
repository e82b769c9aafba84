"""
FastAPI application

Router registration, error handlers and app setup.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from core.config.loader import get_settings
from core.constants import Defaults
from core.ledger.errors import AccountingError
from core.logging import setup_logging

# Logging (console + file)
setup_logging("web")

from web.models.responses import ErrorResponse  # noqa: E402
from web.routes import (  # noqa: E402
    balance_sheet,
    categories,
    health,
    pnl,
    transactions,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """App lifecycle"""
    from adapters.db.sqlite_adapter import SQLiteAdapter, init_schema

    settings = get_settings()

    # Startup - initialize the DB schema
    async with SQLiteAdapter(settings.db_path) as db:
        await init_schema(db)

    logger.info(f"Web started: mode={settings.mode.value} db={settings.db_path}")

    yield

    logger.info("Web stopped")


app = FastAPI(
    title=f"{Defaults.APP_NAME} API",
    description="Back-office accounting ledger and financial statements",
    version=Defaults.APP_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

# CORS (development)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =========================================================================
# Error handlers
# =========================================================================


@app.exception_handler(AccountingError)
async def accounting_error_handler(request: Request, exc: AccountingError) -> JSONResponse:
    """Domain errors -> {"success": false, "error": ...} with their status"""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    else:
        logger.info(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(error=exc.message).model_dump(),
    )


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed request body / query -> 400"""
    errors = exc.errors()
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"Invalid {location}: {first.get('msg')}" if location else str(first.get("msg"))
    else:
        message = "Invalid request"
    return JSONResponse(
        status_code=400,
        content=ErrorResponse(error=message).model_dump(),
    )


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Anything else -> 500 with a generic message (detail stays in the log)"""
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=500,
        content=ErrorResponse(error="Internal server error").model_dump(),
    )


# =========================================================================
# API routers
# =========================================================================

app.include_router(health.router)
app.include_router(transactions.router)
app.include_router(balance_sheet.router)
app.include_router(pnl.router)
app.include_router(categories.router)
