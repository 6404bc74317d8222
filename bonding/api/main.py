"""FastAPI application for the exchange.

Handlers are plain (sync) functions, so FastAPI runs each call in its
threadpool; the registry's per-asset locks serialize trades on the same
asset while trades on different assets run concurrently.
"""

import logging
import os

import structlog
import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from bonding import __version__
from bonding.api.endpoints import router
from bonding.errors import (
    AlreadyInitialized,
    AlreadyTransitioned,
    ArithmeticFault,
    ExchangeError,
    InvalidAmount,
    InvalidAssetId,
    InvalidMetadata,
    NotInitialized,
)

# Configuration from environment variables with sensible defaults
HOST = os.environ.get("EXCHANGE_HOST", "0.0.0.0")
PORT = int(os.environ.get("EXCHANGE_PORT", "8000"))
DEBUG = os.environ.get("EXCHANGE_DEBUG", "false").lower() in ("true", "1", "yes")

logger = structlog.get_logger()

# HTTP status for each engine error kind
ERROR_STATUS: dict[type[ExchangeError], int] = {
    InvalidAssetId: 404,
    AlreadyTransitioned: 409,
    AlreadyInitialized: 409,
    NotInitialized: 409,
    InvalidAmount: 400,
    InvalidMetadata: 400,
    ArithmeticFault: 422,
}


def status_for(err: ExchangeError) -> int:
    """Map an ExchangeError to its HTTP status (400 if unmapped)."""
    for error_type, status in ERROR_STATUS.items():
        if isinstance(err, error_type):
            return status
    return 400


app = FastAPI(
    title="Bonding Curve Exchange",
    description="Per-asset bonding-curve ledger with a protocol fee and phase transition",
    version=__version__,
)


@app.exception_handler(ExchangeError)
async def exchange_error_handler(request: Request, exc: ExchangeError) -> JSONResponse:
    """Return the error kind so clients can branch on it."""
    return JSONResponse(
        status_code=status_for(exc),
        content={"error": exc.code, "detail": str(exc)},
    )


app.include_router(router)


@app.get("/health")
async def health() -> dict[str, object]:
    """Health check endpoint."""
    return {"status": "ok", "version": __version__}


def configure_logging(debug: bool = DEBUG) -> None:
    """Configure structlog for the server process."""
    log_level = logging.DEBUG if debug else logging.INFO
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
    )


def run() -> None:
    """Run the exchange API server.

    Configuration via environment variables:
    - EXCHANGE_HOST: Host to bind to (default: 0.0.0.0)
    - EXCHANGE_PORT: Port to bind to (default: 8000)
    - EXCHANGE_DEBUG: Enable debug logging and reload mode (default: false)
    """
    configure_logging(DEBUG)
    logger.info("exchange_api_starting", host=HOST, port=PORT, debug=DEBUG)
    uvicorn.run(
        "bonding.api.main:app",
        host=HOST,
        port=PORT,
        reload=DEBUG,
    )


if __name__ == "__main__":
    run()
