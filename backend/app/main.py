"""Shape Validator — deterministic and model-backed validation of shape measurements.

Main FastAPI application with lifespan management, CORS, and global error handling.
"""

import logging
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.config import get_settings
from app.api.router import api_router
from app.services.remote_validation import RemoteValidationError
from app.services.strategy import get_validation_strategy


def configure_logging(debug: bool, log_level: str) -> None:
    """Configure structured logging."""
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer() if debug else structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(log_level.upper())
        ),
    )


configure_logging(get_settings().DEBUG, get_settings().LOG_LEVEL)

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application startup and shutdown lifecycle."""
    settings = get_settings()

    # ── Startup ──
    logger.info("app_starting", debug=settings.DEBUG)

    strategy = get_validation_strategy()
    logger.info(
        "validation_strategy_selected",
        strategy=strategy.name,
        transport=getattr(strategy, "mode", None),
        model_configured=settings.has_model_credential,
    )

    logger.info("app_started")

    yield

    # ── Shutdown ──
    logger.info("app_stopped")


# ── Create Application ──

app = FastAPI(
    title="Shape Validator",
    description=(
        "Validates measurements for a square, rectangle, right triangle or right "
        "trapezoid and computes the perimeter, either with deterministic rules "
        "or by asking a language model."
    ),
    version="1.0.0",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)


# ── Middleware ──

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ── Global Exception Handlers ──

@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Catch-all error handler for unhandled exceptions."""
    logger.error(
        "unhandled_exception",
        path=request.url.path,
        method=request.method,
        error=str(exc),
        error_type=type(exc).__name__,
    )
    return JSONResponse(
        status_code=500,
        content={
            "error": "internal_server_error",
            "message": "An unexpected error occurred. Please try again.",
        },
    )


@app.exception_handler(RemoteValidationError)
async def remote_validation_error_handler(request: Request, exc: RemoteValidationError):
    """The model could not be reached or answered with garbage."""
    return JSONResponse(
        status_code=502,
        content={"error": "remote_validation_failed", "message": exc.message, "detail": exc.detail},
    )


@app.exception_handler(ValueError)
async def value_error_handler(request: Request, exc: ValueError):
    """Handle validation errors."""
    return JSONResponse(
        status_code=422,
        content={"error": "validation_error", "message": str(exc)},
    )


# ── Routes ──

app.include_router(api_router, prefix="/api/v1")


# ── Root endpoint ──

@app.get("/")
async def root():
    """Root endpoint — API info."""
    return {
        "name": "Shape Validator",
        "version": "1.0.0",
        "description": "Shape measurement validation with perimeter calculation",
        "docs": "/docs",
        "health": "/api/v1/health",
    }
