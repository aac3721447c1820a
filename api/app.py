"""
FastAPI Application

Main application setup and configuration.

Usage:
    uvicorn api.app:app --reload

    # Or run directly
    python -m api.app
"""

import logging
import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.routes import anchors, commit, health, statements, verify
from api.errors import generic_error_handler, threadline_error_handler
from core.schemas.errors import ThreadlineException


def _resolve_log_level() -> int:
    """Resolve log level from THREADLINE_LOG_LEVEL, defaulting to INFO."""
    raw = os.getenv("THREADLINE_LOG_LEVEL", "INFO")
    return getattr(logging, raw.upper(), logging.INFO)


logging.basicConfig(
    level=_resolve_log_level(),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""

    app = FastAPI(
        title="Threadline API",
        description="""
HTTP API for Threadline garment provenance and signed feed statements.

## Endpoints

- **POST /commit** - Compute the Merkle root of an evidence chain
- **POST /proof** - Build an inclusion proof for one evidence item
- **POST /verify/proof** - Check an inclusion proof against a root
- **POST /verify/traceability** - Re-verify a chain against an expected root
- **POST /anchors** / **GET /anchors/{chain_id}** - Anchor and read roots
- **POST /verify/anchored** - Re-verify a chain against its anchored root
- **POST /verify/statement** - Verify a signed post or comment
- **GET /health** - Health check

## Hashing Modes

Roots use legacy untagged SHA-256 hashing unless the server is configured
with `THREADLINE_DOMAIN_SEPARATED=true`. Requests may override the mode with
`domain_separated`.
        """,
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Register exception handlers
    app.add_exception_handler(ThreadlineException, threadline_error_handler)
    app.add_exception_handler(Exception, generic_error_handler)

    # Include routers
    app.include_router(health.router)
    app.include_router(commit.router)
    app.include_router(verify.router)
    app.include_router(anchors.router)
    app.include_router(statements.router)

    return app


# Create the application instance
app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
