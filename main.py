"""
main.py
-------
Entry point for the school records HTTP service.

Responsibilities:
    - Build the storage gateway and the services around it.
    - Bootstrap the database on startup and open the connection pool.
    - Register the HTTP routes and the JSON error envelope.
    - Close the pool on shutdown.
"""

from contextlib import asynccontextmanager
from typing import Optional

import psycopg2
import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.concurrency import run_in_threadpool
from fastapi.middleware.cors import CORSMiddleware

import config
from db.connection import StorageGateway
from handlers.entity_handler import student_router, teacher_router
from handlers.responses import error_response
from handlers.system_handler import router as system_router
from services.registry import Services, build_services
from utils.logger import get_logger

logger = get_logger(__name__)


async def _start(services: Services) -> None:
    """Best-effort startup: the service keeps running without a database."""
    logger.info(f"DB Config: {config.describe_database()}")
    await run_in_threadpool(services.bootstrap.ensure_schema)
    try:
        await run_in_threadpool(services.gateway.open)
    except psycopg2.Error:
        logger.warning("Continuing without a connection pool - will retry on first request.")


def create_app(services: Optional[Services] = None, bootstrap_on_startup: bool = True) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        services: Pre-built services; defaults to ones wired around a
            StorageGateway configured from the environment.
        bootstrap_on_startup: Run the schema bootstrap and open the pool
            when the app starts.
    """
    if services is None:
        services = build_services(StorageGateway.from_config())

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if bootstrap_on_startup:
            await _start(services)
        try:
            yield
        finally:
            logger.info("Shutting down gracefully...")
            services.gateway.close()

    app = FastAPI(
        title="School Records Service",
        description="Student and teacher records with contiguous identifiers",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.services = services

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RequestValidationError)
    async def invalid_request(request: Request, exc: RequestValidationError):
        details = "; ".join(
            f"{'.'.join(str(part) for part in err.get('loc', ()))}: {err.get('msg')}"
            for err in exc.errors()
        )
        logger.error(f"Invalid request on {request.method} {request.url.path}: {details}")
        return error_response("Error processing request", ValueError(details or "invalid request"))

    @app.exception_handler(Exception)
    async def unhandled_error(request: Request, exc: Exception):
        logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}")
        return error_response("Internal server error", exc)

    app.include_router(system_router)
    app.include_router(student_router)
    app.include_router(teacher_router)
    return app


def main() -> None:
    """Run the service with uvicorn."""
    logger.info(f"🚀 Server listening on port {config.APP_PORT}")
    logger.info(f"Health check available at: http://localhost:{config.APP_PORT}/health")
    uvicorn.run(create_app(), host=config.APP_HOST, port=config.APP_PORT, log_config=None)


if __name__ == "__main__":
    main()
