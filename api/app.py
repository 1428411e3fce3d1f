"""
FastAPI application factory
"""
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from datetime import datetime, timezone
from typing import Optional
import logging

from api.config import Settings, settings as default_settings
from api.errors import error_response, register_exception_handlers, request_target
from api.routers import tasks
from api.services.task_store import TaskStore

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None, store: Optional[TaskStore] = None) -> FastAPI:
    """
    Build the API application around a single task store.

    Args:
        settings: Settings to use, defaults to the environment-loaded ones
        store: Store to serve, defaults to a new empty store seeded from
            settings.seed_tasks

    Returns:
        FastAPI: The configured application
    """
    settings = settings or default_settings

    if store is None:
        store = TaskStore()
        if settings.seed_tasks:
            store.seed(settings.seed_tasks)
            logger.info(f"🌱 Seeded {len(settings.seed_tasks)} tasks")

    app = FastAPI(
        title=settings.app_name,
        description="FastAPI backend for the task manager app",
        version=settings.app_version,
        debug=settings.debug
    )
    app.state.settings = settings
    app.state.task_store = store

    # Middleware added later wraps middleware added earlier
    @app.middleware("http")
    async def limit_body_size(request: Request, call_next):
        content_length = request.headers.get("content-length")
        if content_length is not None:
            too_large = content_length.isdigit() and (
                len(content_length) > 18 or int(content_length) > settings.max_body_bytes
            )
        elif "chunked" in request.headers.get("transfer-encoding", "").lower():
            # No declared size, so count what actually arrives; the body
            # stays cached on the request for the route to read
            too_large = len(await request.body()) > settings.max_body_bytes
        else:
            too_large = False

        if too_large:
            return error_response(status.HTTP_413_REQUEST_ENTITY_TOO_LARGE, "Request body too large")
        return await call_next(request)

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.get_allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["Content-Type", "Authorization"],
    )

    # Request logging
    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        logger.info(f"{datetime.now(timezone.utc).isoformat()} - {request.method} {request_target(request)}")
        return await call_next(request)

    register_exception_handlers(app, settings)

    # Include routers
    app.include_router(tasks.router)

    @app.get("/")
    async def root():
        """API overview"""
        return {
            "message": settings.app_name,
            "version": settings.app_version,
            "endpoints": {
                "health": "/health",
                "tasks": "/api/tasks"
            }
        }

    @app.get("/health")
    async def health_check():
        """Health check endpoint"""
        return {
            "success": True,
            "message": "Backend server is running!",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "port": settings.port
        }

    return app
