# tasktracker/main.py
import logging
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from fastapi.concurrency import run_in_threadpool
from starlette.exceptions import HTTPException as StarletteHTTPException

from tasktracker.core.config import Settings, get_settings
from tasktracker.core.errors import TaskTrackerError, ValidationError
from tasktracker.core.logging_setup import setup_logging
from tasktracker.routers import health, task
from tasktracker.services.task_service import TaskService

log = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        service = TaskService.from_settings(settings)
        # Schema/storage failure propagates: no server without a working store.
        service.start()
        app.state.task_service = service
        log.info("Task tracker started queue_capacity=%s", settings.queue_capacity)
        try:
            yield
        finally:
            log.info("Shutting down task pipeline...")
            # joining the worker blocks; keep the event loop free
            await run_in_threadpool(service.stop)
            log.info("Task pipeline stopped")

    app = FastAPI(title="Task Tracker", version="0.1.0", lifespan=lifespan)

    if settings.cors_allow_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.cors_allow_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    app.include_router(task.router)
    app.include_router(health.router)

    @app.exception_handler(TaskTrackerError)
    async def _tracker_error(request: Request, exc: TaskTrackerError):
        if exc.http_status >= 500:
            log.error("%s %s failed: %s", request.method, request.url.path, exc.message, exc_info=exc)
        return PlainTextResponse(exc.message, status_code=exc.http_status)

    @app.exception_handler(RequestValidationError)
    async def _invalid_body(request: Request, exc: RequestValidationError):
        log.debug("Rejected body on %s: %s", request.url.path, exc.errors())
        err = ValidationError()
        return PlainTextResponse(err.message, status_code=err.http_status)

    @app.exception_handler(StarletteHTTPException)
    async def _http_error(request: Request, exc: StarletteHTTPException):
        return PlainTextResponse(str(exc.detail), status_code=exc.status_code, headers=exc.headers)

    return app


app = create_app()


def main() -> None:
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_file or None)
    log.info("Server listening on http://%s:%s", settings.host, settings.port)
    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        log_config=None,
        timeout_graceful_shutdown=settings.shutdown_grace_seconds,
    )


if __name__ == "__main__":
    main()
