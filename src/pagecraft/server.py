"""
HTTP Server
FastAPI application exposing the AI translation and project endpoints.
"""

import time
from contextlib import asynccontextmanager
from typing import Any

import uvicorn
from fastapi import FastAPI, Header, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response
from prometheus_client import CONTENT_TYPE_LATEST

from .agents.translator import LayoutTranslator, TranslationError
from .core import configure_logging, create_container, get_logger, get_settings
from .core.config import Settings
from .core.validate import ValidationError
from .handlers import AIHandler, ProjectHandler
from .monitoring import metrics_collector
from .storage.projects import (
    DuplicateRecordError,
    ProjectNotFoundError,
    ProjectStore,
)

logger = get_logger(__name__)

DEFAULT_OWNER = "anonymous"


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


async def _read_body(request: Request) -> dict[str, Any]:
    try:
        payload = await request.json()
    except ValueError as e:
        raise ValidationError("Request body must be valid JSON") from e
    if not isinstance(payload, dict):
        raise ValidationError("Request body must be a JSON object")
    return payload


def create_app(
    translator: LayoutTranslator | None = None,
    store: ProjectStore | None = None,
    settings: Settings | None = None,
) -> FastAPI:
    """
    Build the application.

    Collaborators not passed in are resolved from the injector container.

    Args:
        translator: Layout translator for the AI endpoints
        store: Project store for the CRUD endpoints
        settings: Settings used to build missing collaborators

    Returns:
        Configured FastAPI app
    """
    container = create_container(settings)
    ai_handler = AIHandler(translator) if translator is not None else container.get(AIHandler)
    project_handler = ProjectHandler(store) if store is not None else container.get(ProjectHandler)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("starting")
        yield
        await ai_handler.translator.client.aclose()
        logger.info("stopped")

    app = FastAPI(title="pagecraft", lifespan=lifespan)
    app.state.start_time = time.time()
    app.state.ai_handler = ai_handler
    app.state.project_handler = project_handler

    # ------------------------------------------------------------------
    # Error mapping
    # ------------------------------------------------------------------

    @app.exception_handler(ValidationError)
    async def handle_validation(request: Request, exc: ValidationError) -> JSONResponse:
        return _error(400, str(exc))

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
        return _error(400, "Invalid request")

    @app.exception_handler(DuplicateRecordError)
    async def handle_duplicate(request: Request, exc: DuplicateRecordError) -> JSONResponse:
        return _error(400, str(exc))

    @app.exception_handler(ProjectNotFoundError)
    async def handle_not_found(request: Request, exc: ProjectNotFoundError) -> JSONResponse:
        return _error(404, str(exc))

    @app.exception_handler(TranslationError)
    async def handle_translation(request: Request, exc: TranslationError) -> JSONResponse:
        return _error(500, str(exc))

    # ------------------------------------------------------------------
    # AI translation
    # ------------------------------------------------------------------

    @app.post("/api/ai/generate")
    async def generate(request: Request) -> dict[str, Any]:
        return await ai_handler.generate(await _read_body(request))

    @app.post("/api/ai/optimize")
    async def optimize_code(request: Request) -> dict[str, Any]:
        return await ai_handler.optimize_code(await _read_body(request))

    @app.post("/api/ai/optimize-layout")
    async def optimize_layout(request: Request) -> dict[str, Any]:
        return await ai_handler.optimize_layout(await _read_body(request))

    # ------------------------------------------------------------------
    # Projects
    # ------------------------------------------------------------------

    @app.get("/api/projects")
    async def list_projects(x_user_id: str = Header(default=DEFAULT_OWNER)) -> list[dict[str, Any]]:
        return project_handler.list_projects(x_user_id)

    @app.post("/api/projects", status_code=201)
    async def create_project(
        request: Request, x_user_id: str = Header(default=DEFAULT_OWNER)
    ) -> dict[str, Any]:
        return project_handler.create_project(x_user_id, await _read_body(request))

    @app.get("/api/projects/{project_id}")
    async def get_project(project_id: int, x_user_id: str = Header(default=DEFAULT_OWNER)) -> dict[str, Any]:
        return project_handler.get_project(x_user_id, project_id)

    @app.patch("/api/projects/{project_id}")
    async def update_project(
        project_id: int, request: Request, x_user_id: str = Header(default=DEFAULT_OWNER)
    ) -> dict[str, Any]:
        return project_handler.update_project(x_user_id, project_id, await _read_body(request))

    @app.delete("/api/projects/{project_id}", status_code=204)
    async def delete_project(project_id: int, x_user_id: str = Header(default=DEFAULT_OWNER)) -> Response:
        project_handler.delete_project(x_user_id, project_id)
        return Response(status_code=204)

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    @app.get("/health")
    async def health() -> dict[str, Any]:
        return {
            "status": "healthy",
            "uptime_seconds": round(time.time() - app.state.start_time, 3),
            "model": ai_handler.translator.client.config.model,
        }

    @app.get("/metrics")
    async def metrics() -> Response:
        return Response(content=metrics_collector.get_metrics(), media_type=CONTENT_TYPE_LATEST)

    return app


def main() -> None:
    """Entry point - run the HTTP server."""
    settings = get_settings()
    configure_logging(settings.log_level, settings.json_logs)

    logger.info("listening", host=settings.host, port=settings.port)
    app = create_app(settings=settings)
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    main()
