"""FastAPI application factory."""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from config.config import Config
from orchestrator.core import SearchPipeline
from server.dependencies import get_config, get_pipeline
from server.middleware import RequestIDMiddleware
from server.routes import health, search
from utils.logger import get_logger

logger = get_logger(__name__)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == 404:
        return JSONResponse(
            status_code=404,
            content={"error": f"URL {request.url.path} does not exist on this server !!!"},
        )
    return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)})


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    first = exc.errors()[0] if exc.errors() else {}
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", "Invalid request")
    return JSONResponse(
        status_code=400,
        content={"error": f"{location}: {message}" if location else message},
    )


def create_app(config: Config | None = None, pipeline: SearchPipeline | None = None) -> FastAPI:
    """
    Factory function to create FastAPI application.

    Args:
        config: Explicit configuration; read from the environment when omitted
        pipeline: Prebuilt pipeline; built lazily from config on first request when omitted
    """
    config = config or Config()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(f"FastAPI server starting up: {config.get_model_info()}")
        yield
        logger.info("FastAPI server shutting down")

    app = FastAPI(
        title="Grounded Search API",
        description="Answers questions directly or from summarized web sources with citations",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.add_middleware(RequestIDMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[config.ALLOWED_ORIGIN],
        allow_credentials=False,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type"],
    )

    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    app.dependency_overrides[get_config] = lambda: config
    if pipeline is not None:
        app.dependency_overrides[get_pipeline] = lambda: pipeline

    app.include_router(health.router)
    app.include_router(search.router)

    return app
