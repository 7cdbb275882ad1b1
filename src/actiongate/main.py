"""Container Action Gateway FastAPI application."""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from actiongate import __version__
from actiongate.api.dependencies import close_runtime, init_runtime
from actiongate.api.errors import ErrorResponse, GatewayError, InternalError
from actiongate.api.health import router as health_router
from actiongate.api.instances import router as instances_router
from actiongate.config import get_gateway_config
from actiongate.logging import setup_logging
from actiongate.logging_schema import LogEvent

# Import metrics to ensure they are registered
import actiongate.metrics  # noqa: F401

_config = get_gateway_config()
setup_logging(_config.logging)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    logger.info(
        "Starting Container Action Gateway",
        extra={
            "event": LogEvent.APP_STARTED,
            "version": __version__,
            "docker_host": _config.docker.host,
        },
    )
    init_runtime()
    yield
    logger.info("Shutting down Container Action Gateway", extra={"event": LogEvent.APP_STOPPED})
    await close_runtime()


app = FastAPI(
    title="Container Action Gateway",
    description="Container lifecycle and exec actions over the Docker Engine API",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=_config.server.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(GatewayError)
async def gateway_error_handler(request: Request, exc: GatewayError) -> Response:
    """Render GatewayError as {message} or {message, error}.

    A 304 cannot carry a body, so its message travels in the
    X-Runtime-Message header instead.
    """
    logger.info(
        "Gateway error",
        extra={
            "event": LogEvent.GATEWAY_ERROR,
            "error_code": exc.code.value,
            "error_message": exc.message,
            "status_code": exc.status_code,
            "path": request.url.path,
            "method": request.method,
        },
    )
    if exc.status_code == 304:
        return Response(
            status_code=304,
            headers={
                "X-Runtime-Message": exc.message.encode("latin-1", "replace").decode("latin-1")
            },
        )
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_response().model_dump(exclude_none=True),
    )


@app.exception_handler(RequestValidationError)
async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Malformed bodies are client errors like any other missing input."""
    return JSONResponse(
        status_code=400,
        content=ErrorResponse(message="Invalid request body").model_dump(exclude_none=True),
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unhandled exceptions with logging."""
    logger.exception(
        "Unhandled exception",
        extra={
            "event": LogEvent.UNHANDLED_EXCEPTION,
            "path": request.url.path,
            "method": request.method,
        },
    )
    error = InternalError()
    return JSONResponse(
        status_code=error.status_code,
        content=error.to_response().model_dump(exclude_none=True),
    )


app.include_router(health_router)


@app.get("/metrics", include_in_schema=False)
async def metrics() -> Response:
    """Expose Prometheus metrics."""
    return Response(
        content=generate_latest(),
        media_type=CONTENT_TYPE_LATEST,
    )


app.include_router(instances_router, prefix=_config.server.prefix)


def main() -> None:
    """Run the gateway server."""
    config = get_gateway_config()
    uvicorn.run(
        "actiongate.main:app",
        host=config.server.host,
        port=config.server.port,
        reload=False,
    )


if __name__ == "__main__":
    main()
