"""FastAPI application entry point."""

import time
import uuid
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware

from mealbook.config import Settings, get_settings
from mealbook.errors import MealbookError
from mealbook.logging_config import LoggingContext, configure_logging, get_logger
from mealbook.routers import meal_plans_router, recipes_router
from mealbook.store import Store

logger = get_logger(__name__)


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Bind a request id to the logging context and echo it back."""

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        with LoggingContext(request_id=request_id):
            start_time = time.perf_counter()
            response = await call_next(request)
            elapsed = time.perf_counter() - start_time
            logger.info(
                f"{request.method} {request.url.path} -> {response.status_code} "
                f"({elapsed * 1000:.1f}ms)"
            )
        response.headers["X-Request-ID"] = request_id
        return response


def register_exception_handlers(app: FastAPI) -> None:
    """Map every failure to the ``{"error": ...}`` body shape."""

    @app.exception_handler(MealbookError)
    async def mealbook_error_handler(request: Request, exc: MealbookError) -> JSONResponse:
        if exc.http_status >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {exc}")
        return JSONResponse(status_code=exc.http_status, content=exc.to_dict())

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        details = [
            {"loc": list(error["loc"]), "msg": error["msg"], "type": error["type"]}
            for error in exc.errors()
        ]
        return JSONResponse(
            status_code=422,
            content={"error": "Request validation failed", "details": details},
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception(f"{request.method} {request.url.path} failed unexpectedly: {exc}")
        return JSONResponse(status_code=500, content={"error": "Internal store failure"})


def create_app(settings: Settings | None = None, store: Store | None = None) -> FastAPI:
    """Build the application around one explicitly constructed store."""
    settings = settings or get_settings()
    store = store or Store.from_settings(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info("Starting Mealbook API")

        # Requests are only accepted once tables exist and seeding is done
        await store.start()
        await store.wait_until_ready()
        logger.info("Store ready")

        yield

        logger.info("Shutting down Mealbook API")
        await store.close()

    app = FastAPI(
        title="Mealbook API",
        description="Recipes and meal plans",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.store = store

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestIdMiddleware)

    register_exception_handlers(app)

    app.include_router(recipes_router, prefix=settings.api_prefix)
    app.include_router(meal_plans_router, prefix=settings.api_prefix)

    @app.get("/")
    async def root() -> dict:
        """Liveness check."""
        return {"message": "Ok"}

    return app


def run() -> None:
    """Serve the API with uvicorn on the configured port."""
    settings = get_settings()
    configure_logging(
        log_level=settings.log_level,
        json_format=True if settings.log_format.lower() == "json" else None,
    )
    logger.info(f"Serving on {settings.host}:{settings.port}")
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)


app = create_app()


if __name__ == "__main__":
    run()
