"""FastAPI application factory.

Domain exceptions are translated to HTTP responses here, once, so the
routes only ever deal with the happy path.
"""

from __future__ import annotations

from datetime import datetime, timezone

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from jewelstore.application.seed_catalog import SeedCatalogHandler
from jewelstore.domain.exceptions import (
    EntityNotFoundError,
    InsufficientStockError,
    InvalidTransitionError,
    ValidationError,
)
from jewelstore.domain.repository.order_repository import OrderRepository
from jewelstore.domain.repository.product_repository import ProductRepository
from jewelstore.infrastructure import bootstrap
from jewelstore.infrastructure.api.routes import order_router, product_router
from jewelstore.infrastructure.config import Settings, load_settings
from jewelstore.infrastructure.logging import configure_logging

logger = structlog.get_logger(__name__)


def create_app(
    order_repo: OrderRepository | None = None,
    product_repo: ProductRepository | None = None,
    settings: Settings | None = None,
) -> FastAPI:
    """Build the app. Repositories default to the JSON stores from settings."""
    if order_repo is None or product_repo is None:
        settings = settings or load_settings()
        configure_logging(settings)
        order_repo = order_repo or bootstrap.order_repository(settings)
        product_repo = product_repo or bootstrap.product_repository(settings)

    app = FastAPI(title="Jewelry Store")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.state.order_repo = order_repo
    app.state.product_repo = product_repo

    app.include_router(product_router, prefix="/api")
    app.include_router(order_router, prefix="/api")
    register_exception_handlers(app)

    @app.get("/health")
    def health() -> dict:
        return {"status": "OK", "timestamp": datetime.now(timezone.utc).isoformat()}

    @app.post("/api/init-data")
    def init_data(request: Request) -> dict:
        added = SeedCatalogHandler(request.app.state.product_repo).handle()
        if not added:
            return {"message": "Database already has data"}
        return {"message": "Sample data initialized successfully"}

    return app


def register_exception_handlers(app: FastAPI) -> None:

    @app.exception_handler(ValidationError)
    async def validation_failed(request: Request, exc: ValidationError) -> JSONResponse:
        content: dict = {"error": str(exc)}
        if exc.violations:
            content["violations"] = [
                {
                    "productId": v.product_id,
                    "name": v.name,
                    "reason": v.reason,
                    "requested": v.requested,
                    "available": v.available,
                }
                for v in exc.violations
            ]
        return JSONResponse(status_code=400, content=content)

    @app.exception_handler(InsufficientStockError)
    async def insufficient_stock(
        request: Request, exc: InsufficientStockError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=400,
            content={
                "error": str(exc),
                "productId": exc.product_id,
                "requested": exc.requested,
                "available": exc.available,
            },
        )

    @app.exception_handler(InvalidTransitionError)
    async def invalid_transition(
        request: Request, exc: InvalidTransitionError
    ) -> JSONResponse:
        return JSONResponse(status_code=400, content={"error": str(exc)})

    @app.exception_handler(EntityNotFoundError)
    async def not_found(request: Request, exc: EntityNotFoundError) -> JSONResponse:
        return JSONResponse(status_code=404, content={"error": str(exc)})

    @app.exception_handler(RequestValidationError)
    async def malformed_request(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        messages = [
            f"{'.'.join(str(part) for part in err['loc'][1:])}: {err['msg']}"
            for err in exc.errors()
        ]
        return JSONResponse(status_code=400, content={"error": "; ".join(messages)})

    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        if exc.status_code == 404:
            return JSONResponse(status_code=404, content={"error": "Route not found"})
        return JSONResponse(status_code=exc.status_code, content={"error": exc.detail})

    @app.exception_handler(Exception)
    async def server_error(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error", path=request.url.path, method=request.method)
        return JSONResponse(status_code=500, content={"error": str(exc)})
