# src/food_inventory/main.py
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from food_inventory.api.v1.router import build_api_router
from food_inventory.core.config import Settings, get_settings
from food_inventory.core.logging_setup import configure_logging
from food_inventory.core.metrics import REQUEST_COUNT
from food_inventory.core.rate_limit import build_limiter
from food_inventory.repositories.factory import build_repositories


class MetricsMiddleware(BaseHTTPMiddleware):
    """Zählt Requests je Route-Template, nicht je konkretem Pfad (Barcodes, IDs)."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        response = await call_next(request)
        route = request.scope.get("route")
        path = getattr(route, "path", request.url.path)
        REQUEST_COUNT.labels(request.method, path, str(response.status_code)).inc()
        return response


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings)
    limiter = build_limiter()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        app.state.repositories = await build_repositories(settings)
        try:
            yield
        finally:
            await app.state.repositories.close()
            del app.state.repositories

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.limiter = limiter
    app.dependency_overrides[get_settings] = lambda: settings

    app.add_exception_handler(
        RateLimitExceeded, _rate_limit_exceeded_handler  # type: ignore[arg-type]
    )
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET", "POST", "PATCH", "DELETE"],
        allow_headers=["X-API-Key", "Content-Type"],
    )
    app.include_router(build_api_router(limiter, settings))

    @app.get("/healthz", tags=["Health"])
    async def health_check() -> dict[str, str]:
        return {"status": "ok", "version": settings.app_version}

    @app.get("/readyz", tags=["Health"])
    async def readiness_check(request: Request) -> JSONResponse:
        # Bereit erst, wenn der lifespan den Storage aufgebaut hat
        if getattr(request.app.state, "repositories", None) is None:
            return JSONResponse(
                {"status": "starting"}, status_code=status.HTTP_503_SERVICE_UNAVAILABLE
            )
        return JSONResponse({"status": "ready", "storage": settings.storage_backend})

    @app.get("/metrics", tags=["Monitoring"])
    async def metrics_endpoint() -> Response:
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    return app


app = create_app()
