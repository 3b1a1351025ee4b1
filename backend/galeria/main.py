"""FastAPI app: CORS, security headers, request logging, routers, static storage mount."""
import logging
import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from fastapi.staticfiles import StaticFiles

from galeria.api.images import router as images_router
from galeria.api.uploads import router as uploads_router
from galeria.core.config import Settings, get_settings
from galeria.core.deps import STATIC_PREFIX
from galeria.core.errors import register_error_handlers
from galeria.core.metrics import get_metrics
from galeria.core.request_logging import RequestLoggingMiddleware
from galeria.services.storage import get_storage

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    logging.getLogger("galeria").setLevel(settings.log_level.upper())
    request_logger = logging.getLogger("galeria.request")
    if settings.log_json:
        for h in request_logger.handlers[:]:
            request_logger.removeHandler(h)
        h = logging.StreamHandler()
        h.setFormatter(logging.Formatter("%(message)s"))
        request_logger.addHandler(h)
        request_logger.propagate = False
    if not logging.getLogger().handlers:
        logging.basicConfig(format="%(asctime)s %(levelname)s %(name)s: %(message)s")


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the app around one storage directory, creating it if absent.

    The directory is required: failure to create it is logged and re-raised.
    """
    settings = settings or get_settings()
    configure_logging(settings)

    storage = get_storage(settings)
    try:
        storage.ensure_directory()
    except OSError:
        logger.critical("Cannot create storage directory %s", storage.root)
        raise

    app = FastAPI(title=settings.app_name)
    app.state.settings = settings
    app.state.storage = storage

    app.add_middleware(RequestLoggingMiddleware, log_json=settings.log_json)
    origins = settings.cors_origin_list
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials="*" not in origins,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def security_headers(request, call_next):
        response = await call_next(request)
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        return response

    register_error_handlers(app)
    app.include_router(uploads_router, prefix="/api")
    app.include_router(images_router, prefix="/api")
    app.mount(STATIC_PREFIX, StaticFiles(directory=storage.root), name="imagenes")

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    @app.get("/healthz")
    async def healthz():
        """Liveness: no filesystem access."""
        return {"status": "ok"}

    @app.get("/readyz")
    async def readyz():
        """Readiness: storage directory present and writable."""
        root = storage.root
        if root.is_dir() and os.access(root, os.W_OK):
            return {"status": "ok"}
        return JSONResponse(
            status_code=503,
            content={"status": "unavailable", "detail": "storage directory unavailable"},
        )

    if settings.metrics_enabled:
        @app.get("/metrics", response_class=Response)
        async def metrics():
            """Prometheus metrics."""
            body, content_type = get_metrics()
            return Response(content=body, media_type=content_type)

    logger.info("Serving %s from %s (pdf=%s)", STATIC_PREFIX, storage.root, settings.allow_pdf)
    return app


def run() -> None:
    """Console entry point: uvicorn on the configured host/port."""
    import uvicorn

    settings = get_settings()
    uvicorn.run("galeria.main:create_app", factory=True, host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
