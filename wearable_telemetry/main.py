"""
Wearable Telemetry Server - FastAPI Application
Main entry point for the API server
"""

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from typing import Optional
import uvicorn
import structlog
from contextlib import asynccontextmanager

from wearable_telemetry.api.routes import commands, data, devices, status
from wearable_telemetry.core.config import Settings, settings as default_settings
from wearable_telemetry.core.logging_config import configure_logging
from wearable_telemetry.reporting.reporter import PeriodicReporter
from wearable_telemetry.storage.ingestion_store import IngestionStore

logger = structlog.get_logger(__name__)

ENDPOINTS = [
    ("GET", "/", "Server status"),
    ("POST", "/api/data", "Receive sensor data"),
    ("GET", "/api/data", "Get stored data"),
    ("GET", "/api/devices", "Get device status"),
    ("POST", "/api/command", "Send command to device"),
    ("DELETE", "/api/data", "Clear data"),
]

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager"""
    config: Settings = app.state.settings
    logger.info(
        f"{config.service_name} running",
        port=config.api_port,
        url=f"http://localhost:{config.api_port}",
        endpoints=[f"{method} {path} - {description}" for method, path, description in ENDPOINTS],
    )
    # Startup
    await app.state.reporter.start()
    yield
    # Shutdown
    await app.state.reporter.stop()
    logger.info(f"Shutting down {config.service_name}")

def create_app(config: Optional[Settings] = None, store: Optional[IngestionStore] = None) -> FastAPI:
    """Build the application around its own ingestion store"""
    config = config if config is not None else default_settings

    app = FastAPI(
        title=config.service_name,
        description="Telemetry ingestion endpoint for wearable devices",
        version="1.0.0",
        lifespan=lifespan
    )

    app.state.settings = config
    app.state.store = store if store is not None else IngestionStore(
        max_entries=config.max_entries,
        default_limit=config.default_query_limit,
        unknown_device_id=config.unknown_device_id,
    )
    app.state.reporter = PeriodicReporter(app.state.store, interval=config.report_interval_seconds)

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        logger.info("Request", method=request.method, path=request.url.path)
        return await call_next(request)

    # Include routers
    app.include_router(status.router, tags=["status"])
    app.include_router(data.router, prefix="/api", tags=["data"])
    app.include_router(devices.router, prefix="/api", tags=["devices"])
    app.include_router(commands.router, prefix="/api", tags=["commands"])

    @app.exception_handler(Exception)
    async def global_exception_handler(request, exc):
        """Global exception handler"""
        logger.error("Unhandled exception", exc_info=exc, path=request.url.path)
        return JSONResponse(
            status_code=500,
            content={
                "status": "error",
                "message": "Internal server error",
                "error": str(exc),
            }
        )

    return app

configure_logging(default_settings.log_level, default_settings.log_json)

app = create_app()

def run():
    uvicorn.run(
        "wearable_telemetry.main:app",
        host=default_settings.api_host,
        port=default_settings.api_port,
        reload=default_settings.debug,
        log_level=default_settings.log_level.lower()
    )

if __name__ == "__main__":
    run()
