"""Application factory for creating FastAPI instances."""

from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import AppConfig, get_config, validate_config
from .core.automations import AutomationCatalog, default_catalog
from .core.logging import setup_logging, get_logger
from .core.middleware import ErrorHandlingMiddleware, PerformanceMonitoringMiddleware
from .api.endpoints import router


def configure_logging(config: AppConfig):
    """Apply the logging settings from the configuration."""
    return setup_logging(
        level=config.log_level.value,
        log_file=config.log_file,
        log_format=config.log_format,
        structured=config.log_structured,
        max_size=config.log_max_size,
        backup_count=config.log_backup_count
    )


def create_lifespan_handler(config: AppConfig):
    """Create the application lifespan handler."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger = configure_logging(config)
        logger.info(f"Starting {config.app_name} v{config.app_version}")
        logger.info(f"Automation catalog holds {len(app.state.automation_catalog)} actions")

        yield

        logger.info(f"Shutting down {config.app_name}")

    return lifespan


def create_app(
    config: Optional[AppConfig] = None,
    automation_catalog: Optional[AutomationCatalog] = None
) -> FastAPI:
    """Create and configure FastAPI application instance."""
    if config is None:
        config = get_config()

    validate_config(config)

    app = FastAPI(
        title=config.app_name,
        description="Validates workflow graphs and simulates their execution as a timestamped trace",
        version=config.app_version,
        debug=config.debug,
        lifespan=create_lifespan_handler(config)
    )

    app.state.config = config
    app.state.automation_catalog = automation_catalog or default_catalog()

    if config.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=config.cors_origins,
            allow_credentials=True,
            allow_methods=config.cors_methods,
            allow_headers=["*"],
        )

    app.add_middleware(ErrorHandlingMiddleware)
    if config.enable_performance_monitoring:
        app.add_middleware(PerformanceMonitoringMiddleware, slow_request_threshold=config.slow_request_threshold)

    app.include_router(router)

    add_health_endpoints(app, config)

    get_logger(__name__).debug(f"Created application '{config.app_name}'")
    return app


def add_health_endpoints(app: FastAPI, config: AppConfig) -> None:
    """Add health check endpoints to the application."""
    service_name = config.app_name.lower().replace(" ", "-")

    @app.get("/")
    async def root():
        """Root endpoint for basic health check."""
        return {"message": f"{config.app_name} is running", "version": config.app_version}

    @app.get("/health")
    async def health_check():
        """Basic health check endpoint."""
        return {
            "status": "healthy",
            "service": service_name,
            "version": config.app_version,
            "automations": len(app.state.automation_catalog)
        }

    @app.get("/health/live")
    async def liveness_check():
        """Liveness check endpoint for container orchestration."""
        return {
            "alive": True,
            "timestamp": datetime.now(timezone.utc).isoformat()
        }
