# ============================================================================
# HEALTHGATE - MAIN APPLICATION
# ============================================================================
# STATUS: Core - FastAPI application entry point
# PURPOSE: Serve a health check registry over HTTP
# CREATED: 19 OCT 2026
# ============================================================================
"""
Healthgate Main Application

FastAPI application that:
1. Configures logging from the environment
2. Wraps a HealthCheckBuilder in a HealthCheckService
3. Exposes /health, /health/details and /health/groups/{group}

Embed in another service:
    app = create_app(my_builder)

Run standalone (process memory checks only):
    uvicorn main:app --host 0.0.0.0 --port 8000
"""

import os
from typing import Optional

from fastapi import FastAPI

from __version__ import __version__, BUILD_DATE
from core.config import get_defaults
from core.logging import ComponentType, configure_logging, get_logger
from healthchecks import HealthCheckBuilder, HealthCheckService
from healthchecks.checks import add_private_memory_size_check, add_working_set_check
from healthchecks.router import create_health_router

logger = get_logger(__name__, ComponentType.API)

# Memory limits for the standalone app
DEFAULT_MAX_MEMORY_BYTES = 1024 * 1024 * 1024


def create_default_builder() -> HealthCheckBuilder:
    """Builder used when running this module directly: process memory checks."""
    defaults = get_defaults().health
    max_memory = int(os.environ.get("HEALTH_MAX_MEMORY_BYTES", DEFAULT_MAX_MEMORY_BYTES))

    builder = HealthCheckBuilder(default_cache_duration=defaults.cache_duration)
    builder.with_partial_success_status(defaults.partial_success_status)
    builder.add_group("process", lambda group: (
        add_private_memory_size_check(group, max_memory),
        add_working_set_check(group, max_memory),
    ))
    return builder


def create_app(
    builder: HealthCheckBuilder,
    timeout: Optional[float] = None,
) -> FastAPI:
    """
    Create the FastAPI application for a populated builder.

    Args:
        builder: Registered health checks
        timeout: Seconds per health request (default: HEALTH_TIMEOUT_SECONDS)

    Returns:
        FastAPI app with the health routes mounted
    """
    defaults = get_defaults()
    configure_logging(
        level=defaults.logging.level,
        json_output=defaults.logging.json_output,
    )

    if timeout is None:
        timeout = defaults.health.timeout_seconds

    service = HealthCheckService(builder, default_timeout=timeout)

    app = FastAPI(
        title="Healthgate",
        description="Aggregated health checks",
        version=__version__,
    )
    app.state.health_service = service

    # Health check routes (no prefix - /health, /health/details, ...)
    app.include_router(create_health_router(service))

    @app.get("/")
    async def root():
        """Root endpoint."""
        return {
            "service": "Healthgate",
            "version": __version__,
            "build_date": BUILD_DATE,
            "checks": len(builder),
            "docs": "/docs",
        }

    logger.info(f"Healthgate v{__version__} (Build {BUILD_DATE}) serving {len(builder)} checks")
    return app


app = create_app(create_default_builder())


# ============================================================================
# MAIN ENTRY POINT
# ============================================================================

if __name__ == "__main__":
    import uvicorn

    host = os.environ.get("HOST", "0.0.0.0")
    port = int(os.environ.get("PORT", "8000"))

    uvicorn.run(
        "main:app",
        host=host,
        port=port,
        reload=os.environ.get("RELOAD", "false").lower() == "true",
    )
