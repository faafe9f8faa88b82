# ============================================================================
# HEALTH CHECK ROUTER
# ============================================================================
# STATUS: Infrastructure - FastAPI health check endpoints
# PURPOSE: Expose HealthCheckService over HTTP for probes and dashboards
# CREATED: 19 OCT 2026
# ============================================================================
"""
Health Check Router

Endpoints:
    GET /health                  - Overall status only (load balancer probe)
    GET /health/details          - Status, description and every check result
    GET /health/groups/{group}   - One named group

/health and /health/details use the strict merge: any non-Healthy check
makes the overall status Unhealthy.

Response Codes:
    200 - Healthy
    404 - Unknown group
    503 - Anything else (service unavailable)
"""

import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from core.logging import log_context
from healthchecks.core import CheckStatus
from healthchecks.service import HealthCheckService

logger = logging.getLogger(__name__)


# ============================================================================
# RESPONSE MODELS
# ============================================================================

class HealthStatusResponse(BaseModel):
    """Overall status only."""
    status: CheckStatus


class CheckResultResponse(BaseModel):
    """One check result; composite results nest their own children."""
    status: CheckStatus
    description: str
    data: Dict[str, Any] = Field(default_factory=dict)
    results: Optional[Dict[str, "CheckResultResponse"]] = None


class HealthDetailsResponse(BaseModel):
    """Full composite result."""
    status: CheckStatus
    description: str
    results: Dict[str, CheckResultResponse] = Field(default_factory=dict)


class ErrorResponse(BaseModel):
    error: str


CheckResultResponse.model_rebuild()


def _status_to_http_code(status: CheckStatus) -> int:
    return 200 if status == CheckStatus.HEALTHY else 503


def _request_context(request: Request):
    """Log context carrying the caller's X-Request-ID as correlation_id."""
    return log_context(correlation_id=request.headers.get("X-Request-ID") or None)


# ============================================================================
# ROUTER FACTORY
# ============================================================================

def create_health_router(
    service: HealthCheckService,
    timeout: Optional[float] = None,
) -> APIRouter:
    """
    Build the health check router for a service.

    Args:
        service: Service whose checks back the endpoints
        timeout: Seconds per request before outstanding checks report a
            timeout (default: the service's default_timeout)

    Returns:
        APIRouter to include in the application
    """
    router = APIRouter(tags=["Health"])

    @router.get(
        "/health",
        response_model=HealthStatusResponse,
        responses={503: {"model": HealthStatusResponse}},
    )
    async def health_status(request: Request):
        """Overall status; 200 when Healthy, 503 otherwise."""
        with _request_context(request):
            result = await service.check_health_strict(timeout=timeout)
        body = HealthStatusResponse(status=result.status)
        return JSONResponse(
            status_code=_status_to_http_code(result.status),
            content=body.model_dump(mode="json"),
        )

    @router.get(
        "/health/details",
        response_model=HealthDetailsResponse,
        responses={503: {"model": HealthDetailsResponse}},
    )
    async def health_details(request: Request):
        """Every check's status, description and data."""
        with _request_context(request):
            result = await service.check_health_strict(timeout=timeout)
        return JSONResponse(
            status_code=_status_to_http_code(result.status),
            content=jsonable_encoder(result.to_dict()),
        )

    @router.get(
        "/health/groups/{group_name}",
        response_model=HealthDetailsResponse,
        responses={
            404: {"model": ErrorResponse},
            503: {"model": HealthDetailsResponse},
        },
    )
    async def group_health(group_name: str, request: Request):
        """Run one named group with its own partial-success status."""
        try:
            with _request_context(request):
                result = await service.check_health(group_name=group_name, timeout=timeout)
        except KeyError:
            logger.info(f"Health check group not found: {group_name}")
            return JSONResponse(
                status_code=404,
                content={"error": f"Health check group not found: {group_name}"},
            )

        return JSONResponse(
            status_code=_status_to_http_code(result.status),
            content=jsonable_encoder(result.to_dict()),
        )

    return router


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "HealthStatusResponse",
    "CheckResultResponse",
    "HealthDetailsResponse",
    "create_health_router",
]
