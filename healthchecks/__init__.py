# ============================================================================
# HEALTH CHECK PACKAGE
# ============================================================================
# STATUS: Core - Health probe aggregation
# PURPOSE: Register, cache and aggregate health probes
# CREATED: 19 OCT 2026
# ============================================================================
"""
Health Check Package

Components:
- core: CheckStatus, HealthCheckResult, HealthCheck probe contract
- composite: CompositeHealthCheckResult (merge of named results)
- cached: TTL cache with single-flight refresh around each probe
- executor: execution guard and concurrent fan-out
- registry: HealthCheckBuilder with named groups
- service: HealthCheckService query API
- checks: bundled numeric, process memory and URL probes

Usage:
    from healthchecks import HealthCheckBuilder, HealthCheckService

    builder = HealthCheckBuilder()
    builder.add_check("disk", check_disk, cache_duration=60)

    service = HealthCheckService(builder)
    result = await service.check_health(timeout=10.0)

The FastAPI router lives in healthchecks.router and is imported separately.
"""

from healthchecks.cached import (
    CachedHealthCheck,
    GroupCachedHealthCheck,
    InstanceCachedHealthCheck,
    TypeCachedHealthCheck,
)
from healthchecks.cancellation import CancellationToken
from healthchecks.composite import CompositeHealthCheckResult
from healthchecks.core import (
    CheckResult,
    CheckStatus,
    FunctionHealthCheck,
    HealthCheck,
    HealthCheckResult,
)
from healthchecks.errors import (
    DuplicateNameError,
    HealthCheckError,
    InvalidArgumentError,
    OperationCancelledError,
    UnsupportedOperationError,
)
from healthchecks.executor import run_check, run_checks, run_guarded
from healthchecks.registry import (
    HealthCheckBuilder,
    HealthCheckGroup,
    HealthCheckGroupBuilder,
    ServiceResolver,
    SingletonResolver,
)
from healthchecks.service import HealthCheckService

__all__ = [
    # Core
    "CheckStatus",
    "CheckResult",
    "HealthCheckResult",
    "HealthCheck",
    "FunctionHealthCheck",
    "CompositeHealthCheckResult",
    "CancellationToken",
    # Errors
    "HealthCheckError",
    "InvalidArgumentError",
    "DuplicateNameError",
    "UnsupportedOperationError",
    "OperationCancelledError",
    # Caching
    "CachedHealthCheck",
    "InstanceCachedHealthCheck",
    "TypeCachedHealthCheck",
    "GroupCachedHealthCheck",
    # Execution
    "run_guarded",
    "run_check",
    "run_checks",
    # Registry
    "HealthCheckBuilder",
    "HealthCheckGroupBuilder",
    "HealthCheckGroup",
    "ServiceResolver",
    "SingletonResolver",
    # Service
    "HealthCheckService",
]
