# ============================================================================
# HEALTH CHECK SERVICE
# ============================================================================
# STATUS: Core - Query API over a HealthCheckBuilder
# PURPOSE: Run all registered checks (or one group) and log the outcome
# CREATED: 19 OCT 2026
# ============================================================================
"""
Health Check Service

Entry point for adapters (HTTP routes, orchestration gates):

    service = HealthCheckService(builder)
    result = await service.check_health(timeout=10.0)
    if result.status != CheckStatus.HEALTHY:
        ...

Every call runs the root group's checks concurrently (named groups take
part as their synthetic "Group(<name>)" checks), merges them into a fresh
CompositeHealthCheckResult and writes one log record: INFO when the overall
status is Healthy, ERROR otherwise.
"""

import logging
import time
from typing import Optional, Union

from core.logging import ComponentType, get_logger, log_context
from healthchecks.cancellation import CancellationToken
from healthchecks.composite import CompositeHealthCheckResult
from healthchecks.core import CheckStatus
from healthchecks.errors import argument_not_none, argument_valid
from healthchecks.executor import run_checks
from healthchecks.registry import ROOT_GROUP_NAME, HealthCheckBuilder, HealthCheckGroup

NO_CHECKS_MESSAGE = "Health check called with no checks registered"


class HealthCheckService:
    """
    Runs the checks registered in a HealthCheckBuilder.

    Attributes:
        builder: Registry to run
        default_timeout: Seconds allowed per call when the caller passes
            neither a token nor a timeout (None = no deadline)
    """

    def __init__(
        self,
        builder: HealthCheckBuilder,
        logger: Optional[Union[logging.Logger, logging.LoggerAdapter]] = None,
        default_timeout: Optional[float] = None,
    ):
        argument_not_none("builder", builder)
        if default_timeout is not None:
            argument_valid(default_timeout >= 0, "default_timeout", "Timeout must be zero or positive")
        self.builder = builder
        self.default_timeout = default_timeout
        self._logger = logger or get_logger("healthchecks.service", ComponentType.SERVICE)

    async def check_health(
        self,
        cancellation_token: Optional[CancellationToken] = None,
        partially_healthy_status: Optional[CheckStatus] = None,
        group_name: Optional[str] = None,
        timeout: Optional[float] = None,
    ) -> CompositeHealthCheckResult:
        """
        Run every check of the root group (or of one named group).

        Args:
            cancellation_token: Caller's token; takes precedence over timeout
            partially_healthy_status: Override for a Healthy/non-Healthy mix
                (default: the group's configured status)
            group_name: Run only this group's members
            timeout: Seconds before outstanding checks report a timeout

        Returns:
            Fresh composite result

        Raises:
            KeyError: Unknown group_name
            InvalidArgumentError: Override status is Unknown
        """
        group = self._get_group(group_name)

        if partially_healthy_status is None:
            partially_healthy_status = group.partially_healthy_status
        argument_valid(
            isinstance(partially_healthy_status, CheckStatus)
            and partially_healthy_status != CheckStatus.UNKNOWN,
            "partially_healthy_status",
            "Check status 'Unknown' is not valid for partial success.",
        )

        if cancellation_token is None:
            if timeout is None:
                timeout = self.default_timeout
            cancellation_token = CancellationToken(timeout)

        with log_context(operation="check_health", group=group.name or None):
            if not group.checks:
                self._logger.warning(NO_CHECKS_MESSAGE)
                return CompositeHealthCheckResult(partially_healthy_status)

            start_time = time.monotonic()
            result = await run_checks(
                group.checks,
                self.builder.resolver,
                partially_healthy_status,
                cancellation_token,
            )
            duration_ms = (time.monotonic() - start_time) * 1000

            self._log_result(result, duration_ms)
            return result

    async def check_health_strict(
        self,
        cancellation_token: Optional[CancellationToken] = None,
        group_name: Optional[str] = None,
        timeout: Optional[float] = None,
    ) -> CompositeHealthCheckResult:
        """check_health() where any non-Healthy mix is reported Unhealthy."""
        return await self.check_health(
            cancellation_token,
            partially_healthy_status=CheckStatus.UNHEALTHY,
            group_name=group_name,
            timeout=timeout,
        )

    def _get_group(self, group_name: Optional[str]) -> HealthCheckGroup:
        if group_name is None or group_name == ROOT_GROUP_NAME:
            return self.builder.root_group
        group = self.builder.get_group(group_name)
        if group is None:
            raise KeyError(f"Health check group not found: {group_name}")
        return group

    def _log_result(self, result: CompositeHealthCheckResult, duration_ms: float) -> None:
        lines = [
            f"{name}: {child.status.value}: {child.description}"
            for name, child in result.results.items()
        ]
        level = logging.INFO if result.status == CheckStatus.HEALTHY else logging.ERROR
        self._logger.log(
            level,
            "\n".join(lines),
            extra={
                "health_status": result.status.value,
                "check_count": len(result),
                "duration_ms": round(duration_ms, 2),
            },
        )


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "NO_CHECKS_MESSAGE",
    "HealthCheckService",
]
