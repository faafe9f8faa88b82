# ============================================================================
# CACHED HEALTH CHECK
# ============================================================================
# STATUS: Core - TTL caching with single-flight refresh
# PURPOSE: Bound how often an expensive probe runs
# CREATED: 19 OCT 2026
# ============================================================================
"""
Cached Health Check

Wraps one registered probe. Within the cache window callers get the stored
result without suspending. When the window has passed, exactly one caller
becomes the refresher (writer flag); everyone else polls every
WAIT_INTERVAL_SECONDS until the fresh result is published, so N concurrent
callers cause one underlying probe execution.

A cache_duration of 0 disables caching. A refresh that ends with the
caller's token cancelled is returned but does not extend the cache window.
"""

import asyncio
import time
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Optional, Type

from core.logging import ComponentType, get_logger, log_context
from healthchecks.cancellation import CancellationToken
from healthchecks.core import CheckResult, HealthCheck
from healthchecks.errors import argument_not_blank, argument_not_none, argument_valid
from healthchecks.executor import (
    run_checks,
    run_guarded,
    timed_out_result,
)

if TYPE_CHECKING:
    from healthchecks.registry import HealthCheckGroup, ServiceResolver

logger = get_logger(__name__, ComponentType.PROBE)


class CachedHealthCheck(ABC):
    """
    Base class for registered checks.

    Subclasses supply resolve(), which returns the probe to run.
    """

    WAIT_INTERVAL_SECONDS = 0.005

    def __init__(self, name: str, cache_duration: float):
        argument_not_blank("name", name)
        argument_not_none("cache_duration", cache_duration)
        argument_valid(
            cache_duration >= 0,
            "cache_duration",
            "Cache duration must either be zero (disabled) or a positive value",
        )

        self._name = name
        self._cache_duration = float(cache_duration)
        self._cached_result: Optional[CheckResult] = None
        self._cache_expiration = 0.0
        self._writer = False

    @property
    def name(self) -> str:
        return self._name

    @property
    def cache_duration(self) -> float:
        return self._cache_duration

    @property
    def cached_result(self) -> Optional[CheckResult]:
        return self._cached_result

    @property
    def cache_expiration(self) -> float:
        """Monotonic time at which the cached result goes stale (0.0 = never run)."""
        return self._cache_expiration

    def _now(self) -> float:
        return time.monotonic()

    @abstractmethod
    def resolve(self, resolver: Optional["ServiceResolver"]) -> HealthCheck:
        """Return the probe instance to execute."""
        pass

    async def run(
        self,
        resolver: Optional["ServiceResolver"],
        cancellation_token: Optional[CancellationToken] = None,
    ) -> CheckResult:
        """
        Return the cached result, refreshing it if stale.

        Args:
            resolver: Resolver for type-registered probes
            cancellation_token: Caller's token; also bounds the wait loop

        Returns:
            Fresh or cached result; never raises for probe failures
        """
        token = cancellation_token or CancellationToken()

        while self._cache_expiration <= self._now():
            # Test-and-set without a suspension point in between
            if self._writer:
                if token.is_cancelled:
                    logger.warning(f"Health check {self._name} timed out waiting for refresh")
                    return timed_out_result()
                await asyncio.sleep(self.WAIT_INTERVAL_SECONDS)
                continue

            self._writer = True
            try:
                return await self._refresh(resolver, token)
            finally:
                self._writer = False

        return self._cached_result

    async def _refresh(
        self,
        resolver: Optional["ServiceResolver"],
        token: CancellationToken,
    ) -> CheckResult:
        async def probe_call(inner_token: CancellationToken) -> CheckResult:
            return await self.resolve(resolver).check(inner_token)

        with log_context(check_name=self._name):
            logger.debug(f"Refreshing health check {self._name}")
            result = await run_guarded(probe_call, token, name=self._name)
        self._cached_result = result

        if not token.is_cancelled:
            self._cache_expiration = self._now() + self._cache_duration
        return result

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self._name!r}, cache_duration={self._cache_duration})"


class InstanceCachedHealthCheck(CachedHealthCheck):
    """Cached check around a probe instance supplied at registration."""

    def __init__(self, name: str, cache_duration: float, check: HealthCheck):
        super().__init__(name, cache_duration)
        argument_not_none("check", check)
        self._check = check

    @property
    def check(self) -> HealthCheck:
        return self._check

    def resolve(self, resolver: Optional["ServiceResolver"]) -> HealthCheck:
        return self._check


class TypeCachedHealthCheck(CachedHealthCheck):
    """Cached check whose probe is resolved from a type at run time."""

    def __init__(self, name: str, cache_duration: float, check_type: Type[HealthCheck]):
        super().__init__(name, cache_duration)
        argument_not_none("check_type", check_type)
        self._check_type = check_type

    @property
    def check_type(self) -> Type[HealthCheck]:
        return self._check_type

    def resolve(self, resolver: Optional["ServiceResolver"]) -> HealthCheck:
        if resolver is None:
            raise LookupError(
                f"No resolver configured for health check type {self._check_type.__name__}"
            )
        return resolver.resolve(self._check_type)


class GroupHealthCheck(HealthCheck):
    """Probe that runs every member of a group and merges the results."""

    def __init__(self, group: "HealthCheckGroup", resolver: Optional["ServiceResolver"]):
        self._group = group
        self._resolver = resolver

    async def check(self, cancellation_token: CancellationToken) -> CheckResult:
        return await run_checks(
            self._group.checks,
            self._resolver,
            self._group.partially_healthy_status,
            cancellation_token,
        )

    def __repr__(self) -> str:
        return f"GroupHealthCheck({self._group.name!r})"


class GroupCachedHealthCheck(CachedHealthCheck):
    """
    Synthetic root check standing in for a named group.

    Not cached on its own; members keep their own cache windows.
    """

    def __init__(self, group: "HealthCheckGroup"):
        super().__init__(group_check_name(group.name), 0)
        self._group = group

    @property
    def group(self) -> "HealthCheckGroup":
        return self._group

    def resolve(self, resolver: Optional["ServiceResolver"]) -> HealthCheck:
        return GroupHealthCheck(self._group, resolver)


def group_check_name(group_name: str) -> str:
    """Name of the synthetic check registered for a group."""
    return f"Group({group_name})"


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "CachedHealthCheck",
    "InstanceCachedHealthCheck",
    "TypeCachedHealthCheck",
    "GroupHealthCheck",
    "GroupCachedHealthCheck",
    "group_check_name",
]
