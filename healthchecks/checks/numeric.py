# ============================================================================
# NUMERIC THRESHOLD CHECKS
# ============================================================================
# STATUS: Probes - Min/max value checks
# PURPOSE: Healthy while a sampled value stays on the right side of a bound
# CREATED: 19 OCT 2026
# ============================================================================
"""
Numeric Threshold Checks

    add_min_value_check(builder, "free_workers", 2, pool.free_count)
    add_max_value_check(builder, "queue_depth", 1000, queue.qsize)

The value function is sampled each time the check refreshes. Values only
need to support comparison with the bound.
"""

from typing import Any, Callable, Optional

from healthchecks.core import CheckStatus, HealthCheckResult
from healthchecks.errors import argument_not_blank, argument_not_none


def add_min_value_check(
    builder,
    name: str,
    min_value: Any,
    current_value_func: Callable[[], Any],
    cache_duration: Optional[float] = None,
):
    """Healthy when current_value_func() >= min_value."""
    argument_not_none("builder", builder)
    argument_not_blank("name", name)
    argument_not_none("current_value_func", current_value_func)

    def check() -> HealthCheckResult:
        current = current_value_func()
        status = CheckStatus.HEALTHY if current >= min_value else CheckStatus.UNHEALTHY
        return HealthCheckResult.from_status(
            status,
            f"{name}: min={min_value}, current={current}",
            {"min": min_value, "current": current},
        )

    return builder.add_check(name, check, cache_duration)


def add_max_value_check(
    builder,
    name: str,
    max_value: Any,
    current_value_func: Callable[[], Any],
    cache_duration: Optional[float] = None,
):
    """Healthy when current_value_func() <= max_value."""
    argument_not_none("builder", builder)
    argument_not_blank("name", name)
    argument_not_none("current_value_func", current_value_func)

    def check() -> HealthCheckResult:
        current = current_value_func()
        status = CheckStatus.HEALTHY if current <= max_value else CheckStatus.UNHEALTHY
        return HealthCheckResult.from_status(
            status,
            f"{name}: max={max_value}, current={current}",
            {"max": max_value, "current": current},
        )

    return builder.add_check(name, check, cache_duration)


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "add_min_value_check",
    "add_max_value_check",
]
