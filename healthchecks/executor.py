# ============================================================================
# HEALTH CHECK EXECUTOR
# ============================================================================
# STATUS: Core - Guarded probe execution and concurrent fan-out
# PURPOSE: Turn probe exceptions/timeouts into Unhealthy results
# CREATED: 19 OCT 2026
# ============================================================================
"""
Health Check Executor

Executes probes so that a faulty probe cannot break the aggregate run:
- Exceptions become Unhealthy("Exception during check: <kind>")
- Cancellation or deadline expiry becomes Unhealthy("The health check
  operation timed out"); the in-flight probe task is abandoned
- Results are otherwise returned unchanged

run_checks() launches every cached check concurrently and merges the
results into a fresh CompositeHealthCheckResult.
"""

import asyncio
from typing import TYPE_CHECKING, Any, Awaitable, Callable, Iterable, Optional

from core.logging import ComponentType, get_logger
from healthchecks.cancellation import CancellationToken
from healthchecks.composite import CompositeHealthCheckResult
from healthchecks.core import CheckResult, CheckStatus, HealthCheck, HealthCheckResult
from healthchecks.errors import (
    InvalidArgumentError,
    OperationCancelledError,
    argument_not_none,
)

if TYPE_CHECKING:
    from healthchecks.cached import CachedHealthCheck
    from healthchecks.registry import ServiceResolver

logger = get_logger(__name__, ComponentType.EXECUTOR)

TIMED_OUT_DESCRIPTION = "The health check operation timed out"

ProbeCall = Callable[[CancellationToken], Awaitable[CheckResult]]


def error_kind(error: BaseException) -> str:
    """Qualified exception class name; builtins are left unprefixed."""
    cls = type(error)
    if cls.__module__ == "builtins":
        return cls.__qualname__
    return f"{cls.__module__}.{cls.__qualname__}"


def timed_out_result() -> HealthCheckResult:
    return HealthCheckResult.unhealthy(TIMED_OUT_DESCRIPTION)


def exception_result(error: BaseException) -> HealthCheckResult:
    return HealthCheckResult.unhealthy(f"Exception during check: {error_kind(error)}")


def _validate_result(result: Any) -> CheckResult:
    if not isinstance(result, (HealthCheckResult, CompositeHealthCheckResult)):
        raise InvalidArgumentError(
            "result",
            f"Check returned {type(result).__name__}, expected a health check result",
        )
    if result.status == CheckStatus.UNKNOWN:
        raise InvalidArgumentError("result", "Check returned status 'Unknown'")
    return result


def _discard_outcome(task: asyncio.Future) -> None:
    # Abandoned probe tasks may still fail; retrieve so asyncio doesn't warn
    if not task.cancelled():
        task.exception()


async def _race(awaitable: Awaitable[Any], token: CancellationToken) -> Any:
    """Await a probe unless the token fires first."""
    probe_task = asyncio.ensure_future(awaitable)

    try:
        # Only a cancelled token ends the wait early; a watcher that returns
        # for any other reason (timer slack, failure) is simply replaced
        while not probe_task.done() and not token.is_cancelled:
            cancel_task = asyncio.ensure_future(token.wait())
            try:
                await asyncio.wait(
                    {probe_task, cancel_task},
                    return_when=asyncio.FIRST_COMPLETED,
                )
            finally:
                if cancel_task.done():
                    _discard_outcome(cancel_task)
                else:
                    cancel_task.cancel()
    finally:
        if not probe_task.done():
            probe_task.add_done_callback(_discard_outcome)
            probe_task.cancel()

    if not probe_task.done():
        raise OperationCancelledError()
    if probe_task.cancelled():
        # Cancelled from inside the probe, not by us
        raise OperationCancelledError()
    return probe_task.result()


async def run_guarded(
    probe_call: ProbeCall,
    cancellation_token: Optional[CancellationToken] = None,
    name: Optional[str] = None,
) -> CheckResult:
    """
    Run a probe call under the execution guard.

    Never raises for probe failures; asyncio.CancelledError of the calling
    task still propagates.

    Args:
        probe_call: Callable taking the token and returning an awaitable result
        cancellation_token: Caller's token (a fresh, never-cancelled one if None)
        name: Check name used in log messages

    Returns:
        The probe's own result, or an Unhealthy result
    """
    argument_not_none("probe_call", probe_call)
    token = cancellation_token or CancellationToken()
    label = name or getattr(probe_call, "__qualname__", "check")

    if token.is_cancelled:
        logger.warning(f"Health check {label} skipped: cancellation requested")
        return timed_out_result()

    try:
        result = await _race(probe_call(token), token)
        return _validate_result(result)

    except (OperationCancelledError, asyncio.TimeoutError):
        logger.warning(f"Health check {label} timed out")
        return timed_out_result()

    except Exception as e:
        logger.warning(f"Health check {label} failed: {error_kind(e)}: {e}")
        return exception_result(e)


async def run_check(
    check: HealthCheck,
    cancellation_token: Optional[CancellationToken] = None,
) -> CheckResult:
    """Run a single probe instance under the execution guard."""
    argument_not_none("check", check)
    return await run_guarded(check.check, cancellation_token, name=repr(check))


async def run_checks(
    checks: Iterable["CachedHealthCheck"],
    resolver: Optional["ServiceResolver"],
    partially_healthy_status: CheckStatus,
    cancellation_token: Optional[CancellationToken] = None,
) -> CompositeHealthCheckResult:
    """
    Run cached checks concurrently and merge their results.

    Args:
        checks: Cached checks to run (names must be unique)
        resolver: Resolver for type-registered checks
        partially_healthy_status: Status for a Healthy/non-Healthy mix
        cancellation_token: Shared by every check

    Returns:
        Composite result, children in the order the checks were given
    """
    argument_not_none("checks", checks)
    checks = list(checks)
    token = cancellation_token or CancellationToken()

    results = await asyncio.gather(*(
        check.run(resolver, token) for check in checks
    ))

    composite = CompositeHealthCheckResult(partially_healthy_status)
    for check, result in zip(checks, results):
        composite.add(check.name, result)
    return composite


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "TIMED_OUT_DESCRIPTION",
    "error_kind",
    "timed_out_result",
    "exception_result",
    "run_guarded",
    "run_check",
    "run_checks",
]
