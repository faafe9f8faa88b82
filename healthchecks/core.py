# ============================================================================
# HEALTH CHECK CORE TYPES
# ============================================================================
# STATUS: Core - Status, result and probe contract
# PURPOSE: Value types shared by every health check component
# CREATED: 19 OCT 2026
# ============================================================================
"""
Health Check Core Types

Defines the status enumeration, the immutable single-check result and the
probe interface.

Statuses:
- Unknown: nothing recorded yet (sentinel, never a probe outcome)
- Healthy: operational
- Warning: operational with issues
- Unhealthy: not operational

Probes:
    class PostgresCheck(HealthCheck):
        async def check(self, cancellation_token) -> HealthCheckResult:
            await db.execute("SELECT 1")
            return HealthCheckResult.healthy("Database reachable")

    # Or from a plain function
    check = HealthCheck.from_check(lambda: HealthCheckResult.healthy("ok"))
"""

import asyncio
import inspect
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Awaitable, Callable, Dict, Mapping, Optional, Protocol, Tuple, Union

from healthchecks.cancellation import CancellationToken
from healthchecks.errors import argument_not_blank, argument_not_none, argument_valid


class CheckStatus(str, Enum):
    """
    Health check status values.

    Ordering is partial: Unknown < Healthy. Warning and Unhealthy are alarm
    states outside the order, so comparing them to any other status (or
    comparing a status to a plain string) raises TypeError instead of
    falling back to string comparison.
    """
    UNKNOWN = "Unknown"
    UNHEALTHY = "Unhealthy"
    HEALTHY = "Healthy"
    WARNING = "Warning"

    def _ranks(self, other: Any, op: str) -> Tuple[int, int]:
        if not isinstance(other, CheckStatus):
            raise TypeError(
                f"'{op}' not supported between CheckStatus and {type(other).__name__}"
            )
        if self is other:
            return 0, 0
        ordered = (CheckStatus.UNKNOWN, CheckStatus.HEALTHY)
        if self not in ordered or other not in ordered:
            raise TypeError(f"Check statuses {self.value} and {other.value} are not ordered")
        return ordered.index(self), ordered.index(other)

    def __lt__(self, other: Any) -> bool:
        mine, theirs = self._ranks(other, "<")
        return mine < theirs

    def __le__(self, other: Any) -> bool:
        mine, theirs = self._ranks(other, "<=")
        return mine <= theirs

    def __gt__(self, other: Any) -> bool:
        mine, theirs = self._ranks(other, ">")
        return mine > theirs

    def __ge__(self, other: Any) -> bool:
        mine, theirs = self._ranks(other, ">=")
        return mine >= theirs

    @classmethod
    def parse(cls, value: str) -> "CheckStatus":
        """Parse a status name case-insensitively."""
        for status in cls:
            if status.value.lower() == str(value).strip().lower():
                return status
        raise ValueError(f"Unknown check status: {value}")


_EMPTY_DATA: Mapping[str, Any] = MappingProxyType({})


def _freeze(data: Optional[Mapping[str, Any]]) -> Mapping[str, Any]:
    if not data:
        return _EMPTY_DATA
    return MappingProxyType(dict(data))


class CheckResult(Protocol):
    """Anything a probe may return: single or composite result."""

    @property
    def status(self) -> CheckStatus: ...

    @property
    def description(self) -> str: ...

    @property
    def data(self) -> Mapping[str, Any]: ...


@dataclass(frozen=True)
class HealthCheckResult:
    """Result from a single health check. Never mutated after creation."""
    status: CheckStatus
    description: str
    data: Mapping[str, Any] = field(default_factory=lambda: _EMPTY_DATA)

    def __post_init__(self):
        argument_valid(
            isinstance(self.status, CheckStatus) and self.status != CheckStatus.UNKNOWN,
            "status",
            "Cannot create a health check result with status 'Unknown'",
        )
        argument_not_blank("description", self.description)
        object.__setattr__(self, "data", _freeze(self.data))

    @classmethod
    def from_status(
        cls,
        status: CheckStatus,
        description: str,
        data: Optional[Mapping[str, Any]] = None,
    ) -> "HealthCheckResult":
        return cls(status=status, description=description, data=data)

    @classmethod
    def healthy(cls, description: str, data: Optional[Mapping[str, Any]] = None) -> "HealthCheckResult":
        """Create healthy result."""
        return cls(status=CheckStatus.HEALTHY, description=description, data=data)

    @classmethod
    def warning(cls, description: str, data: Optional[Mapping[str, Any]] = None) -> "HealthCheckResult":
        """Create warning result."""
        return cls(status=CheckStatus.WARNING, description=description, data=data)

    @classmethod
    def unhealthy(cls, description: str, data: Optional[Mapping[str, Any]] = None) -> "HealthCheckResult":
        """Create unhealthy result."""
        return cls(status=CheckStatus.UNHEALTHY, description=description, data=data)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON response."""
        return {
            "status": self.status.value,
            "description": self.description,
            "data": dict(self.data),
        }


# ============================================================================
# PROBE INTERFACE
# ============================================================================

CheckFunc = Callable[..., Union[CheckResult, Awaitable[CheckResult]]]


class HealthCheck(ABC):
    """
    Base class for probes.

    Subclass and implement check(). Classes with a no-argument constructor
    can be registered by type and are instantiated by the resolver the
    first time the check runs.
    """

    @abstractmethod
    async def check(self, cancellation_token: CancellationToken) -> CheckResult:
        """
        Execute the probe.

        Args:
            cancellation_token: Signalled when the caller gives up

        Returns:
            HealthCheckResult (or a composite result)
        """
        pass

    @staticmethod
    def from_check(func: CheckFunc) -> "FunctionHealthCheck":
        """Wrap a callable as a probe."""
        return FunctionHealthCheck(func)


def _accepts_token(func: Callable) -> bool:
    """True if func takes a positional argument (the cancellation token)."""
    try:
        parameters = inspect.signature(func).parameters.values()
    except (TypeError, ValueError):
        return False
    return any(
        p.kind in (p.POSITIONAL_ONLY, p.POSITIONAL_OR_KEYWORD, p.VAR_POSITIONAL)
        for p in parameters
    )


class FunctionHealthCheck(HealthCheck):
    """
    Probe built from a function.

    The function may be sync or async and may take the cancellation token
    as its single argument. Sync functions run in the default thread pool,
    so a blocking call neither stalls sibling checks nor outlives the
    caller's deadline (the thread itself is abandoned, not interrupted).
    """

    def __init__(self, func: CheckFunc):
        argument_not_none("func", func)
        argument_valid(callable(func), "func", "Check must be callable")
        self._func = func
        self._pass_token = _accepts_token(func)
        self._is_async = inspect.iscoroutinefunction(func) or inspect.iscoroutinefunction(
            getattr(func, "__call__", None)
        )

    async def check(self, cancellation_token: CancellationToken) -> CheckResult:
        args = (cancellation_token,) if self._pass_token else ()
        if self._is_async:
            result = self._func(*args)
        else:
            # Blocking functions run on a worker thread so the loop stays free
            result = await asyncio.to_thread(self._func, *args)
        if inspect.isawaitable(result):
            result = await result
        return result

    def __repr__(self) -> str:
        name = getattr(self._func, "__qualname__", repr(self._func))
        return f"FunctionHealthCheck({name})"


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "CheckStatus",
    "CheckResult",
    "HealthCheckResult",
    "HealthCheck",
    "FunctionHealthCheck",
    "CheckFunc",
]
