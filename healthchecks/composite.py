# ============================================================================
# COMPOSITE HEALTH CHECK RESULT
# ============================================================================
# STATUS: Core - Merge of named child results
# PURPOSE: Fold N named results into one status, description and data view
# CREATED: 19 OCT 2026
# ============================================================================
"""
Composite Health Check Result

Accumulates named child results and derives an overall status from the
set of distinct child statuses:

    no children                -> initial_status
    one distinct status        -> that status
    mixed, Healthy among them  -> partially_healthy_status
    mixed, no Healthy          -> Unhealthy

Only the set matters, so the order of add() calls and the number of
children per status never change the outcome.
"""

from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

from healthchecks.core import CheckResult, CheckStatus, HealthCheckResult
from healthchecks.errors import (
    DuplicateNameError,
    argument_not_blank,
    argument_not_none,
    argument_valid,
)


class CompositeHealthCheckResult:
    """Aggregated result from multiple named health checks."""

    def __init__(
        self,
        partially_healthy_status: CheckStatus = CheckStatus.WARNING,
        initial_status: CheckStatus = CheckStatus.UNKNOWN,
    ):
        self._partially_healthy_status = partially_healthy_status
        self._initial_status = initial_status
        # casefolded name -> (display name, result), insertion ordered
        self._results: Dict[str, tuple] = {}

    @property
    def initial_status(self) -> CheckStatus:
        return self._initial_status

    @property
    def partially_healthy_status(self) -> CheckStatus:
        return self._partially_healthy_status

    @property
    def status(self) -> CheckStatus:
        statuses = {result.status for _, result in self._results.values()}
        if not statuses:
            return self._initial_status
        if len(statuses) == 1:
            return next(iter(statuses))
        if CheckStatus.HEALTHY in statuses:
            return self._partially_healthy_status
        return CheckStatus.UNHEALTHY

    @property
    def description(self) -> str:
        return "\n".join(
            f"{name}: {result.description}"
            for name, result in self._results.values()
        )

    @property
    def data(self) -> Mapping[str, Any]:
        return MappingProxyType({
            name: result.data
            for name, result in self._results.values()
        })

    @property
    def results(self) -> Mapping[str, CheckResult]:
        """Child results keyed by the name they were added under."""
        return MappingProxyType({
            name: result
            for name, result in self._results.values()
        })

    def add(self, name: str, result: CheckResult) -> None:
        """
        Record a child result.

        Raises:
            InvalidArgumentError: Blank name, missing result or Unknown status
            DuplicateNameError: Name already present (case-insensitive)
        """
        argument_not_blank("name", name)
        argument_not_none("result", result)
        argument_valid(
            result.status != CheckStatus.UNKNOWN,
            "result",
            "Cannot add unknown status to composite health check result",
        )

        key = name.casefold()
        if key in self._results:
            raise DuplicateNameError(name, f"Check name {name} must be unique")
        self._results[key] = (name, result)

    def add_status(
        self,
        name: str,
        status: CheckStatus,
        description: str,
        data: Optional[Mapping[str, Any]] = None,
    ) -> None:
        """Record a child result built from its parts."""
        self.add(name, HealthCheckResult.from_status(status, description, data))

    def get(self, name: str) -> Optional[CheckResult]:
        entry = self._results.get(name.casefold())
        return entry[1] if entry else None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON response."""
        return {
            "status": self.status.value,
            "description": self.description,
            "results": {
                name: result.to_dict()
                for name, result in self._results.values()
            },
        }

    def __len__(self) -> int:
        return len(self._results)

    def __contains__(self, name: str) -> bool:
        return isinstance(name, str) and name.casefold() in self._results

    def __repr__(self) -> str:
        return f"CompositeHealthCheckResult(status={self.status.value}, results={len(self)})"


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "CompositeHealthCheckResult",
]
