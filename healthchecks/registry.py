# ============================================================================
# HEALTH CHECK REGISTRY
# ============================================================================
# STATUS: Core - Check registration and grouping
# PURPOSE: Named, flat, two-level registry of cached checks
# CREATED: 19 OCT 2026
# ============================================================================
"""
Health Check Registry

HealthCheckBuilder owns every registered check. Rules:
- Check names are unique across the whole registry (case-insensitive)
- Every check belongs to exactly one group: the root group ("") or one
  named group
- Groups do not nest; each named group appears in the root group as a
  single synthetic check named "Group(<name>)"

Usage:
    builder = HealthCheckBuilder(resolver=SingletonResolver())
    builder.with_default_cache_duration(60)
    builder.add_check("disk", check_disk)
    builder.add_check_type("postgres", PostgresCheck)
    builder.add_group("upstreams", lambda group: (
        group.add_check("billing", check_billing),
        group.add_check("search", check_search),
    ))

The builder is populated once at startup and only read while checks run.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Callable, Dict, List, Mapping, Optional, Protocol, Type, Union

from core.logging import ComponentType, get_logger
from healthchecks.cached import (
    CachedHealthCheck,
    GroupCachedHealthCheck,
    InstanceCachedHealthCheck,
    TypeCachedHealthCheck,
    group_check_name,
)
from healthchecks.core import CheckFunc, CheckStatus, HealthCheck
from healthchecks.errors import (
    DuplicateNameError,
    UnsupportedOperationError,
    argument_not_blank,
    argument_not_none,
    argument_valid,
)

logger = get_logger(__name__, ComponentType.REGISTRY)

ROOT_GROUP_NAME = ""
DEFAULT_CACHE_DURATION = 300.0


# ============================================================================
# RESOLVERS
# ============================================================================

class ServiceResolver(Protocol):
    """Turns a probe type into a live probe instance."""

    def resolve(self, check_type: Type[HealthCheck]) -> HealthCheck: ...


class SingletonResolver:
    """
    Default resolver: one instance per probe type.

    Types are constructed without arguments unless a factory was
    registered for them.
    """

    def __init__(self, factories: Optional[Dict[type, Callable[[], HealthCheck]]] = None):
        self._factories: Dict[type, Callable[[], HealthCheck]] = dict(factories or {})
        self._instances: Dict[type, HealthCheck] = {}

    def register(self, check_type: Type[HealthCheck], factory: Callable[[], HealthCheck]) -> None:
        argument_not_none("check_type", check_type)
        argument_not_none("factory", factory)
        self._factories[check_type] = factory
        self._instances.pop(check_type, None)

    def resolve(self, check_type: Type[HealthCheck]) -> HealthCheck:
        instance = self._instances.get(check_type)
        if instance is None:
            factory = self._factories.get(check_type, check_type)
            instance = factory()
            if not isinstance(instance, HealthCheck):
                raise TypeError(
                    f"Factory for {check_type.__name__} returned {type(instance).__name__}"
                )
            self._instances[check_type] = instance
            logger.debug(f"Resolved health check type {check_type.__name__}")
        return instance


# ============================================================================
# GROUPS
# ============================================================================

@dataclass
class HealthCheckGroup:
    """A named set of checks merged with its own partial-success status."""
    name: str
    partially_healthy_status: CheckStatus
    checks: List[CachedHealthCheck] = field(default_factory=list)


def _validate_partial_status(argument_name: str, status: CheckStatus) -> None:
    argument_not_none(argument_name, status)
    argument_valid(
        isinstance(status, CheckStatus) and status != CheckStatus.UNKNOWN,
        argument_name,
        f"Check status '{getattr(status, 'value', status)}' is not valid for partial success.",
    )


# ============================================================================
# BUILDERS
# ============================================================================

class _CheckRegistrar:
    """Registration methods shared by the root builder and group builders."""

    @property
    def default_cache_duration(self) -> float:
        raise NotImplementedError

    def _register(self, cached_check: CachedHealthCheck) -> None:
        raise NotImplementedError

    def _duration(self, cache_duration: Optional[float]) -> float:
        return self.default_cache_duration if cache_duration is None else cache_duration

    def add_check(
        self,
        name: str,
        check: Union[HealthCheck, CheckFunc],
        cache_duration: Optional[float] = None,
    ):
        """
        Register a probe instance or a plain callable.

        Args:
            name: Globally unique check name
            check: HealthCheck instance, or callable (sync/async, optionally
                taking the cancellation token)
            cache_duration: Seconds to cache results (default: builder default)

        Raises:
            InvalidArgumentError: Blank name, negative duration, missing check
            DuplicateNameError: Name already registered anywhere
        """
        argument_not_blank("name", name)
        argument_not_none("check", check)
        if not isinstance(check, HealthCheck):
            argument_valid(callable(check), "check", "Check must be a HealthCheck or a callable")
            check = HealthCheck.from_check(check)

        self._register(InstanceCachedHealthCheck(name, self._duration(cache_duration), check))
        return self

    def add_check_type(
        self,
        name: str,
        check_type: Type[HealthCheck],
        cache_duration: Optional[float] = None,
    ):
        """
        Register a probe by type; the resolver instantiates it at run time.

        Raises:
            InvalidArgumentError: Blank name, negative duration, not a HealthCheck type
            DuplicateNameError: Name already registered anywhere
        """
        argument_not_blank("name", name)
        argument_not_none("check_type", check_type)
        argument_valid(
            isinstance(check_type, type) and issubclass(check_type, HealthCheck),
            "check_type",
            "Check type must be a HealthCheck subclass",
        )

        self._register(TypeCachedHealthCheck(name, self._duration(cache_duration), check_type))
        return self


class HealthCheckGroupBuilder(_CheckRegistrar):
    """
    Builder handed to an add_group() configuration function.

    Checks registered here are merged into the parent once the function
    returns. Further groups cannot be added from here.
    """

    def __init__(self, parent: "HealthCheckBuilder", group_name: str):
        self._parent = parent
        self._group_name = group_name
        self._pending: Dict[str, CachedHealthCheck] = {}
        self._closed = False

    @property
    def group_name(self) -> str:
        return self._group_name

    @property
    def default_cache_duration(self) -> float:
        return self._parent.default_cache_duration

    @property
    def checks(self) -> List[CachedHealthCheck]:
        return list(self._pending.values())

    def _register(self, cached_check: CachedHealthCheck) -> None:
        if self._closed:
            raise UnsupportedOperationError(
                f"Group '{self._group_name}' has already been added to its builder."
            )
        self._parent._ensure_unique(cached_check.name)
        key = cached_check.name.casefold()
        if key in self._pending:
            raise DuplicateNameError(
                cached_check.name,
                f"Check name '{cached_check.name}' has already been registered.",
            )
        self._pending[key] = cached_check

    def _close(self) -> None:
        self._closed = True

    def add_group(self, group_name, configure, partially_healthy_status=CheckStatus.WARNING):
        raise UnsupportedOperationError("Nested groups are not supported by HealthCheckBuilder.")


class HealthCheckBuilder(_CheckRegistrar):
    """
    Registry of health checks.

    Construct one at application startup and hand it to HealthCheckService.
    """

    def __init__(
        self,
        resolver: Optional[ServiceResolver] = None,
        default_cache_duration: float = DEFAULT_CACHE_DURATION,
    ):
        self._resolver = resolver
        self._default_cache_duration = DEFAULT_CACHE_DURATION
        self.with_default_cache_duration(default_cache_duration)

        self._checks: Dict[str, CachedHealthCheck] = {}
        self._groups: Dict[str, HealthCheckGroup] = {
            ROOT_GROUP_NAME: HealthCheckGroup(ROOT_GROUP_NAME, CheckStatus.UNHEALTHY),
        }

    # ------------------------------------------------------------------
    # Read API
    # ------------------------------------------------------------------

    @property
    def resolver(self) -> Optional[ServiceResolver]:
        return self._resolver

    @property
    def default_cache_duration(self) -> float:
        return self._default_cache_duration

    @property
    def checks_by_name(self) -> Mapping[str, CachedHealthCheck]:
        return MappingProxyType({c.name: c for c in self._checks.values()})

    @property
    def groups(self) -> Mapping[str, HealthCheckGroup]:
        return MappingProxyType({g.name: g for g in self._groups.values()})

    @property
    def root_group(self) -> HealthCheckGroup:
        return self._groups[ROOT_GROUP_NAME]

    def get_check(self, name: str) -> Optional[CachedHealthCheck]:
        return self._checks.get(name.casefold())

    def get_group(self, group_name: str) -> Optional[HealthCheckGroup]:
        return self._groups.get(group_name.casefold())

    def __len__(self) -> int:
        return len(self._checks)

    def __contains__(self, name: str) -> bool:
        return isinstance(name, str) and name.casefold() in self._checks

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    def with_default_cache_duration(self, duration: float) -> "HealthCheckBuilder":
        """Default cache duration (seconds) for checks added afterwards."""
        argument_not_none("duration", duration)
        argument_valid(
            duration >= 0,
            "duration",
            "Duration must be zero (disabled) or a positive duration.",
        )
        self._default_cache_duration = float(duration)
        return self

    def with_partial_success_status(self, status: CheckStatus) -> "HealthCheckBuilder":
        """Status reported for the root group when Healthy is mixed with other statuses."""
        _validate_partial_status("status", status)
        self.root_group.partially_healthy_status = status
        return self

    def add_group(
        self,
        group_name: str,
        configure: Callable[[HealthCheckGroupBuilder], object],
        partially_healthy_status: CheckStatus = CheckStatus.WARNING,
    ) -> "HealthCheckBuilder":
        """
        Register a named group of checks.

        Args:
            group_name: Unique group name
            configure: Called with a HealthCheckGroupBuilder to add members
            partially_healthy_status: Group status for a Healthy/non-Healthy mix

        Raises:
            InvalidArgumentError: Blank name, missing configure, Unknown status,
                or a group without checks
            DuplicateNameError: Group name reused or check name clash
        """
        argument_not_blank("group_name", group_name)
        argument_not_none("configure", configure)
        _validate_partial_status("partially_healthy_status", partially_healthy_status)

        if group_name.casefold() in self._groups:
            raise DuplicateNameError(
                group_name,
                f"A group with name '{group_name}' has already been registered.",
            )
        synthetic_name = group_check_name(group_name)
        self._ensure_unique(synthetic_name)

        group_builder = HealthCheckGroupBuilder(self, group_name)
        configure(group_builder)
        group_builder._close()

        members = group_builder.checks
        argument_valid(
            bool(members),
            "configure",
            f"Group '{group_name}' must contain at least one check.",
        )
        # configure() may have touched this builder directly; re-check before merging
        member_keys = {c.name.casefold() for c in members}
        for name in [c.name for c in members] + [synthetic_name]:
            self._ensure_unique(name)
        if synthetic_name.casefold() in member_keys:
            raise DuplicateNameError(
                synthetic_name,
                f"Check name '{synthetic_name}' is reserved for group '{group_name}'.",
            )

        group = HealthCheckGroup(group_name, partially_healthy_status, members)
        for cached_check in members:
            self._checks[cached_check.name.casefold()] = cached_check
        self._groups[group_name.casefold()] = group
        self._register(GroupCachedHealthCheck(group))

        logger.debug(f"Registered health check group {group_name} ({len(members)} checks)")
        return self

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _ensure_unique(self, name: str) -> None:
        if name.casefold() in self._checks:
            raise DuplicateNameError(name, f"Check name '{name}' has already been registered.")

    def _register(self, cached_check: CachedHealthCheck) -> None:
        self._ensure_unique(cached_check.name)
        self._checks[cached_check.name.casefold()] = cached_check
        self.root_group.checks.append(cached_check)
        logger.debug(f"Registered health check {cached_check!r}")


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "ROOT_GROUP_NAME",
    "DEFAULT_CACHE_DURATION",
    "ServiceResolver",
    "SingletonResolver",
    "HealthCheckGroup",
    "HealthCheckGroupBuilder",
    "HealthCheckBuilder",
]
