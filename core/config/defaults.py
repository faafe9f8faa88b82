# ============================================================================
# CONFIGURATION DEFAULTS
# ============================================================================
# STATUS: Core - Default configuration values
# PURPOSE: Centralized defaults for caching, timeouts and logging
# CREATED: 19 OCT 2026
# ============================================================================
"""
Configuration Defaults

Provides defaults for the health check service. These can be overridden
via environment variables.

Design:
- Immutable dataclasses for defaults
- Environment variable overrides
- Type-safe access
"""

import os
from dataclasses import dataclass, field
from typing import Optional

from healthchecks.core import CheckStatus
from healthchecks.errors import InvalidArgumentError


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = float(raw)
    except ValueError:
        raise InvalidArgumentError(name, f"Expected a number, got {raw!r}")
    if value < 0:
        raise InvalidArgumentError(name, "Value must be zero or positive")
    return value


def _env_status(name: str, default: CheckStatus) -> CheckStatus:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        status = CheckStatus.parse(raw)
    except ValueError:
        raise InvalidArgumentError(name, f"Unknown check status {raw!r}")
    if status == CheckStatus.UNKNOWN:
        raise InvalidArgumentError(name, "Check status 'Unknown' is not valid for partial success.")
    return status


@dataclass(frozen=True)
class HealthCheckDefaults:
    """
    Defaults for registration and execution of health checks.
    """
    # Seconds a probe result stays cached (0 disables caching)
    cache_duration: float = 300.0

    # Root group status for a Healthy/non-Healthy mix
    partial_success_status: CheckStatus = CheckStatus.UNHEALTHY

    # Seconds a check_health() call may take before checks report a timeout
    timeout_seconds: float = 30.0

    @classmethod
    def from_env(cls) -> "HealthCheckDefaults":
        """Create from environment variables."""
        return cls(
            cache_duration=_env_float("HEALTH_CACHE_SECONDS", 300.0),
            partial_success_status=_env_status("HEALTH_PARTIAL_STATUS", CheckStatus.UNHEALTHY),
            timeout_seconds=_env_float("HEALTH_TIMEOUT_SECONDS", 30.0),
        )


@dataclass(frozen=True)
class LoggingDefaults:
    """Defaults for log output."""
    level: str = "INFO"
    json_output: bool = False

    @classmethod
    def from_env(cls) -> "LoggingDefaults":
        """Create from environment variables."""
        return cls(
            level=os.getenv("LOG_LEVEL", "INFO").upper(),
            json_output=os.getenv("LOG_FORMAT", "human").lower() == "json",
        )


# ============================================================================
# GLOBAL DEFAULTS INSTANCE
# ============================================================================

@dataclass
class Defaults:
    """Container for all default configurations."""
    health: HealthCheckDefaults = field(default_factory=HealthCheckDefaults)
    logging: LoggingDefaults = field(default_factory=LoggingDefaults)

    @classmethod
    def from_env(cls) -> "Defaults":
        """Create all defaults from environment variables."""
        return cls(
            health=HealthCheckDefaults.from_env(),
            logging=LoggingDefaults.from_env(),
        )


_defaults: Optional[Defaults] = None


def get_defaults() -> Defaults:
    """Get global defaults instance."""
    global _defaults
    if _defaults is None:
        _defaults = Defaults.from_env()
    return _defaults


def reset_defaults() -> None:
    """Reset defaults (for testing)."""
    global _defaults
    _defaults = None


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "HealthCheckDefaults",
    "LoggingDefaults",
    "Defaults",
    "get_defaults",
    "reset_defaults",
]
