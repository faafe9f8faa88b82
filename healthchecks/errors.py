# ============================================================================
# HEALTH CHECK ERRORS
# ============================================================================
# STATUS: Core - Error taxonomy for health check configuration
# PURPOSE: Configuration-time exceptions and argument guards
# CREATED: 19 OCT 2026
# ============================================================================
"""
Health Check Errors

Configuration mistakes (bad names, negative cache durations, Unknown
statuses, nested groups) raise immediately. Probe failures never use these
exceptions to reach the caller; the execution guard turns them into
Unhealthy results.
"""

from typing import Any


# ============================================================================
# EXCEPTIONS
# ============================================================================

class HealthCheckError(Exception):
    """Base exception for health check errors."""
    pass


class InvalidArgumentError(HealthCheckError, ValueError):
    """Raised when a configuration value is not acceptable."""
    def __init__(self, argument_name: str, message: str):
        self.argument_name = argument_name
        super().__init__(f"{message} (argument: {argument_name})")


class DuplicateNameError(HealthCheckError, ValueError):
    """Raised when a check, group or result name is already in use."""
    def __init__(self, name: str, message: str = None):
        self.name = name
        super().__init__(message or f"Name '{name}' must be unique")


class UnsupportedOperationError(HealthCheckError, RuntimeError):
    """Raised for operations the builder refuses (e.g. nested groups)."""
    pass


class OperationCancelledError(HealthCheckError):
    """Raised when a cancellation token has been cancelled or expired."""
    def __init__(self, message: str = "The operation was cancelled"):
        super().__init__(message)


# ============================================================================
# GUARDS
# ============================================================================

def argument_not_none(argument_name: str, value: Any) -> None:
    if value is None:
        raise InvalidArgumentError(argument_name, "Value must not be None")


def argument_not_blank(argument_name: str, value: str) -> None:
    """Reject None, non-strings, and strings that are empty or whitespace."""
    argument_not_none(argument_name, value)
    if not isinstance(value, str) or not value.strip():
        raise InvalidArgumentError(
            argument_name, "Value must contain a non-whitespace value"
        )


def argument_valid(valid: bool, argument_name: str, message: str) -> None:
    if not valid:
        raise InvalidArgumentError(argument_name, message)


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "HealthCheckError",
    "InvalidArgumentError",
    "DuplicateNameError",
    "UnsupportedOperationError",
    "OperationCancelledError",
    "argument_not_none",
    "argument_not_blank",
    "argument_valid",
]
