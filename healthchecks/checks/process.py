# ============================================================================
# PROCESS MEMORY CHECKS
# ============================================================================
# STATUS: Probes - Memory usage of the current process
# PURPOSE: Unhealthy once the process grows past a byte limit
# CREATED: 19 OCT 2026
# ============================================================================
"""
Process Memory Checks

Built on add_max_value_check() with psutil as the sampler:
- PrivateMemorySize(<max>): unique set size (falls back to RSS where the
  platform does not expose it)
- VirtualMemorySize(<max>): virtual memory size
- WorkingSet(<max>): resident set size
"""

import logging
from typing import Optional

import psutil

from healthchecks.checks.numeric import add_max_value_check

logger = logging.getLogger(__name__)


def private_memory_size() -> int:
    process = psutil.Process()
    try:
        return process.memory_full_info().uss
    except (psutil.AccessDenied, AttributeError) as e:
        logger.debug(f"USS unavailable ({type(e).__name__}), using RSS")
        return process.memory_info().rss


def virtual_memory_size() -> int:
    return psutil.Process().memory_info().vms


def working_set() -> int:
    return psutil.Process().memory_info().rss


def add_private_memory_size_check(builder, max_size: int, cache_duration: Optional[float] = None):
    return add_max_value_check(
        builder, f"PrivateMemorySize({max_size})", max_size, private_memory_size, cache_duration
    )


def add_virtual_memory_size_check(builder, max_size: int, cache_duration: Optional[float] = None):
    return add_max_value_check(
        builder, f"VirtualMemorySize({max_size})", max_size, virtual_memory_size, cache_duration
    )


def add_working_set_check(builder, max_size: int, cache_duration: Optional[float] = None):
    return add_max_value_check(
        builder, f"WorkingSet({max_size})", max_size, working_set, cache_duration
    )


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "private_memory_size",
    "virtual_memory_size",
    "working_set",
    "add_private_memory_size_check",
    "add_virtual_memory_size_check",
    "add_working_set_check",
]
