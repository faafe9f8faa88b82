# ============================================================================
# BUNDLED HEALTH CHECKS
# ============================================================================
# STATUS: Probes - Ready-made checks
# PURPOSE: Registration helpers for common probes
# CREATED: 19 OCT 2026
# ============================================================================
"""
Bundled Health Checks

Helpers take a builder (root or group builder) as first argument and
return it, so they chain like the builder's own methods:

Numeric:
- add_min_value_check / add_max_value_check

Process memory (psutil):
- add_private_memory_size_check
- add_virtual_memory_size_check
- add_working_set_check

HTTP (httpx):
- add_url_check: one URL, named UrlCheck(<url>)
- add_url_checks: several URLs merged into one composite
"""

from healthchecks.checks.numeric import add_min_value_check, add_max_value_check
from healthchecks.checks.process import (
    add_private_memory_size_check,
    add_virtual_memory_size_check,
    add_working_set_check,
)
from healthchecks.checks.url import UrlChecker, add_url_check, add_url_checks

__all__ = [
    # Numeric
    "add_min_value_check",
    "add_max_value_check",
    # Process
    "add_private_memory_size_check",
    "add_virtual_memory_size_check",
    "add_working_set_check",
    # HTTP
    "UrlChecker",
    "add_url_check",
    "add_url_checks",
]
