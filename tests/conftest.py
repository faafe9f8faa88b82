# ============================================================================
# SHARED TEST FIXTURES
# ============================================================================
# STATUS: Tests - Fixtures and probe doubles
# PURPOSE: Builders, counting probes and a controllable clock
# CREATED: 19 OCT 2026
# ============================================================================

import asyncio

import pytest

from core.config import reset_defaults
from healthchecks import HealthCheck, HealthCheckBuilder, HealthCheckResult


class CountingCheck(HealthCheck):
    """Probe that records how often it ran and returns a fixed result."""

    def __init__(self, result=None, delay: float = 0.0):
        self.result = result or HealthCheckResult.healthy("ok")
        self.delay = delay
        self.calls = 0

    async def check(self, cancellation_token):
        self.calls += 1
        if self.delay:
            await asyncio.sleep(self.delay)
        return self.result


class FakeClock:
    """Replacement for CachedHealthCheck._now()."""

    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture(autouse=True)
def _fresh_defaults():
    reset_defaults()
    yield
    reset_defaults()


@pytest.fixture
def builder():
    """Empty builder with caching disabled."""
    return HealthCheckBuilder(default_cache_duration=0)


@pytest.fixture
def clock():
    return FakeClock()
