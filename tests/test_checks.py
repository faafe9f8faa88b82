# ============================================================================
# BUNDLED CHECK TESTS
# ============================================================================
# STATUS: Tests - Numeric, process memory and URL probes
# PURPOSE: Verify the ready-made probes register and evaluate correctly
# CREATED: 19 OCT 2026
# ============================================================================
"""
Bundled Check Tests

Uses unittest.mock to patch psutil and httpx.MockTransport for URLs,
so no real HTTP traffic is needed.

Run with:
    pytest tests/test_checks.py -v
"""

import asyncio
from unittest.mock import MagicMock, patch

import httpx
import psutil
import pytest

from healthchecks import (
    CheckStatus,
    HealthCheckResult,
    HealthCheckService,
    InvalidArgumentError,
    run_check,
)
from healthchecks.checks import (
    UrlChecker,
    add_max_value_check,
    add_min_value_check,
    add_private_memory_size_check,
    add_url_check,
    add_url_checks,
    add_virtual_memory_size_check,
    add_working_set_check,
)


def _run(builder, name):
    return asyncio.run(builder.get_check(name).run(builder.resolver))


def _transport(responses):
    """MockTransport answering by URL; values are (status, body) or an exception."""
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        outcome = responses[str(request.url)]
        if isinstance(outcome, Exception):
            raise outcome
        status, body = outcome
        return httpx.Response(status, text=body)

    transport = httpx.MockTransport(handler)
    transport.seen = seen
    return transport


# ============================================================================
# NUMERIC
# ============================================================================

class TestNumericChecks:

    def test_min_value_healthy(self, builder):
        add_min_value_check(builder, "workers", 2, lambda: 4)

        result = _run(builder, "workers")

        assert result.status == CheckStatus.HEALTHY
        assert result.description == "workers: min=2, current=4"
        assert dict(result.data) == {"min": 2, "current": 4}

    def test_min_value_unhealthy(self, builder):
        add_min_value_check(builder, "workers", 2, lambda: 1)
        assert _run(builder, "workers").status == CheckStatus.UNHEALTHY

    def test_max_value_boundary_is_healthy(self, builder):
        add_max_value_check(builder, "queue", 100, lambda: 100)

        result = _run(builder, "queue")

        assert result.status == CheckStatus.HEALTHY
        assert result.description == "queue: max=100, current=100"

    def test_max_value_unhealthy(self, builder):
        add_max_value_check(builder, "queue", 100, lambda: 101)
        assert _run(builder, "queue").status == CheckStatus.UNHEALTHY

    def test_helpers_chain_and_accept_cache_duration(self, builder):
        returned = add_max_value_check(builder, "queue", 1, lambda: 0, cache_duration=30)

        assert returned is builder
        assert builder.get_check("queue").cache_duration == 30.0

    def test_work_inside_groups(self, builder):
        builder.add_group("limits", lambda group: (
            add_min_value_check(group, "workers", 1, lambda: 1),
            add_max_value_check(group, "queue", 10, lambda: 50),
        ))

        result = asyncio.run(HealthCheckService(builder).check_health(group_name="limits"))

        assert result.status == CheckStatus.WARNING

    def test_blank_name_rejected(self, builder):
        with pytest.raises(InvalidArgumentError):
            add_min_value_check(builder, "", 1, lambda: 1)


# ============================================================================
# PROCESS MEMORY
# ============================================================================

class TestProcessChecks:

    @pytest.fixture
    def process(self):
        mock_process = MagicMock()
        mock_process.memory_info.return_value = MagicMock(rss=300, vms=5000)
        mock_process.memory_full_info.return_value = MagicMock(uss=200)
        with patch("healthchecks.checks.process.psutil.Process", return_value=mock_process):
            yield mock_process

    def test_private_memory_uses_uss(self, builder, process):
        add_private_memory_size_check(builder, 250)

        result = _run(builder, "PrivateMemorySize(250)")

        assert result.status == CheckStatus.HEALTHY
        assert result.data["current"] == 200

    def test_private_memory_falls_back_to_rss(self, builder, process):
        process.memory_full_info.side_effect = psutil.AccessDenied()
        add_private_memory_size_check(builder, 250)

        result = _run(builder, "PrivateMemorySize(250)")

        assert result.status == CheckStatus.UNHEALTHY
        assert result.data["current"] == 300

    def test_virtual_memory_uses_vms(self, builder, process):
        add_virtual_memory_size_check(builder, 4096)

        result = _run(builder, "VirtualMemorySize(4096)")

        assert result.status == CheckStatus.UNHEALTHY
        assert result.description == "VirtualMemorySize(4096): max=4096, current=5000"

    def test_working_set_uses_rss(self, builder, process):
        add_working_set_check(builder, 1024)

        result = _run(builder, "WorkingSet(1024)")

        assert result.status == CheckStatus.HEALTHY
        assert dict(result.data) == {"max": 1024, "current": 300}

    def test_real_process_is_measurable(self, builder):
        add_working_set_check(builder, 1024 ** 4)
        assert _run(builder, f"WorkingSet({1024 ** 4})").status == CheckStatus.HEALTHY


# ============================================================================
# URL CHECKS
# ============================================================================

class TestUrlChecker:

    def test_ok_response_is_healthy(self):
        transport = _transport({"http://uri/": (200, "pong")})
        checker = UrlChecker(["http://uri/"], transport=transport)

        result = asyncio.run(run_check(checker))

        assert result.status == CheckStatus.HEALTHY
        assert result.description == "UrlCheck(http://uri/): status code OK (200)"
        assert dict(result.data) == {
            "url": "http://uri/",
            "status": 200,
            "reason": "OK",
            "body": "pong",
        }

    def test_error_response_is_unhealthy(self):
        transport = _transport({"http://uri/": (503, "")})
        checker = UrlChecker(["http://uri/"], transport=transport)

        result = asyncio.run(run_check(checker))

        assert result.status == CheckStatus.UNHEALTHY
        assert result.description == "UrlCheck(http://uri/): status code Service Unavailable (503)"

    def test_requests_bypass_caches(self):
        transport = _transport({"http://uri/": (200, "")})
        asyncio.run(run_check(UrlChecker(["http://uri/"], transport=transport)))

        assert transport.seen[0].headers["Cache-Control"] == "no-cache"

    def test_multiple_urls_form_composite(self):
        transport = _transport({
            "http://primary/": (200, ""),
            "http://replica/": (500, ""),
        })
        checker = UrlChecker(["http://primary/", "http://replica/"], transport=transport)

        result = asyncio.run(run_check(checker))

        assert list(result.results) == ["UrlCheck(http://primary/)", "UrlCheck(http://replica/)"]
        assert result.status == CheckStatus.WARNING

    def test_connection_error_is_contained(self):
        transport = _transport({
            "http://primary/": (200, ""),
            "http://replica/": httpx.ConnectError("refused"),
        })
        checker = UrlChecker(
            ["http://primary/", "http://replica/"],
            partially_healthy_status=CheckStatus.UNHEALTHY,
            transport=transport,
        )

        result = asyncio.run(run_check(checker))

        failed = result.get("UrlCheck(http://replica/)")
        assert failed.status == CheckStatus.UNHEALTHY
        assert failed.description.startswith("Exception during check: ")
        assert failed.description.endswith("ConnectError")
        assert result.status == CheckStatus.UNHEALTHY

    def test_custom_check_func(self):
        def evaluate(response):
            if response.status_code == 429:
                return HealthCheckResult.warning("throttled")
            return HealthCheckResult.healthy("fine")

        transport = _transport({"http://uri/": (429, "")})
        checker = UrlChecker(["http://uri/"], check_func=evaluate, transport=transport)

        assert asyncio.run(run_check(checker)).status == CheckStatus.WARNING

    def test_async_check_func(self):
        async def evaluate(response):
            return HealthCheckResult.healthy(f"body={response.text}")

        transport = _transport({"http://uri/": (200, "ready")})
        checker = UrlChecker(["http://uri/"], check_func=evaluate, transport=transport)

        assert asyncio.run(run_check(checker)).description == "body=ready"

    @pytest.mark.parametrize("urls", [[], ["http://a/", "HTTP://A/"], ["http://a/", " "]])
    def test_invalid_url_lists_rejected(self, urls):
        with pytest.raises(InvalidArgumentError):
            UrlChecker(urls)


class TestUrlRegistration:

    def test_add_url_check_name(self, builder):
        transport = _transport({"http://billing/health": (200, "")})
        add_url_check(builder, "http://billing/health", transport=transport)

        result = _run(builder, "UrlCheck(http://billing/health)")

        assert result.status == CheckStatus.HEALTHY

    def test_add_url_checks_name(self, builder):
        transport = _transport({
            "http://search-1/": (200, ""),
            "http://search-2/": (200, ""),
        })
        add_url_checks(
            builder,
            ["http://search-1/", "http://search-2/"],
            "search",
            CheckStatus.WARNING,
            transport=transport,
        )

        result = _run(builder, "UrlChecks(search)")

        assert result.status == CheckStatus.HEALTHY
        assert len(result) == 2
