# ============================================================================
# URL HEALTH CHECKS
# ============================================================================
# STATUS: Probes - HTTP reachability of dependencies
# PURPOSE: GET one or more URLs and evaluate the responses
# CREATED: 19 OCT 2026
# ============================================================================
"""
URL Health Checks

    add_url_check(builder, "https://billing.internal/health")
    add_url_checks(builder, [primary, replica], "search", CheckStatus.WARNING)

Requests are sent with Cache-Control: no-cache. By default a 200 response
is Healthy and anything else Unhealthy; pass check_func (sync or async,
receiving the httpx.Response) to evaluate responses differently.
A multi-URL check returns a composite with one entry per URL.
"""

import asyncio
import inspect
import logging
from typing import Awaitable, Callable, List, Optional, Sequence, Tuple, Union

import httpx

from healthchecks.cancellation import CancellationToken
from healthchecks.composite import CompositeHealthCheckResult
from healthchecks.core import CheckResult, CheckStatus, HealthCheck, HealthCheckResult
from healthchecks.errors import argument_not_blank, argument_not_none, argument_valid
from healthchecks.executor import exception_result, error_kind

logger = logging.getLogger(__name__)

UrlCheckFunc = Callable[[httpx.Response], Union[CheckResult, Awaitable[CheckResult]]]

DEFAULT_REQUEST_TIMEOUT = 10.0


def url_check_name(url: str) -> str:
    return f"UrlCheck({url})"


def default_url_check(response: httpx.Response) -> HealthCheckResult:
    """200 is Healthy, anything else Unhealthy."""
    url = str(response.request.url)
    status = CheckStatus.HEALTHY if response.status_code == 200 else CheckStatus.UNHEALTHY
    data = {
        "url": url,
        "status": response.status_code,
        "reason": response.reason_phrase,
        "body": response.text,
    }
    return HealthCheckResult.from_status(
        status,
        f"UrlCheck({url}): status code {response.reason_phrase} ({response.status_code})",
        data,
    )


class UrlChecker(HealthCheck):
    """
    Probe that fetches one or more URLs.

    Attributes:
        urls: URLs to fetch (requested concurrently)
        partially_healthy_status: Composite status for mixed outcomes
    """

    def __init__(
        self,
        urls: Sequence[str],
        check_func: Optional[UrlCheckFunc] = None,
        partially_healthy_status: CheckStatus = CheckStatus.WARNING,
        timeout: float = DEFAULT_REQUEST_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        argument_not_none("urls", urls)
        urls = list(urls)
        argument_valid(bool(urls), "urls", "At least one URL is required")
        for url in urls:
            argument_not_blank("urls", url)
        argument_valid(
            len({u.casefold() for u in urls}) == len(urls),
            "urls",
            "URLs must be unique",
        )
        argument_valid(
            partially_healthy_status != CheckStatus.UNKNOWN,
            "partially_healthy_status",
            "Check status 'Unknown' is not valid for partial success.",
        )

        self.urls: List[str] = urls
        self.partially_healthy_status = partially_healthy_status
        self._check_func = check_func or default_url_check
        self._timeout = timeout
        self._transport = transport

    def _create_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=self._timeout,
            headers={"Cache-Control": "no-cache"},
            transport=self._transport,
        )

    async def check(self, cancellation_token: CancellationToken) -> CheckResult:
        async with self._create_client() as client:
            if len(self.urls) == 1:
                _, result = await self._check_url(client, self.urls[0])
                return result

            outcomes = await asyncio.gather(*(
                self._check_url(client, url) for url in self.urls
            ))

        composite = CompositeHealthCheckResult(self.partially_healthy_status)
        for name, result in outcomes:
            composite.add(name, result)
        return composite

    async def _check_url(self, client: httpx.AsyncClient, url: str) -> Tuple[str, CheckResult]:
        name = url_check_name(url)
        try:
            response = await client.get(url)
            result = self._check_func(response)
            if inspect.isawaitable(result):
                result = await result
            return name, result
        except Exception as e:
            logger.warning(f"{name} failed: {error_kind(e)}: {e}")
            return name, exception_result(e)

    def __repr__(self) -> str:
        return f"UrlChecker({', '.join(self.urls)})"


def add_url_check(
    builder,
    url: str,
    check_func: Optional[UrlCheckFunc] = None,
    cache_duration: Optional[float] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
):
    """Register a single-URL check named UrlCheck(<url>)."""
    argument_not_none("builder", builder)
    argument_not_blank("url", url)
    checker = UrlChecker([url], check_func, transport=transport)
    return builder.add_check(url_check_name(url), checker, cache_duration)


def add_url_checks(
    builder,
    urls: Sequence[str],
    group_name: str,
    partial_success_status: CheckStatus = CheckStatus.WARNING,
    check_func: Optional[UrlCheckFunc] = None,
    cache_duration: Optional[float] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
):
    """Register one check named UrlChecks(<group_name>) covering several URLs."""
    argument_not_none("builder", builder)
    argument_not_blank("group_name", group_name)
    checker = UrlChecker(urls, check_func, partial_success_status, transport=transport)
    return builder.add_check(f"UrlChecks({group_name})", checker, cache_duration)


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "UrlChecker",
    "UrlCheckFunc",
    "default_url_check",
    "url_check_name",
    "add_url_check",
    "add_url_checks",
]
