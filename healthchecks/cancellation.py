# ============================================================================
# CANCELLATION TOKEN
# ============================================================================
# STATUS: Core - Cooperative cancellation for health check runs
# PURPOSE: Explicit cancel signal plus optional deadline shared by all probes
# CREATED: 19 OCT 2026
# ============================================================================
"""
Cancellation Token

A caller-owned signal passed down to every probe of a health check run.
It is cancelled either explicitly via cancel() or implicitly once its
deadline passes. Probes can poll it (is_cancelled / raise_if_cancelled) or
await it (wait), and the execution guard races each probe against it.

Usage:
    token = CancellationToken(timeout=5.0)
    result = await service.check_health(token)
"""

import asyncio
import time
from typing import Optional, Set

from healthchecks.errors import OperationCancelledError, argument_valid


class CancellationToken:
    """Cancel signal with an optional monotonic deadline."""

    def __init__(self, timeout: Optional[float] = None):
        if timeout is not None:
            argument_valid(timeout >= 0, "timeout", "Timeout must be zero or positive")
        self._deadline = time.monotonic() + timeout if timeout is not None else None
        self._cancelled = False
        self._waiters: Set[asyncio.Future] = set()

    @classmethod
    def cancelled(cls) -> "CancellationToken":
        """Create a token that is already cancelled."""
        token = cls()
        token.cancel()
        return token

    @property
    def deadline(self) -> Optional[float]:
        return self._deadline

    @property
    def remaining(self) -> Optional[float]:
        """Seconds until the deadline, or None when there is no deadline."""
        if self._deadline is None:
            return None
        return max(0.0, self._deadline - time.monotonic())

    @property
    def is_cancelled(self) -> bool:
        if self._cancelled:
            return True
        return self._deadline is not None and time.monotonic() >= self._deadline

    def cancel(self) -> None:
        self._cancelled = True
        for waiter in list(self._waiters):
            if not waiter.done():
                waiter.set_result(None)

    def raise_if_cancelled(self) -> None:
        if self.is_cancelled:
            raise OperationCancelledError()

    async def wait(self) -> None:
        """
        Suspend until the token is cancelled or its deadline passes.

        Each call waits on its own future from the running loop, so one
        token can be reused across separate asyncio.run() invocations.
        """
        if self.is_cancelled:
            return

        waiter = asyncio.get_running_loop().create_future()
        self._waiters.add(waiter)
        try:
            # Returns on cancel() or once the remaining time elapses
            await asyncio.wait({waiter}, timeout=self.remaining)
        finally:
            self._waiters.discard(waiter)
            if not waiter.done():
                waiter.cancel()

    def __repr__(self) -> str:
        return (
            f"CancellationToken(cancelled={self.is_cancelled}, "
            f"remaining={self.remaining})"
        )


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "CancellationToken",
]
