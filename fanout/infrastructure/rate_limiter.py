"""Per-tenant fixed window rate limiting for dispatch calls."""

from __future__ import annotations

import logging
import math
import threading
import time
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field

from fanout.domain.exceptions import RateLimitExceeded

logger = logging.getLogger(__name__)

DEFAULT_MAX_CALLS = 1000
DEFAULT_WINDOW_SECONDS = 60


@dataclass
class RateLimitEntry:
    """Counter of the calls a tenant made in the current window."""

    tenant_id: str
    count: int
    reset_at: float


@dataclass(frozen=True)
class RateLimitDecision:
    allowed: bool
    retry_after_seconds: int | None = None


@dataclass
class _TenantSlot:
    lock: threading.Lock = field(default_factory=threading.Lock)
    users: int = 0
    entry: RateLimitEntry | None = None


class RateLimiter:
    """Count dispatch calls per tenant inside a rolling 60 second window.

    The limiter is created once per process and handed to request handlers.
    Counters live in memory only; a restart resets them. Each tenant has its
    own lock so the check-and-increment of one tenant never waits on another.
    Tenants whose window expired and that no call is using are dropped at most
    once per window.
    """

    def __init__(
        self,
        *,
        max_calls: int = DEFAULT_MAX_CALLS,
        window_seconds: float = DEFAULT_WINDOW_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if max_calls <= 0:
            raise ValueError("max_calls must be positive")
        if window_seconds <= 0:
            raise ValueError("window_seconds must be positive")
        self.max_calls = max_calls
        self.window_seconds = window_seconds
        self._clock = clock
        self._slots: dict[str, _TenantSlot] = {}
        self._guard = threading.Lock()
        self._next_sweep_at = clock() + window_seconds

    @property
    def tracked_tenants(self) -> int:
        with self._guard:
            return len(self._slots)

    def check_and_increment(self, tenant_id: str) -> RateLimitDecision:
        """Count one call for ``tenant_id`` if its budget allows it."""

        with self._tenant(tenant_id) as slot:
            now = self._clock()
            entry = slot.entry
            if entry is None or now >= entry.reset_at:
                slot.entry = RateLimitEntry(
                    tenant_id=tenant_id, count=1, reset_at=now + self.window_seconds
                )
                return RateLimitDecision(allowed=True)

            if entry.count >= self.max_calls:
                retry_after = max(1, math.ceil(entry.reset_at - now))
                return RateLimitDecision(allowed=False, retry_after_seconds=retry_after)

            entry.count += 1
            return RateLimitDecision(allowed=True)

    def enforce(self, tenant_id: str) -> None:
        """Raise :class:`RateLimitExceeded` when ``tenant_id`` is over budget."""

        decision = self.check_and_increment(tenant_id)
        if not decision.allowed:
            logger.warning(
                "Rate limit exceeded for tenant %s; retry after %ss",
                tenant_id,
                decision.retry_after_seconds,
            )
            raise RateLimitExceeded(tenant_id, decision.retry_after_seconds or 1)

    def current_count(self, tenant_id: str) -> int:
        with self._tenant(tenant_id) as slot:
            entry = slot.entry
            if entry is None or self._clock() >= entry.reset_at:
                return 0
            return entry.count

    @contextmanager
    def _tenant(self, tenant_id: str) -> Iterator[_TenantSlot]:
        # The guard only protects the slot registry, never the counting. A slot
        # with users is never swept, so every caller shares the same lock.
        with self._guard:
            self._sweep_expired()
            slot = self._slots.get(tenant_id)
            if slot is None:
                slot = self._slots[tenant_id] = _TenantSlot()
            slot.users += 1
        try:
            with slot.lock:
                yield slot
        finally:
            with self._guard:
                slot.users -= 1

    def _sweep_expired(self) -> None:
        now = self._clock()
        if now < self._next_sweep_at:
            return
        self._next_sweep_at = now + self.window_seconds
        for tenant_id, slot in list(self._slots.items()):
            if slot.users == 0 and (slot.entry is None or now >= slot.entry.reset_at):
                del self._slots[tenant_id]


__all__ = [
    "DEFAULT_MAX_CALLS",
    "DEFAULT_WINDOW_SECONDS",
    "RateLimitDecision",
    "RateLimitEntry",
    "RateLimiter",
]
