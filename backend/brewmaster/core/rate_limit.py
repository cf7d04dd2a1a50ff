from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from threading import Lock
from time import monotonic

from fastapi import HTTPException, Request

from brewmaster.core.config import settings


@dataclass
class RateLimitDecision:
    limited: bool
    remaining: int
    retry_after_seconds: int


@dataclass
class _Window:
    count: int
    started_at: float


class RateLimiter:
    """Fixed-window request counter per client key, held in process memory."""

    def __init__(self, max_requests: int, window_seconds: int, clock: Callable[[], float] = monotonic) -> None:
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._clock = clock
        self._lock = Lock()
        self._windows: dict[str, _Window] = {}

    def reset(self) -> None:
        with self._lock:
            self._windows = {}

    def hit(self, key: str) -> RateLimitDecision:
        now = self._clock()
        with self._lock:
            window = self._windows.get(key)
            if window is None or now - window.started_at >= self.window_seconds:
                window = _Window(count=0, started_at=now)
                self._windows[key] = window

            retry_after = max(1, int(window.started_at + self.window_seconds - now))
            if window.count >= self.max_requests:
                return RateLimitDecision(limited=True, remaining=0, retry_after_seconds=retry_after)

            window.count += 1
            return RateLimitDecision(
                limited=False,
                remaining=self.max_requests - window.count,
                retry_after_seconds=retry_after,
            )


ai_rate_limiter = RateLimiter(
    max_requests=settings.ai_rate_limit_requests,
    window_seconds=settings.ai_rate_limit_window_seconds,
)


def client_key(request: Request) -> str:
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    if request.client is not None:
        return request.client.host
    return "unknown"


def enforce_ai_rate_limit(request: Request) -> None:
    decision = ai_rate_limiter.hit(client_key(request))
    if decision.limited:
        raise HTTPException(
            status_code=429,
            detail="Too many AI requests. Please try again later.",
            headers={"Retry-After": str(decision.retry_after_seconds)},
        )
