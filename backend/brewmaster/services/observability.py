"""In-process request and domain-event metrics for the API."""

from __future__ import annotations

from collections import Counter, deque
from dataclasses import dataclass, field
from datetime import datetime
from threading import Lock

LATENCY_SAMPLE_SIZE = 200


@dataclass
class RouteStats:
    method: str
    path: str
    count: int = 0
    total_latency_ms: float = 0.0
    max_latency_ms: float = 0.0
    client_errors: int = 0
    server_errors: int = 0
    samples: deque[float] = field(default_factory=lambda: deque(maxlen=LATENCY_SAMPLE_SIZE))

    def record(self, duration_ms: float, status_code: int) -> None:
        self.count += 1
        self.total_latency_ms += duration_ms
        self.max_latency_ms = max(self.max_latency_ms, duration_ms)
        self.samples.append(duration_ms)

        if status_code >= 500:
            self.server_errors += 1
        elif status_code >= 400:
            self.client_errors += 1

    def p95_latency_ms(self) -> float:
        if not self.samples:
            return 0.0
        ordered = sorted(self.samples)
        index = min(len(ordered) - 1, int(round(0.95 * (len(ordered) - 1))))
        return ordered[index]

    def as_dict(self) -> dict[str, object]:
        return {
            "method": self.method,
            "path": self.path,
            "count": self.count,
            "avg_latency_ms": round(self.total_latency_ms / self.count, 2) if self.count else 0.0,
            "p95_latency_ms": round(self.p95_latency_ms(), 2),
            "max_latency_ms": round(self.max_latency_ms, 2),
            "client_errors": self.client_errors,
            "server_errors": self.server_errors,
        }


class ObservabilityTracker:
    """Per-route latency/error stats plus named counters for brewing events.

    Routes are keyed by their template (``/api/v1/recipes/{recipe_id}``), so
    the number of tracked routes stays bounded by the router table.
    """

    def __init__(self) -> None:
        self._lock = Lock()
        self._started_at = datetime.utcnow()
        self._routes: dict[tuple[str, str], RouteStats] = {}
        self._events: Counter[str] = Counter()

    def reset(self) -> None:
        with self._lock:
            self._started_at = datetime.utcnow()
            self._routes = {}
            self._events = Counter()

    def record(self, *, method: str, path: str, status_code: int, duration_ms: float) -> None:
        with self._lock:
            route = self._routes.setdefault((method, path), RouteStats(method=method, path=path))
            route.record(duration_ms=duration_ms, status_code=status_code)

    def increment(self, event: str, amount: int = 1) -> None:
        with self._lock:
            self._events[event] += amount

    def snapshot(self) -> dict[str, object]:
        with self._lock:
            now = datetime.utcnow()
            routes = sorted(self._routes.values(), key=lambda item: (item.path, item.method))

            return {
                "generated_at": now,
                "uptime_seconds": int((now - self._started_at).total_seconds()),
                "total_requests": sum(route.count for route in routes),
                "total_client_errors": sum(route.client_errors for route in routes),
                "total_server_errors": sum(route.server_errors for route in routes),
                "routes": [route.as_dict() for route in routes],
                "events": dict(self._events),
            }


observability_tracker = ObservabilityTracker()
