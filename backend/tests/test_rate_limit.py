from brewmaster.core.rate_limit import RateLimiter


class FakeClock:
    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


def test_requests_over_the_limit_are_refused() -> None:
    clock = FakeClock()
    limiter = RateLimiter(max_requests=2, window_seconds=60, clock=clock)

    assert limiter.hit("1.2.3.4").remaining == 1
    assert limiter.hit("1.2.3.4").remaining == 0

    decision = limiter.hit("1.2.3.4")
    assert decision.limited
    assert decision.retry_after_seconds == 60


def test_clients_are_counted_separately() -> None:
    limiter = RateLimiter(max_requests=1, window_seconds=60, clock=FakeClock())

    assert not limiter.hit("a").limited
    assert not limiter.hit("b").limited
    assert limiter.hit("a").limited


def test_window_resets_after_expiry() -> None:
    clock = FakeClock()
    limiter = RateLimiter(max_requests=1, window_seconds=60, clock=clock)
    limiter.hit("a")

    clock.now += 45
    assert limiter.hit("a").retry_after_seconds == 15

    clock.now += 15
    assert not limiter.hit("a").limited


def test_reset_clears_all_windows() -> None:
    limiter = RateLimiter(max_requests=1, window_seconds=60, clock=FakeClock())
    limiter.hit("a")

    limiter.reset()

    assert not limiter.hit("a").limited
