"""
Tests del limitador por IP con reloj controlado.
"""
import pytest

from hdnotes.core.rate_limit import SlidingWindowLimiter


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def limiter(clock):
    return SlidingWindowLimiter(clock=clock)


def test_blocks_after_limit_within_window(limiter, clock):
    assert limiter.hit("1.1.1.1", limit=2, window_seconds=60)
    assert limiter.hit("1.1.1.1", limit=2, window_seconds=60)
    assert not limiter.hit("1.1.1.1", limit=2, window_seconds=60)
    # otra IP tiene su propio cupo
    assert limiter.hit("2.2.2.2", limit=2, window_seconds=60)


def test_window_slides(limiter, clock):
    assert limiter.hit("1.1.1.1", limit=1, window_seconds=60)
    clock.now += 59
    assert not limiter.hit("1.1.1.1", limit=1, window_seconds=60)
    clock.now += 1
    assert limiter.hit("1.1.1.1", limit=1, window_seconds=60)


def test_stale_ips_are_evicted(limiter, clock):
    for i in range(1000):
        limiter.hit(f"10.0.{i // 256}.{i % 256}", limit=5, window_seconds=60)
    assert len(limiter) == 1000

    clock.now += 61
    limiter.hit("192.168.0.1", limit=5, window_seconds=60)

    assert len(limiter) == 1
    assert "10.0.0.0" not in limiter


def test_active_ip_survives_sweep(limiter, clock):
    limiter.hit("1.1.1.1", limit=5, window_seconds=60)
    clock.now += 30
    limiter.hit("2.2.2.2", limit=5, window_seconds=60)
    clock.now += 31
    limiter.hit("3.3.3.3", limit=5, window_seconds=60)

    assert "1.1.1.1" not in limiter
    assert "2.2.2.2" in limiter


def test_clear(limiter):
    limiter.hit("1.1.1.1", limit=5, window_seconds=60)
    limiter.clear()
    assert len(limiter) == 0
