"""
Límite de peticiones por IP en memoria, con ventana deslizante.

Cada IP guarda un deque con los instantes de sus peticiones dentro de la
ventana. Las IPs sin actividad reciente se eliminan en barridos periódicos,
así la tabla no crece con clientes que no vuelven.
"""
from collections import deque
from threading import Lock
from time import monotonic
from typing import Callable, Deque, Dict


def _trim(hits: Deque[float], cutoff: float) -> None:
    while hits and hits[0] <= cutoff:
        hits.popleft()


class SlidingWindowLimiter:
    def __init__(self, clock: Callable[[], float] = monotonic) -> None:
        self._clock = clock
        self._hits: Dict[str, Deque[float]] = {}
        self._lock = Lock()
        self._last_sweep: float | None = None

    def __len__(self) -> int:
        return len(self._hits)

    def __contains__(self, ip: str) -> bool:
        return ip in self._hits

    def hit(self, ip: str, limit: int, window_seconds: float) -> bool:
        """Registra la petición de `ip`; False si ya agotó su cupo en la ventana."""
        now = self._clock()
        cutoff = now - window_seconds
        with self._lock:
            if self._last_sweep is None or now - self._last_sweep >= window_seconds:
                self._sweep(cutoff)
                self._last_sweep = now
            hits = self._hits.get(ip)
            if hits is None:
                hits = self._hits[ip] = deque()
            else:
                _trim(hits, cutoff)
            if len(hits) >= limit:
                return False
            hits.append(now)
            return True

    def _sweep(self, cutoff: float) -> None:
        for ip in list(self._hits):
            hits = self._hits[ip]
            _trim(hits, cutoff)
            if not hits:
                del self._hits[ip]

    def clear(self) -> None:
        with self._lock:
            self._hits.clear()
            self._last_sweep = None


limiter = SlidingWindowLimiter()


def allow_ip(ip: str, limit: int, window_seconds: float) -> bool:
    return limiter.hit(ip, limit, window_seconds)


def reset() -> None:
    """Vacía el limitador global (tests o reinicios)."""
    limiter.clear()
