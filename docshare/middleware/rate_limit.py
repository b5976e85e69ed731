"""
docshare/middleware/rate_limit.py — Per-client sliding-window limit on POST /share/*.
Limit via .env RATE_LIMIT_PER_MINUTE. X-Forwarded-For is only read when
TRUST_FORWARDED_FOR is set, i.e. behind a proxy that overwrites it.
"""
import logging
import time
from collections import deque
from typing import Callable, Deque, Dict, Optional

from fastapi import Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from docshare.config import get_settings

logger = logging.getLogger(__name__)

WINDOW = 60
LIMITED_PREFIX = "/share/"


class SlidingWindow:
    """Request timestamps per client key, kept only while they fall inside the window."""

    def __init__(self, window: float = WINDOW):
        self.window = window
        self._hits: Dict[str, Deque[float]] = {}
        self._last_sweep = 0.0

    def __len__(self) -> int:
        return len(self._hits)

    def clear(self) -> None:
        self._hits.clear()
        self._last_sweep = 0.0

    def _expire(self, key: str, now: float) -> Optional[Deque[float]]:
        hits = self._hits.get(key)
        if hits is None:
            return None
        while hits and now - hits[0] > self.window:
            hits.popleft()
        if not hits:
            del self._hits[key]
            return None
        return hits

    def sweep(self, now: float) -> None:
        """Drop every key whose hits have all aged out."""
        for key in list(self._hits):
            self._expire(key, now)
        self._last_sweep = now

    def hit(self, key: str, limit: int, now: float) -> Optional[int]:
        """Record a hit for ``key``; return seconds to wait instead when over ``limit``."""
        if now - self._last_sweep > self.window:
            self.sweep(now)
        hits = self._expire(key, now)
        if hits is not None and len(hits) >= limit:
            return int(self.window - (now - hits[0])) + 1
        self._hits.setdefault(key, deque()).append(now)
        return None


_window = SlidingWindow()


def client_key(request: Request, trust_forwarded_for: bool) -> str:
    if trust_forwarded_for:
        fwd = request.headers.get("X-Forwarded-For")
        if fwd:
            return fwd.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


class RateLimitMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        if request.method != "POST" or not request.url.path.startswith(LIMITED_PREFIX):
            return await call_next(request)

        settings = get_settings()
        key = client_key(request, settings.trust_forwarded_for)
        retry = _window.hit(key, settings.rate_limit_per_minute, time.monotonic())
        if retry is not None:
            logger.warning("Share rate limit hit for %s", key)
            return JSONResponse(
                status_code=429,
                content={
                    "detail": f"Rate limit exceeded. Max {settings.rate_limit_per_minute}/min per client.",
                    "retry_after_seconds": retry,
                },
                headers={"Retry-After": str(retry)},
            )
        return await call_next(request)
