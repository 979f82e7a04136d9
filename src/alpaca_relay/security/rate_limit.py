"""
alpaca_relay.security.rate_limit

In-process rate limiting for the `/api/*` surface.

Responsibilities:
- Count requests per client address over a rolling window.
- Reject requests beyond the cap with 429 until old requests age out.
"""

from __future__ import annotations

import math
import time
from collections import defaultdict, deque
from collections.abc import Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from starlette.status import HTTP_429_TOO_MANY_REQUESTS
from starlette.types import ASGIApp

from alpaca_relay.observability.logging import get_logger

log = get_logger(__name__)

REJECTION_MESSAGE = "Too many requests, please try again later"


class SlidingWindowLimiter:
    """
    Sliding-log limiter: each client keeps the timestamps of its accepted requests
    inside the window. Not shared across processes.
    """

    def __init__(
        self,
        *,
        max_requests: int,
        window_s: float,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.max_requests = max_requests
        self.window_s = window_s
        self._clock = clock
        self._hits: defaultdict[str, deque[float]] = defaultdict(deque)

    def _evict(self, key: str, now: float) -> deque[float]:
        hits = self._hits[key]
        while hits and hits[0] <= now - self.window_s:
            hits.popleft()
        return hits

    def hit(self, key: str) -> bool:
        """Record a request for `key`; False when the client is over the cap."""
        now = self._clock()
        hits = self._evict(key, now)
        if len(hits) >= self.max_requests:
            return False
        hits.append(now)
        return True

    def retry_after(self, key: str) -> int:
        now = self._clock()
        hits = self._evict(key, now)
        if not hits:
            return 0
        return max(1, math.ceil(hits[0] + self.window_s - now))

    def remaining(self, key: str) -> int:
        return max(0, self.max_requests - len(self._evict(key, self._clock())))

    def prune(self) -> None:
        # Drop clients whose whole log has aged out.
        now = self._clock()
        for key in [k for k in self._hits if not self._evict(k, now)]:
            del self._hits[key]


class RateLimitMiddleware(BaseHTTPMiddleware):
    def __init__(
        self,
        app: ASGIApp,
        *,
        limiter: SlidingWindowLimiter,
        path_prefix: str = "/api/",
        trust_forwarded_for: bool = False,
        prune_every: int = 1000,
    ) -> None:
        super().__init__(app)
        self.limiter = limiter
        self.path_prefix = path_prefix
        self.trust_forwarded_for = trust_forwarded_for
        self._prune_every = prune_every
        self._seen = 0

    def _client_key(self, request: Request) -> str:
        if self.trust_forwarded_for:
            forwarded_for = request.headers.get("x-forwarded-for")
            if forwarded_for:
                return forwarded_for.split(",")[0].strip()
            real_ip = request.headers.get("x-real-ip")
            if real_ip:
                return real_ip.strip()
        return request.client.host if request.client else "unknown"

    async def dispatch(self, request: Request, call_next) -> Response:
        if not request.url.path.startswith(self.path_prefix):
            return await call_next(request)

        self._seen += 1
        if self._seen % self._prune_every == 0:
            self.limiter.prune()

        key = self._client_key(request)
        if not self.limiter.hit(key):
            retry_after = self.limiter.retry_after(key)
            log.warning("rate_limited", client=key, retry_after_s=retry_after)
            return JSONResponse(
                status_code=HTTP_429_TOO_MANY_REQUESTS,
                content={"error": REJECTION_MESSAGE},
                headers={"Retry-After": str(retry_after)},
            )

        response = await call_next(request)
        response.headers["X-RateLimit-Limit"] = str(self.limiter.max_requests)
        response.headers["X-RateLimit-Remaining"] = str(self.limiter.remaining(key))
        return response


# --- Module Notes -----------------------------------------------------------
# Forwarded-for headers are client-controlled; only trust them behind a proxy that
# overwrites them (`RELAY_TRUST_FORWARDED_FOR=true`).
