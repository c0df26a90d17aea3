from collections import defaultdict
from collections import deque
from collections.abc import Awaitable
from collections.abc import Callable
from threading import RLock
from time import monotonic

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response


class ProfileRateLimitMiddleware(BaseHTTPMiddleware):
    """Sliding-window limit on profile lookups, one window per client address.

    Only inbound GET requests under `path_prefix` are counted. Upstream
    platform calls made while serving a request are not limited here.
    """

    def __init__(
        self,
        app,
        requests_per_window: int = 30,
        window_seconds: int = 60,
        path_prefix: str = "/profiles/",
    ) -> None:
        super().__init__(app)
        self.max_requests = max(1, requests_per_window)
        self.window_seconds = max(1, window_seconds)
        self.path_prefix = path_prefix
        self._buckets: dict[str, deque[float]] = defaultdict(deque)
        self._lock = RLock()

    def is_limited(self, request: Request) -> bool:
        return request.method == "GET" and request.url.path.startswith(self.path_prefix)

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        if not self.is_limited(request):
            return await call_next(request)

        retry_after = self._register(self._client_key(request), monotonic())
        if retry_after is not None:
            return JSONResponse(
                status_code=429,
                content={"detail": "Too Many Requests"},
                headers={"Retry-After": str(retry_after)},
            )

        return await call_next(request)

    def _register(self, key: str, now: float) -> int | None:
        """Record a request; return seconds to wait when the window is full."""

        with self._lock:
            bucket = self._buckets[key]
            cutoff = now - self.window_seconds
            while bucket and bucket[0] <= cutoff:
                bucket.popleft()

            if len(bucket) >= self.max_requests:
                return max(1, int(self.window_seconds - (now - bucket[0])))

            bucket.append(now)
            return None

    @staticmethod
    def _client_key(request: Request) -> str:
        # Proxies put the original client first in X-Forwarded-For.
        forwarded_for = request.headers.get("x-forwarded-for")
        if forwarded_for:
            return forwarded_for.split(",")[0].strip() or "unknown"

        if request.client and request.client.host:
            return request.client.host

        return "unknown"
