"""
Rate limiting middleware.

Limits the public license verification endpoint per client IP.
"""

import hashlib
import time
from typing import Callable, Tuple

from django.conf import settings
from django.core.cache import cache
from django.http import HttpRequest, HttpResponse, JsonResponse

from core.metrics import errors_total


class RateLimitMiddleware:
    """
    Fixed-window rate limiting per client IP.

    Counters live in the Django cache. The limit is VERIFY_RATE_LIMIT
    requests per minute.
    """

    RATE_LIMIT_WINDOW = 60  # seconds
    LIMITED_PREFIXES = ("/license/verify/",)

    def __init__(self, get_response: Callable):
        """Initialize middleware."""
        self.get_response = get_response

    def _get_client_ip(self, request: HttpRequest) -> str:
        forwarded = request.META.get("HTTP_X_FORWARDED_FOR")
        if forwarded:
            return forwarded.split(",")[0].strip()
        return request.META.get("REMOTE_ADDR", "unknown")

    def _get_rate_limit_key(self, client_ip: str) -> str:
        """
        Generate cache key for rate limiting.

        Args:
            client_ip: Client address

        Returns:
            Cache key string
        """
        ip_hash = hashlib.sha256(client_ip.encode()).hexdigest()[:16]
        return f"rate_limit:verify:{ip_hash}"

    def _check_rate_limit(self, client_ip: str, limit: int) -> Tuple[bool, int, int]:
        """
        Check if request is within rate limit.

        Args:
            client_ip: Client address
            limit: Requests allowed per window

        Returns:
            Tuple of (is_allowed, remaining, reset_time)
        """
        window_start = int(time.time() / self.RATE_LIMIT_WINDOW)
        full_key = f"{self._get_rate_limit_key(client_ip)}:{window_start}"
        reset_time = (window_start + 1) * self.RATE_LIMIT_WINDOW

        if cache.add(full_key, 1, timeout=self.RATE_LIMIT_WINDOW):
            new_count = 1
        else:
            try:
                new_count = cache.incr(full_key, 1)
            except ValueError:
                # Expired between add and incr
                cache.set(full_key, 1, timeout=self.RATE_LIMIT_WINDOW)
                new_count = 1

        if new_count > limit:
            return False, 0, reset_time
        return True, limit - new_count, reset_time

    def __call__(self, request: HttpRequest) -> HttpResponse:
        """
        Process request with rate limiting.

        Args:
            request: HTTP request

        Returns:
            HTTP response with rate limit headers
        """
        if not request.path.startswith(self.LIMITED_PREFIXES):
            return self.get_response(request)

        limit = settings.VERIFY_RATE_LIMIT
        is_allowed, remaining, reset_time = self._check_rate_limit(
            self._get_client_ip(request), limit
        )

        if not is_allowed:
            errors_total.labels(error_type="rate_limit_exceeded", endpoint="/license/verify").inc()
            response = JsonResponse(
                {
                    "success": False,
                    "error": {
                        "code": "RATE_LIMIT_EXCEEDED",
                        "message": "Rate limit exceeded. Please try again later.",
                    },
                },
                status=429,
            )
            response["Retry-After"] = str(max(0, reset_time - int(time.time())))
        else:
            response = self.get_response(request)

        # Rate limit headers (RFC 6585)
        response["X-RateLimit-Limit"] = str(limit)
        response["X-RateLimit-Remaining"] = str(remaining)
        response["X-RateLimit-Reset"] = str(reset_time)
        return response
