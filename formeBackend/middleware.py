"""Custom middleware helpers for the ForMe backend."""

from __future__ import annotations

import logging
import time
from typing import Callable

request_logger = logging.getLogger("formeBackend.requests")

SLOW_REQUEST_MS = 1000


class JWTCSRFBypassMiddleware:
    """Skip CSRF enforcement for requests authenticated with a Bearer token.

    Clients of the API present tokens issued by the identity provider in the
    Authorization header and never rely on cookies, so the CSRF check only
    applies to the session-backed admin.
    """

    def __init__(self, get_response: Callable):
        self.get_response = get_response

    def __call__(self, request):
        authorization = request.META.get("HTTP_AUTHORIZATION", "")
        if authorization.lower().startswith("bearer "):
            request._dont_enforce_csrf_checks = True  # type: ignore[attr-defined]
            request.META.setdefault("CSRF_SKIP_REASON", "jwt-bearer")
        return self.get_response(request)


class RequestLoggingMiddleware:
    """Log method, path, status and duration of every API request."""

    def __init__(self, get_response: Callable):
        self.get_response = get_response

    def __call__(self, request):
        start_time = time.time()
        response = self.get_response(request)
        duration_ms = (time.time() - start_time) * 1000

        if not request.path.startswith("/api/"):
            return response

        response["X-Process-Time"] = f"{duration_ms:.2f}"
        message = f"{request.method} {request.path} -> {response.status_code} in {duration_ms:.2f}ms"
        if response.status_code >= 500:
            request_logger.error(message)
        elif duration_ms > SLOW_REQUEST_MS:
            request_logger.warning(f"Slow API request: {message}")
        else:
            request_logger.info(message)
        return response
