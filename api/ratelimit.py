from __future__ import annotations

from fastapi import Request
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from swimcore.config import Settings, get_settings


def build_limiter(settings: Settings) -> Limiter:
    """Per-client limiter; the active profile decides whether it is enforced."""
    return Limiter(
        key_func=get_remote_address,
        storage_uri=settings.rate_limit_storage_uri,
        enabled=settings.rate_limit_enabled,
        headers_enabled=True,
    )


settings = get_settings()
limiter = build_limiter(settings)

# Workout generation is the only metered endpoint.
generate_limit = limiter.limit(settings.generate_rate_limit)


def rate_limit_exceeded_handler(request: Request, exc: Exception) -> JSONResponse:
    limit = exc.detail if isinstance(exc, RateLimitExceeded) else None
    response = JSONResponse(
        status_code=429,
        content={
            "detail": {
                "code": "RATE_LIMITED",
                "message": "Too many workout requests, try again shortly",
                "limit": limit,
            }
        },
    )
    current = getattr(request.state, "view_rate_limit", None)
    if current is not None:
        response = request.app.state.limiter._inject_headers(response, current)
    return response
