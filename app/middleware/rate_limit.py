from fastapi import Request
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from core.config import RATE_LIMIT, RATE_LIMIT_ENABLED
from core.prometheus_metrics import prometheus_collector

limiter = Limiter(
    key_func=get_remote_address,
    default_limits=[RATE_LIMIT],  # Global default, applied by SlowAPIMiddleware
    enabled=RATE_LIMIT_ENABLED,
)


def custom_rate_limit_exceeded(request: Request, exc: RateLimitExceeded):
    prometheus_collector.record_rate_limit_exceeded(endpoint=request.url.path)

    return JSONResponse(
        status_code=429,
        content={
            "statusCode": 429,
            "error": "Too Many Requests",
            "message": f"Rate limit exceeded: {exc.detail}",
        },
    )
