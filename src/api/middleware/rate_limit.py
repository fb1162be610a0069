"""Rate limiting for write and report endpoints."""

from fastapi import FastAPI
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address
from starlette.requests import Request

from src.api.errors import error_response

limiter = Limiter(key_func=get_remote_address)


async def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded):
    """Return the standard error body when a client exceeds its limit."""
    return error_response(429, "Rate limit exceeded. Please try again later.")


def setup_rate_limiting(app: FastAPI) -> Limiter:
    """Attach the shared limiter and its 429 handler to ``app``."""
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
    return limiter
