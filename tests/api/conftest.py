"""Shared fixtures for API endpoint tests."""

import pytest
from fastapi import FastAPI

from src.api.errors import register_exception_handlers
from src.api.middleware.rate_limit import limiter, setup_rate_limiting


@pytest.fixture(autouse=True)
def _reset_rate_limiter():
    """Reset rate limiter storage between tests to avoid 429s."""
    limiter.reset()
    yield
    limiter.reset()


@pytest.fixture
def build_app():
    """Factory for a test app with one router and mocked services on app.state."""

    def _build(router, **services) -> FastAPI:
        app = FastAPI()
        setup_rate_limiting(app)
        register_exception_handlers(app)
        for name, service in services.items():
            setattr(app.state, name, service)
        app.include_router(router)
        return app

    return _build
