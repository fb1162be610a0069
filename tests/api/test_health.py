"""Tests for /health and application wiring in main.py."""

import httpx
import pytest


@pytest.fixture
def main_app():
    from src.main import app

    return app


class TestHealthEndpoint:
    """Tests for health check endpoint."""

    @pytest.mark.asyncio
    async def test_health_returns_healthy(self, main_app):
        """Test /health returns healthy status."""
        async with httpx.AsyncClient(
            transport=httpx.ASGITransport(app=main_app),
            base_url="http://test",
        ) as client:
            response = await client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}
        assert "x-api-version" not in response.headers

    @pytest.mark.asyncio
    async def test_health_only_accepts_get(self, main_app):
        async with httpx.AsyncClient(
            transport=httpx.ASGITransport(app=main_app),
            base_url="http://test",
        ) as client:
            response = await client.post("/health")

        assert response.status_code == 405
        assert response.json()["error_code"] == "method_not_allowed"


class TestApplicationWiring:
    """Tests for routers and services attached by main.py."""

    def test_routes_registered(self, main_app):
        paths = main_app.openapi()["paths"]
        for path in (
            "/api/skus",
            "/api/skus/{sku_id}",
            "/api/production-orders/{order_id}/complete",
            "/api/demands",
            "/api/performance",
            "/api/dashboard",
            "/health",
        ):
            assert path in paths

    @pytest.mark.asyncio
    async def test_full_flow_over_sqlite(self, test_database, test_config):
        """Create a SKU, run an order and read the reports through the HTTP API."""
        from fastapi import FastAPI

        from src.api.errors import register_exception_handlers
        from src.api.middleware.rate_limit import setup_rate_limiting
        from src.api.routers import demands, production_orders, reports, skus
        from src.main import attach_services

        app = FastAPI()
        setup_rate_limiting(app)
        register_exception_handlers(app)
        for module in (skus, production_orders, demands, reports):
            app.include_router(module.router)
        attach_services(app, test_database, test_config)

        async with httpx.AsyncClient(
            transport=httpx.ASGITransport(app=app),
            base_url="http://test",
        ) as client:
            sku = (
                await client.post(
                    "/api/skus",
                    json={"code": "PNL-001", "description": "Solar panel", "unit_of_measure": "UN"},
                )
            ).json()
            order = (
                await client.post("/api/production-orders", json={"sku_id": sku["id"], "quantity": 10})
            ).json()
            await client.post(f"/api/production-orders/{order['id']}/start")
            done = await client.post(
                f"/api/production-orders/{order['id']}/complete", json={"delivered_quantity": 10}
            )
            in_use = await client.delete(f"/api/skus/{sku['id']}")
            performance = (await client.get("/api/performance")).json()
            dashboard = (await client.get("/api/dashboard")).json()

        assert done.status_code == 200
        assert done.json()["status"] == "completed"
        assert in_use.status_code == 409
        assert performance[0]["sku_code"] == "PNL-001"
        assert performance[0]["total_produced"] == 10
        assert dashboard["total_skus"] == 1
        assert dashboard["status_counts"]["completed"] == 1
        assert sum(p["produced_units"] for p in dashboard["monthly_production"]) == 10
