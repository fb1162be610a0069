"""Tests for /api/skus endpoints."""

import pytest

from src.api.routers.skus import router as skus_router
from src.exceptions import DuplicateSkuCodeError, RecordNotFoundError, SkuInUseError
from src.models.catalog import BulkDeleteResponse
from tests.fixtures.api_helpers import client_for, mock_service
from tests.fixtures.sample_data import make_sku


@pytest.fixture
def sku_service():
    return mock_service(
        "list_skus", "get_sku", "create_sku", "update_sku", "delete_sku", "delete_skus"
    )


@pytest.fixture
def app(build_app, sku_service):
    return build_app(skus_router, sku_service=sku_service)


class TestListAndGet:
    """Tests for GET /api/skus."""

    @pytest.mark.asyncio
    async def test_list(self, app, sku_service):
        sku_service.list_skus.return_value = [make_sku("s1", "A"), make_sku("s2", "B")]

        async with client_for(app) as client:
            response = await client.get("/api/skus")

        assert response.status_code == 200
        assert [s["code"] for s in response.json()] == ["A", "B"]

    @pytest.mark.asyncio
    async def test_get(self, app, sku_service):
        sku_service.get_sku.return_value = make_sku("s1", "PNL-001")

        async with client_for(app) as client:
            response = await client.get("/api/skus/s1")

        assert response.status_code == 200
        assert response.json()["code"] == "PNL-001"
        sku_service.get_sku.assert_awaited_once_with("s1")

    @pytest.mark.asyncio
    async def test_get_missing_returns_404(self, app, sku_service):
        sku_service.get_sku.side_effect = RecordNotFoundError("SKU", "nope")

        async with client_for(app) as client:
            response = await client.get("/api/skus/nope")

        assert response.status_code == 404
        assert response.json() == {"detail": "SKU not found: nope", "error_code": "not_found"}


class TestCreateAndUpdate:
    """Tests for POST/PUT /api/skus."""

    @pytest.mark.asyncio
    async def test_create(self, app, sku_service):
        sku_service.create_sku.return_value = make_sku("s1", "PNL-001")

        async with client_for(app) as client:
            response = await client.post(
                "/api/skus",
                json={"code": " PNL-001 ", "description": "Panel", "unit_of_measure": "UN"},
            )

        assert response.status_code == 201
        request = sku_service.create_sku.await_args.args[0]
        assert request.code == "PNL-001"

    @pytest.mark.asyncio
    async def test_create_missing_field_returns_422(self, app, sku_service):
        async with client_for(app) as client:
            response = await client.post("/api/skus", json={"code": "X"})

        assert response.status_code == 422
        sku_service.create_sku.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_duplicate_code_returns_409(self, app, sku_service):
        sku_service.create_sku.side_effect = DuplicateSkuCodeError("SKU code already exists: X")

        async with client_for(app) as client:
            response = await client.post(
                "/api/skus", json={"code": "X", "description": "D", "unit_of_measure": "UN"}
            )

        assert response.status_code == 409
        assert response.json()["error_code"] == "conflict"

    @pytest.mark.asyncio
    async def test_update(self, app, sku_service):
        sku_service.update_sku.return_value = make_sku("s1", "NEW")

        async with client_for(app) as client:
            response = await client.put(
                "/api/skus/s1", json={"code": "NEW", "description": "D", "unit_of_measure": "UN"}
            )

        assert response.status_code == 200
        assert sku_service.update_sku.await_args.args[0] == "s1"


class TestDelete:
    """Tests for DELETE /api/skus."""

    @pytest.mark.asyncio
    async def test_delete(self, app, sku_service):
        async with client_for(app) as client:
            response = await client.delete("/api/skus/s1")

        assert response.status_code == 204
        assert response.content == b""
        sku_service.delete_sku.assert_awaited_once_with("s1")

    @pytest.mark.asyncio
    async def test_delete_in_use_returns_409(self, app, sku_service):
        sku_service.delete_sku.side_effect = SkuInUseError("SKU A is used by production orders or demands")

        async with client_for(app) as client:
            response = await client.delete("/api/skus/s1")

        assert response.status_code == 409
        assert "is used by" in response.json()["detail"]

    @pytest.mark.asyncio
    async def test_bulk_delete(self, app, sku_service):
        sku_service.delete_skus.return_value = BulkDeleteResponse(deleted=2, in_use=1)

        async with client_for(app) as client:
            response = await client.post("/api/skus/bulk-delete", json={"ids": ["a", "b", "c"]})

        assert response.status_code == 200
        assert response.json() == {"deleted": 2, "in_use": 1, "in_progress": 0, "not_found": 0}
        sku_service.delete_skus.assert_awaited_once_with(["a", "b", "c"])

    @pytest.mark.asyncio
    async def test_bulk_delete_requires_ids(self, app, sku_service):
        async with client_for(app) as client:
            response = await client.post("/api/skus/bulk-delete", json={"ids": []})

        assert response.status_code == 422
