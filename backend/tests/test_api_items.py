"""
Integration tests for items API endpoints
"""
from unittest.mock import AsyncMock, Mock

import pytest
from httpx import AsyncClient, ASGITransport

from main import app
from api.dependencies import get_item_processor, get_worker_pool
from utils.item_utils import ItemStatus
from utils.processing import (
    ItemProcessor,
    ProcessingExecutionFailure,
    ProcessingTimeout,
    WorkerPool,
)

VALID_ITEM = {
    "name": "Test Item",
    "description": "This Description",
    "status": "NEW",
    "email": "test@example.com",
}


def _client():
    return AsyncClient(transport=ASGITransport(app=app), base_url="http://test")


@pytest.mark.integration
class TestItemReadEndpoints:
    """Tests for GET /api/items and GET /api/items/{id}"""

    @pytest.mark.asyncio
    async def test_get_all_items(self, api_store):
        async with _client() as client:
            response = await client.get("/api/items")

        assert response.status_code == 200
        data = response.json()
        assert [item["id"] for item in data] == [1, 2, 3]
        assert data[0]["name"] == "Test Item"
        assert data[0]["status"] == "NEW"

    @pytest.mark.asyncio
    async def test_get_item_by_id(self, api_store):
        async with _client() as client:
            response = await client.get("/api/items/1")

        assert response.status_code == 200
        assert response.json()["id"] == 1
        assert response.json()["email"] == "test@example.com"

    @pytest.mark.asyncio
    async def test_get_item_not_found(self, api_store):
        async with _client() as client:
            response = await client.get("/api/items/99")

        assert response.status_code == 404
        assert "not found" in response.json()["detail"].lower()

    @pytest.mark.asyncio
    async def test_get_item_out_of_range_id_not_found(self, api_store):
        async with _client() as client:
            for path in ("/api/items/0", "/api/items/-1", f"/api/items/{2**63}"):
                response = await client.get(path)
                assert response.status_code == 404

            response = await client.delete("/api/items/0")
            assert response.status_code == 404

        api_store.find_by_id.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_get_item_non_numeric_id(self, api_store):
        async with _client() as client:
            response = await client.get("/api/items/abc")

        assert response.status_code == 400


@pytest.mark.integration
class TestItemWriteEndpoints:
    """Tests for POST, PUT and DELETE /api/items"""

    @pytest.mark.asyncio
    async def test_create_item(self, api_store):
        async with _client() as client:
            response = await client.post("/api/items", json=VALID_ITEM)

        assert response.status_code == 201
        data = response.json()
        assert data["id"] == 4
        assert data["name"] == "Test Item"
        api_store.save.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_create_item_invalid_email(self, api_store):
        async with _client() as client:
            response = await client.post("/api/items", json={**VALID_ITEM, "email": "invalid-email"})

        assert response.status_code == 400
        assert response.json() == {"email": "Email must be properly formatted"}
        api_store.save.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_create_item_email_with_trailing_newline(self, api_store):
        async with _client() as client:
            response = await client.post("/api/items", json={**VALID_ITEM, "email": "test@example.com\n"})

        assert response.status_code == 400
        assert response.json() == {"email": "Email must be properly formatted"}
        api_store.save.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_create_item_reports_every_invalid_field(self, api_store):
        async with _client() as client:
            response = await client.post("/api/items", json={"name": "  ", "status": "DONE"})

        assert response.status_code == 400
        assert response.json() == {
            "name": "Name is required",
            "status": "Status must be one of: NEW, IN_PROGRESS, PROCESSED, COMPLETED, FAILED",
            "email": "Email is required",
        }
        api_store.save.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_create_item_missing_status(self, api_store):
        body = {key: value for key, value in VALID_ITEM.items() if key != "status"}
        async with _client() as client:
            response = await client.post("/api/items", json=body)

        assert response.status_code == 400
        assert response.json() == {"status": "Status cannot be null"}

    @pytest.mark.asyncio
    async def test_update_item(self, api_store):
        async with _client() as client:
            response = await client.put(
                "/api/items/1",
                json={**VALID_ITEM, "name": "Renamed", "status": "COMPLETED"}
            )

        assert response.status_code == 200
        data = response.json()
        assert data["id"] == 1
        assert data["name"] == "Renamed"
        assert api_store.items[1].status is ItemStatus.COMPLETED

    @pytest.mark.asyncio
    async def test_update_item_path_id_wins(self, api_store):
        async with _client() as client:
            response = await client.put("/api/items/2", json={**VALID_ITEM, "id": 3})

        assert response.status_code == 200
        assert response.json()["id"] == 2

    @pytest.mark.asyncio
    async def test_update_item_not_found(self, api_store):
        async with _client() as client:
            response = await client.put("/api/items/99", json=VALID_ITEM)

        assert response.status_code == 404
        api_store.save.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_update_item_invalid_body(self, api_store):
        async with _client() as client:
            response = await client.put("/api/items/1", json={**VALID_ITEM, "email": ""})

        assert response.status_code == 400
        assert response.json() == {"email": "Email is required"}

    @pytest.mark.asyncio
    async def test_delete_item(self, api_store):
        async with _client() as client:
            response = await client.delete("/api/items/1")

        assert response.status_code == 204
        assert response.content == b""
        assert 1 not in api_store.items
        api_store.delete_by_id.assert_awaited_once_with(1)

    @pytest.mark.asyncio
    async def test_delete_item_not_found(self, api_store):
        async with _client() as client:
            response = await client.delete("/api/items/99")

        assert response.status_code == 404
        api_store.delete_by_id.assert_not_awaited()


@pytest.mark.integration
class TestProcessEndpoint:
    """Tests for GET /api/items/process"""

    @pytest.mark.asyncio
    async def test_process_items(self, api_store):
        app.dependency_overrides[get_item_processor] = lambda: ItemProcessor(
            api_store, WorkerPool(2), item_delay=0
        )

        async with _client() as client:
            response = await client.get("/api/items/process")

        assert response.status_code == 200
        data = response.json()
        assert sorted(item["id"] for item in data) == [1, 2, 3]
        assert all(item["status"] == "PROCESSED" for item in data)

    @pytest.mark.asyncio
    async def test_process_items_timeout_returns_500(self, api_store):
        processor = Mock()
        processor.process_all = AsyncMock(side_effect=ProcessingTimeout("Processing timed out"))
        app.dependency_overrides[get_item_processor] = lambda: processor

        async with _client() as client:
            response = await client.get("/api/items/process")

        assert response.status_code == 500
        assert response.json() == {"message": "Error processing items: Processing timed out"}

    @pytest.mark.asyncio
    async def test_process_items_execution_failure_returns_500(self, api_store):
        processor = Mock()
        processor.process_all = AsyncMock(side_effect=ProcessingExecutionFailure("Error during item processing"))
        app.dependency_overrides[get_item_processor] = lambda: processor

        async with _client() as client:
            response = await client.get("/api/items/process")

        assert response.status_code == 500
        assert response.json()["message"].startswith("Error processing items:")

    @pytest.mark.asyncio
    async def test_process_items_without_pool_returns_500(self, api_store):
        """Without the lifespan there is no worker pool to run on"""
        async with _client() as client:
            response = await client.get("/api/items/process")

        assert response.status_code == 500
        assert response.json() == {"message": "Error processing items: Worker pool is not running"}

    @pytest.mark.asyncio
    async def test_process_items_uses_shared_pool(self, api_store):
        pool = WorkerPool(3)
        app.dependency_overrides[get_worker_pool] = lambda: pool

        async with _client() as client:
            response = await client.get("/api/items/process")

        assert response.status_code == 200
        assert len(response.json()) == 3
        assert pool.in_flight == 0
