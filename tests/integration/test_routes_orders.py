from __future__ import annotations

import pytest
from httpx import ASGITransport, AsyncClient


async def _login(client: AsyncClient, tenant_id: str, role: str, username: str = "tester") -> None:
    resp = await client.post(
        "/api/auth/login",
        json={"tenant_id": tenant_id, "role": role, "username": username},
    )
    assert resp.status_code == 200


@pytest.fixture()
async def admin_a_client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        await _login(client, "tenantA", "admin")
        yield client


@pytest.fixture()
async def staff_a_client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        await _login(client, "tenantA", "staff")
        yield client


@pytest.fixture()
async def admin_b_client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        await _login(client, "tenantB", "admin")
        yield client


async def _create(client: AsyncClient, name: str = "Alice", status: str = "pending") -> dict:
    resp = await client.post("/api/orders", json={"customer_name": name, "status": status})
    assert resp.status_code == 201
    return resp.json()


@pytest.mark.integration
class TestOrderRoutes:
    async def test_requires_session(self, client: AsyncClient) -> None:
        resp = await client.get("/api/orders")
        assert resp.status_code == 401

    async def test_create_order(self, admin_a_client: AsyncClient) -> None:
        data = await _create(admin_a_client)
        assert data["tenant_id"] == "tenantA"
        assert data["status"] == "pending"
        assert data["customer_name"] == "Alice"
        assert "id" in data

    async def test_create_ignores_client_tenant(self, admin_a_client: AsyncClient) -> None:
        resp = await admin_a_client.post(
            "/api/orders",
            json={"customer_name": "Mallory", "status": "pending", "tenant_id": "tenantB"},
        )
        assert resp.status_code == 201
        assert resp.json()["tenant_id"] == "tenantA"

    async def test_create_blank_name_is_422(self, admin_a_client: AsyncClient) -> None:
        resp = await admin_a_client.post("/api/orders", json={"customer_name": "   "})
        assert resp.status_code == 422
        assert resp.json()["error"] == "validation_error"

    async def test_create_unknown_status_is_422(self, admin_a_client: AsyncClient) -> None:
        resp = await admin_a_client.post(
            "/api/orders", json={"customer_name": "Bob", "status": "shipped"}
        )
        assert resp.status_code == 422
        assert resp.json()["error"] == "validation_error"

    async def test_list_is_tenant_scoped(
        self, admin_a_client: AsyncClient, admin_b_client: AsyncClient
    ) -> None:
        await _create(admin_a_client, "Alice")
        await _create(admin_b_client, "Diana")

        resp = await admin_a_client.get("/api/orders")
        assert resp.status_code == 200
        assert [o["customer_name"] for o in resp.json()] == ["Alice"]

    async def test_staff_status_flow(
        self, admin_a_client: AsyncClient, staff_a_client: AsyncClient
    ) -> None:
        order = await _create(admin_a_client)

        resp = await staff_a_client.patch(
            f"/api/orders/{order['id']}/status", json={"status": "in_progress"}
        )
        assert resp.status_code == 200
        assert resp.json()["status"] == "in_progress"

        resp = await staff_a_client.patch(
            f"/api/orders/{order['id']}/status", json={"status": "completed"}
        )
        assert resp.status_code == 403
        body = resp.json()
        assert body["error"] == "permission_denied"
        assert "pending to in_progress" in body["detail"]

    async def test_cross_tenant_status_change_is_403(
        self, admin_a_client: AsyncClient, admin_b_client: AsyncClient
    ) -> None:
        order = await _create(admin_a_client)
        resp = await admin_b_client.patch(
            f"/api/orders/{order['id']}/status", json={"status": "completed"}
        )
        assert resp.status_code == 403
        assert resp.json()["error"] == "cross_tenant_access"

    async def test_delete_flow(
        self, admin_a_client: AsyncClient, staff_a_client: AsyncClient
    ) -> None:
        order = await _create(admin_a_client)

        resp = await staff_a_client.delete(f"/api/orders/{order['id']}")
        assert resp.status_code == 403
        assert resp.json()["detail"] == "only admins can delete orders"

        resp = await admin_a_client.delete(f"/api/orders/{order['id']}")
        assert resp.status_code == 204

        resp = await admin_a_client.delete(f"/api/orders/{order['id']}")
        assert resp.status_code == 404
        assert resp.json()["error"] == "not_found"

    async def test_change_status_of_missing_order_is_404(
        self, admin_a_client: AsyncClient
    ) -> None:
        resp = await admin_a_client.patch(
            "/api/orders/nonexistent-id/status", json={"status": "completed"}
        )
        assert resp.status_code == 404


@pytest.mark.integration
class TestAuthRoutes:
    async def test_login_and_me(self, client: AsyncClient) -> None:
        await _login(client, "tenantB", "staff", "stu")
        resp = await client.get("/api/auth/me")
        assert resp.status_code == 200
        assert resp.json() == {
            "tenant_id": "tenantB",
            "tenant_name": "Tenant B",
            "role": "staff",
            "username": "stu",
        }

    async def test_login_rejects_blank_username(self, client: AsyncClient) -> None:
        resp = await client.post(
            "/api/auth/login", json={"tenant_id": "tenantA", "role": "admin", "username": "  "}
        )
        assert resp.status_code == 422

    async def test_login_rejects_unknown_tenant(self, client: AsyncClient) -> None:
        resp = await client.post(
            "/api/auth/login", json={"tenant_id": "tenantZ", "role": "admin", "username": "x"}
        )
        assert resp.status_code == 422

    async def test_login_rejects_unknown_role(self, client: AsyncClient) -> None:
        resp = await client.post(
            "/api/auth/login", json={"tenant_id": "tenantA", "role": "owner", "username": "x"}
        )
        assert resp.status_code == 422

    async def test_logout_ends_session(self, client: AsyncClient) -> None:
        await _login(client, "tenantA", "admin")
        resp = await client.post("/api/auth/logout")
        assert resp.status_code == 200
        resp = await client.get("/api/orders")
        assert resp.status_code == 401


@pytest.mark.integration
class TestDemoRoutes:
    async def test_seed_then_list(self, admin_a_client: AsyncClient) -> None:
        resp = await admin_a_client.post("/api/demo/seed")
        assert resp.status_code == 200
        assert resp.json() == {"orders_created": 3}

        resp = await admin_a_client.get("/api/orders")
        names = sorted(o["customer_name"] for o in resp.json())
        assert names == ["Alice Johnson", "Bob Smith", "Charlie Brown"]

        resp = await admin_a_client.post("/api/demo/seed")
        assert resp.json() == {"orders_created": 0}

    async def test_staff_cannot_seed(
        self, staff_a_client: AsyncClient, admin_b_client: AsyncClient
    ) -> None:
        resp = await staff_a_client.post("/api/demo/seed")
        assert resp.status_code == 403
        assert resp.json()["error"] == "permission_denied"

        assert (await staff_a_client.get("/api/orders")).json() == []
        assert (await admin_b_client.get("/api/orders")).json() == []

    async def test_seed_leaves_other_tenants_untouched(
        self, admin_a_client: AsyncClient, admin_b_client: AsyncClient
    ) -> None:
        await admin_a_client.post("/api/demo/seed")
        assert (await admin_b_client.get("/api/orders")).json() == []

        resp = await admin_b_client.post("/api/demo/seed")
        assert resp.json() == {"orders_created": 3}
        names = sorted(o["customer_name"] for o in (await admin_b_client.get("/api/orders")).json())
        assert names == ["Diana Ross", "Eve Wilson", "Frank Miller"]
