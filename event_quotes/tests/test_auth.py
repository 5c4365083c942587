import pytest

from event_quotes.core.security import create_access_token


@pytest.mark.integration
@pytest.mark.admin
class TestLogin:

    @pytest.mark.asyncio
    async def test_login_returns_token(self, test_client, admin_user, admin_password):
        resp = await test_client.post("/auth/login", data={
            "username": "Admin@Example.com",
            "password": admin_password,
        })
        assert resp.status_code == 200
        body = resp.json()
        assert body["token_type"] == "bearer"

        me = await test_client.get("/auth/me", headers={"Authorization": f"Bearer {body['access_token']}"})
        assert me.status_code == 200
        assert me.json()["email"] == "admin@example.com"
        assert me.json()["role"] == "admin"
        assert me.json()["last_login"] is not None

    @pytest.mark.asyncio
    async def test_wrong_password(self, test_client, admin_user):
        resp = await test_client.post("/auth/login", data={
            "username": "admin@example.com",
            "password": "wrong",
        })
        assert resp.status_code == 401

    @pytest.mark.asyncio
    async def test_unknown_email(self, test_client, admin_password):
        resp = await test_client.post("/auth/login", data={
            "username": "nobody@example.com",
            "password": admin_password,
        })
        assert resp.status_code == 401

    @pytest.mark.asyncio
    async def test_disabled_account_cannot_login(self, test_client, inactive_admin_user, admin_password):
        resp = await test_client.post("/auth/login", data={
            "username": "former@example.com",
            "password": admin_password,
        })
        assert resp.status_code == 403


@pytest.mark.integration
@pytest.mark.admin
class TestAdminAccess:

    @pytest.mark.asyncio
    async def test_admin_routes_require_token(self, test_client):
        resp = await test_client.get("/admin/quotes")
        assert resp.status_code == 401

    @pytest.mark.asyncio
    async def test_garbage_token_is_rejected(self, test_client):
        resp = await test_client.get("/admin/quotes", headers={"Authorization": "Bearer nope"})
        assert resp.status_code == 401

    @pytest.mark.asyncio
    async def test_disabled_account_token_is_rejected(self, test_client, inactive_admin_user):
        token = create_access_token(str(inactive_admin_user.id), inactive_admin_user.role)
        resp = await test_client.get("/admin/quotes", headers={"Authorization": f"Bearer {token}"})
        assert resp.status_code == 403

    @pytest.mark.asyncio
    async def test_token_for_missing_admin_is_rejected(self, test_client):
        token = create_access_token("9999", "admin")
        resp = await test_client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})
        assert resp.status_code == 401
