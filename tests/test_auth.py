"""
Tests for registration, login and the cookie-held session.
"""

import jwt
import pytest
from fastapi import Depends, FastAPI
from httpx import AsyncClient, ASGITransport

from kiratakip.auth import create_access_token, hash_password, require_role, verify_password
from kiratakip.config import get_settings
from kiratakip.database import Base, engine

pytestmark = pytest.mark.anyio

USER = {"email": "yonetici@example.com", "fullName": "Zeynep Koç", "password": "gizli-sifre"}


@pytest.fixture(autouse=True)
def fresh_users():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


def test_password_hashing():
    hashed = hash_password("gizli")
    assert hashed != "gizli"
    assert verify_password("gizli", hashed)
    assert not verify_password("yanlis", hashed)


class TestSession:

    async def test_register_sets_cookie(self, client: AsyncClient):
        response = await client.post("/api/auth/register", json=USER)
        assert response.status_code == 201
        data = response.json()
        assert data["email"] == USER["email"]
        assert data["fullName"] == USER["fullName"]
        assert data["role"] == "manager"
        assert "password" not in data and "passwordHash" not in data
        assert get_settings().session_cookie_name in response.cookies

    async def test_register_twice_is_400(self, client: AsyncClient):
        await client.post("/api/auth/register", json=USER)
        response = await client.post("/api/auth/register", json=USER)
        assert response.status_code == 400
        assert response.json() == {"message": "Email already registered"}

    async def test_me_requires_session(self, client: AsyncClient):
        response = await client.get("/api/auth/me")
        assert response.status_code == 401
        assert response.json() == {"message": "Not authenticated"}

    async def test_login_then_me(self, client: AsyncClient):
        await client.post("/api/auth/register", json=USER)
        client.cookies.clear()
        response = await client.post("/api/auth/login", json={"email": USER["email"], "password": USER["password"]})
        assert response.status_code == 200
        me = await client.get("/api/auth/me")
        assert me.status_code == 200
        assert me.json()["email"] == USER["email"]

    async def test_wrong_password_is_401(self, client: AsyncClient):
        await client.post("/api/auth/register", json=USER)
        response = await client.post("/api/auth/login", json={"email": USER["email"], "password": "yanlis"})
        assert response.status_code == 401
        assert response.json() == {"message": "Invalid credentials"}

    async def test_logout_clears_session(self, client: AsyncClient):
        await client.post("/api/auth/register", json=USER)
        assert (await client.get("/api/auth/me")).status_code == 200
        response = await client.post("/api/auth/logout")
        assert response.status_code == 200
        assert (await client.get("/api/auth/me")).status_code == 401

    async def test_tampered_token_is_401(self, app):
        name = get_settings().session_cookie_name
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test", cookies={name: "garbage"}) as ac:
            response = await ac.get("/api/auth/me")
        assert response.status_code == 401
        assert response.json() == {"message": "Invalid session"}

    async def test_token_for_unknown_user_is_401(self, app):
        name = get_settings().session_cookie_name
        token = create_access_token("12345", "manager")
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test", cookies={name: token}) as ac:
            response = await ac.get("/api/auth/me")
        assert response.status_code == 401

    @pytest.mark.parametrize("claims", [{"sub": "yonetici"}, {"role": "manager"}])
    async def test_token_without_numeric_subject_is_401(self, app, claims):
        settings = get_settings()
        token = jwt.encode(claims, settings.secret_key, algorithm="HS256")
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test", cookies={settings.session_cookie_name: token}) as ac:
            response = await ac.get("/api/auth/me")
        assert response.status_code == 401
        assert response.json() == {"message": "Invalid session"}


class TestRequireRole:

    @pytest.fixture
    def guarded_app(self):
        guarded = FastAPI()

        @guarded.get("/admin-only")
        def admin_only(session: dict = Depends(require_role("admin"))):
            return {"sub": session["sub"]}

        return guarded

    async def _get(self, app, token=None):
        cookies = {get_settings().session_cookie_name: token} if token else None
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test", cookies=cookies) as ac:
            return await ac.get("/admin-only")

    async def test_allows_matching_role(self, guarded_app):
        response = await self._get(guarded_app, create_access_token("1", "admin"))
        assert response.status_code == 200
        assert response.json() == {"sub": "1"}

    async def test_rejects_other_role(self, guarded_app):
        response = await self._get(guarded_app, create_access_token("1", "viewer"))
        assert response.status_code == 403

    async def test_rejects_missing_session(self, guarded_app):
        response = await self._get(guarded_app)
        assert response.status_code == 401
