"""
Tests for route groups.

Tests cover:
- Prefixes applied to every route of a group
- Group middleware (dependencies) run before each route
- Nested groups inherit the parent's prefix and middleware
"""

from fastapi import Depends, FastAPI, Header, HTTPException
from fastapi.testclient import TestClient

from nore.routes import NoreRouter, group


async def require_token(x_token: str = Header(default="")):
    if x_token != "secret":
        raise HTTPException(status_code=401, detail="invalid token")


async def require_admin(x_role: str = Header(default="")):
    if x_role != "admin":
        raise HTTPException(status_code=403, detail="admins only")


def admin_routes(router: NoreRouter) -> None:
    @router.get("/stats")
    async def stats():
        return {"stats": True}


def api_routes(router: NoreRouter) -> None:
    @router.get("/ping")
    async def ping():
        return {"pong": True}

    router.group("/admin", [Depends(require_admin)], admin_routes)


def build_client() -> TestClient:
    app = FastAPI()
    app.include_router(group("/api", [require_token], api_routes))
    return TestClient(app)


class TestGroup:
    """Route group behaviour."""

    def test_group_returns_router_with_prefix(self):
        router = group("/api", [], api_routes)

        assert isinstance(router, NoreRouter)
        paths = {route.path for route in router.routes}
        assert paths == {"/api/ping", "/api/admin/stats"}

    def test_group_middleware_runs(self):
        client = build_client()

        assert client.get("/api/ping").status_code == 401
        response = client.get("/api/ping", headers={"x-token": "secret"})
        assert response.status_code == 200
        assert response.json() == {"pong": True}

    def test_nested_group_inherits_middleware(self):
        client = build_client()

        assert client.get("/api/admin/stats", headers={"x-role": "admin"}).status_code == 401
        assert client.get("/api/admin/stats", headers={"x-token": "secret"}).status_code == 403

        response = client.get("/api/admin/stats", headers={"x-token": "secret", "x-role": "admin"})
        assert response.status_code == 200
        assert response.json() == {"stats": True}

    def test_group_without_middleware(self):
        app = FastAPI()
        app.include_router(group("/open", None, admin_routes))

        assert TestClient(app).get("/open/stats").status_code == 200
