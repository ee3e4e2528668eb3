"""
Inkwell Backend — Application Plumbing Tests
==============================================

What:  Health check, middleware, right checks and configuration.

What we test:
    ✅ /health reports healthy, and 503 when the database is unreachable
    ✅ X-Request-ID is echoed and appears in error bodies
    ✅ Rate limiter answers 429 with Retry-After once the window is full
    ✅ auth("manageUsers") rejects USER with 403 and admits ADMIN
    ✅ Settings validation
"""

from unittest.mock import MagicMock, patch

import pytest
from fastapi import Depends, FastAPI
from httpx import ASGITransport, AsyncClient
from pydantic import ValidationError as PydanticValidationError

from app import database
from app.config import DEV_JWT_SECRET, Settings
from app.dependencies import auth
from app.main import register_exception_handlers
from app.middleware.rate_limit import RateLimitMiddleware
from app.models.user import User


class TestHealth:

    @pytest.mark.asyncio
    async def test_healthy(self, test_client):
        response = await test_client.get("/health")
        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["database"] == "connected"

    @pytest.mark.asyncio
    async def test_database_down(self, test_client):
        broken = MagicMock()
        broken.connect.side_effect = ConnectionRefusedError("db down")

        with patch.object(database, "engine", broken):
            response = await test_client.get("/health")

        assert response.status_code == 503
        assert response.json()["status"] == "unhealthy"


class TestRequestId:

    @pytest.mark.asyncio
    async def test_generated_id_is_echoed(self, test_client):
        response = await test_client.get("/health")
        assert len(response.headers["X-Request-ID"]) == 8

    @pytest.mark.asyncio
    async def test_client_id_reused_in_error_body(self, test_client):
        response = await test_client.get("/posts", headers={"X-Request-ID": "trace-123"})
        assert response.status_code == 401
        assert response.headers["X-Request-ID"] == "trace-123"
        assert response.json()["request_id"] == "trace-123"


class TestRateLimit:

    def setup_method(self):
        self.app = FastAPI()
        self.app.add_middleware(RateLimitMiddleware, max_requests=2, window_seconds=60)

        @self.app.get("/ping")
        async def ping():
            return {"ok": True}

        @self.app.get("/health")
        async def health():
            return {"status": "healthy"}

    @pytest.mark.asyncio
    async def test_third_request_rejected(self):
        transport = ASGITransport(app=self.app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            assert (await client.get("/ping")).status_code == 200
            assert (await client.get("/ping")).status_code == 200
            rejected = await client.get("/ping")

        assert rejected.status_code == 429
        assert 0 < int(rejected.headers["Retry-After"]) <= 61
        assert rejected.json()["error"] == "rate_limit_exceeded"

    @pytest.mark.asyncio
    async def test_health_not_limited(self):
        transport = ASGITransport(app=self.app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            statuses = [(await client.get("/health")).status_code for _ in range(5)]
        assert statuses == [200] * 5


class TestRightChecks:

    def setup_method(self):
        self.app = FastAPI()
        register_exception_handlers(self.app)

        @self.app.get("/users")
        async def list_users(user: User = Depends(auth("manageUsers"))):
            return {"id": user.id}

    @pytest.mark.asyncio
    async def test_user_forbidden(self, db_tables, make_user, auth_headers):
        user = await make_user(role="USER")
        transport = ASGITransport(app=self.app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            response = await client.get("/users", headers=auth_headers(user))

        assert response.status_code == 403
        assert response.json()["details"]["missing_rights"] == ["manageUsers"]

    @pytest.mark.asyncio
    async def test_admin_allowed(self, db_tables, make_user, auth_headers):
        admin = await make_user(role="ADMIN")
        transport = ASGITransport(app=self.app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            response = await client.get("/users", headers=auth_headers(admin))

        assert response.status_code == 200
        assert response.json() == {"id": admin.id}


class TestSettings:

    def test_dev_secret_fails_production_check(self):
        with pytest.raises(ValueError, match="JWT_SECRET"):
            Settings(jwt_secret=DEV_JWT_SECRET).validate_required_for_production()

    def test_real_secret_passes(self):
        Settings(jwt_secret="a-real-shared-secret").validate_required_for_production()

    def test_log_level_normalized(self):
        assert Settings(log_level="debug").log_level == "DEBUG"

    def test_invalid_log_level(self):
        with pytest.raises(PydanticValidationError):
            Settings(log_level="chatty")

    def test_cors_origins_list(self):
        settings = Settings(cors_origins="http://a.test, http://b.test")
        assert settings.cors_origins_list == ["http://a.test", "http://b.test"]

    def test_sqlite_detection(self):
        assert Settings(database_url="sqlite+aiosqlite:///x.db").is_sqlite
        assert not Settings(database_url="postgresql+asyncpg://u:p@h/db").is_sqlite
