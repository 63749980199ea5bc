"""Tests for the Content Clusters API endpoints.

Tests the /api/v1/content-clusters endpoints:
- Generate a plan (valid payload, invalid payload)
- Save a plan (success, missing organization)
- List saved clusters and their ideas
- Bearer session authentication
- Health endpoints and lifespan
"""

import signal
from datetime import UTC, datetime, timedelta
from typing import Any
from unittest.mock import AsyncMock, patch

import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from clusterplan.core.auth import DEV_USER
from clusterplan.models import AppUser, AuthSession
from tests.conftest import get_test_settings

BASE_URL = "/api/v1/content-clusters"


@pytest.fixture
def generate_body(research_payload: dict[str, Any]) -> dict[str, Any]:
    return {
        "research_results": research_payload,
        "target_audience": "Small Business Owners",
        "industry": "SaaS",
        "max_keywords_per_cluster": 10,
    }


class TestGenerateClusters:
    """Tests for POST /api/v1/content-clusters/generate."""

    async def test_generate_returns_plan(
        self, async_client: AsyncClient, generate_body: dict[str, Any]
    ) -> None:
        response = await async_client.post(f"{BASE_URL}/generate", json=generate_body)

        assert response.status_code == 200
        data = response.json()
        assert len(data["clusters"]) == 1
        cluster = data["clusters"][0]
        assert cluster["cluster_name"] == "Email Marketing Content Hub (SaaS)"
        assert cluster["total_keywords"] <= 10
        assert cluster["content_gap_score"]["kind"] == "not_implemented"
        assert data["total_articles_generated"] == len(data["articles"])
        assert all(len(a["meta_description"]) <= 160 for a in data["articles"])
        assert "X-Request-ID" in response.headers

    async def test_generate_rejects_invalid_payload(
        self, async_client: AsyncClient
    ) -> None:
        response = await async_client.post(
            f"{BASE_URL}/generate",
            json={"research_results": {"title_suggestions": []}},
        )

        assert response.status_code == 422
        data = response.json()
        assert data["code"] == "VALIDATION_ERROR"
        assert "request_id" in data

    async def test_generate_rejects_zero_keyword_cap(
        self, async_client: AsyncClient, generate_body: dict[str, Any]
    ) -> None:
        generate_body["max_keywords_per_cluster"] = 0
        response = await async_client.post(f"{BASE_URL}/generate", json=generate_body)

        assert response.status_code == 422


class TestSaveClusters:
    """Tests for POST /api/v1/content-clusters."""

    async def test_save_creates_clusters(
        self,
        async_client: AsyncClient,
        generate_body: dict[str, Any],
        app_user: AppUser,
    ) -> None:
        response = await async_client.post(BASE_URL, json={"request": generate_body})

        assert response.status_code == 201
        data = response.json()
        assert len(data["cluster_ids"]) == 1
        assert data["total_articles_generated"] > 0
        assert data["recommendations"]

    async def test_save_without_organization(
        self, async_client: AsyncClient, generate_body: dict[str, Any]
    ) -> None:
        response = await async_client.post(BASE_URL, json={"request": generate_body})

        assert response.status_code == 404
        data = response.json()
        assert data["code"] == "ORGANIZATION_NOT_FOUND"
        assert data["error"] == "User organization not found"

    async def test_save_with_no_cluster_groups(
        self,
        async_client: AsyncClient,
        generate_body: dict[str, Any],
        app_user: AppUser,
    ) -> None:
        generate_body["research_results"]["keyword_analysis"]["cluster_groups"] = []
        response = await async_client.post(BASE_URL, json={"request": generate_body})

        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_INPUT"


class TestListClusters:
    """Tests for GET /api/v1/content-clusters and /{cluster_id}/ideas."""

    async def test_list_without_organization_is_empty(
        self, async_client: AsyncClient
    ) -> None:
        response = await async_client.get(BASE_URL)

        assert response.status_code == 200
        assert response.json() == []

    async def test_list_and_ideas_after_save(
        self,
        async_client: AsyncClient,
        generate_body: dict[str, Any],
        app_user: AppUser,
    ) -> None:
        saved = await async_client.post(BASE_URL, json={"request": generate_body})
        cluster_id = saved.json()["cluster_ids"][0]

        listed = await async_client.get(BASE_URL)
        assert listed.status_code == 200
        clusters = listed.json()
        assert [c["id"] for c in clusters] == [cluster_id]
        assert clusters[0]["org_id"] == app_user.org_id
        assert clusters[0]["content_gap_score"] is None

        ideas = await async_client.get(f"{BASE_URL}/{cluster_id}/ideas")
        assert ideas.status_code == 200
        items = ideas.json()
        assert len(items) == clusters[0]["content_count"]
        assert items[0]["content_type"] == "pillar"
        assert all(item["cluster_id"] == cluster_id for item in items)

    async def test_ideas_unknown_cluster(
        self, async_client: AsyncClient, app_user: AppUser
    ) -> None:
        response = await async_client.get(f"{BASE_URL}/does-not-exist/ideas")

        assert response.status_code == 404
        data = response.json()
        assert data["code"] == "NOT_FOUND"
        assert "does-not-exist" in data["error"]


class TestAuthentication:
    """Bearer session checks when authentication is required."""

    @pytest.fixture
    def auth_required(self):
        settings = get_test_settings().model_copy(update={"auth_required": True})
        with patch("clusterplan.core.auth.get_settings", return_value=settings):
            yield settings

    async def test_missing_token(
        self, async_client: AsyncClient, auth_required
    ) -> None:
        response = await async_client.get(BASE_URL)
        assert response.status_code == 401

    async def test_unknown_session(
        self, async_client: AsyncClient, auth_required, app_user: AppUser
    ) -> None:
        response = await async_client.get(
            BASE_URL, headers={"Authorization": "Bearer nope"}
        )
        assert response.status_code == 401

    async def test_valid_session(
        self,
        async_client: AsyncClient,
        auth_required,
        app_user: AppUser,
        db_session: AsyncSession,
    ) -> None:
        db_session.add(
            AuthSession(
                id="session-valid",
                user_id=DEV_USER.id,
                expires_at=datetime.now(UTC) + timedelta(hours=1),
            )
        )
        await db_session.commit()

        response = await async_client.get(
            BASE_URL, headers={"Authorization": "Bearer session-valid"}
        )
        assert response.status_code == 200

    async def test_expired_session(
        self,
        async_client: AsyncClient,
        auth_required,
        app_user: AppUser,
        db_session: AsyncSession,
    ) -> None:
        db_session.add(
            AuthSession(
                id="session-expired",
                user_id=DEV_USER.id,
                expires_at=datetime.now(UTC) - timedelta(minutes=5),
            )
        )
        await db_session.commit()

        response = await async_client.get(
            BASE_URL, headers={"Authorization": "Bearer session-expired"}
        )
        assert response.status_code == 401


class TestHealth:
    """Tests for health endpoints."""

    async def test_health(self, async_client: AsyncClient) -> None:
        response = await async_client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok"}

    async def test_database_health(self, async_client: AsyncClient) -> None:
        response = await async_client.get("/health/db")
        assert response.status_code == 200
        assert response.json()["database"] is True


class TestLifespan:
    """Tests for application startup and shutdown."""

    async def test_lifespan_leaves_signal_handlers_to_server(self, app) -> None:
        from clusterplan.main import lifespan

        sigterm_before = signal.getsignal(signal.SIGTERM)
        sigint_before = signal.getsignal(signal.SIGINT)

        with patch("clusterplan.main.db_manager") as manager:
            manager.close = AsyncMock()
            async with lifespan(app):
                assert signal.getsignal(signal.SIGTERM) is sigterm_before
                assert signal.getsignal(signal.SIGINT) is sigint_before

        manager.init_db.assert_called_once()
        manager.close.assert_awaited_once()
