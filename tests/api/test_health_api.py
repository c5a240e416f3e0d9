"""
Tests for the health endpoints.
"""

from unittest.mock import AsyncMock, patch

import pytest
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession


class TestHealth:
    """Tests for the health checks."""

    @pytest.mark.asyncio
    async def test_app_health(self, client):
        """App-level health answers without touching the database."""
        response = await client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    @pytest.mark.asyncio
    async def test_api_health_checks_database(self, client):
        """API health reports a connected database."""
        response = await client.get("/api/v1/health")
        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "database": "connected"}

    @pytest.mark.asyncio
    async def test_api_health_reports_unreachable_database(self, client):
        """A failing database round trip returns 503 with an unhealthy body."""
        down = OperationalError("SELECT 1", {}, Exception("connection refused"))
        with patch.object(AsyncSession, "execute", AsyncMock(side_effect=down)):
            response = await client.get("/api/v1/health")

        assert response.status_code == 503
        assert response.json() == {"status": "unhealthy", "database": "disconnected"}
