"""Fixtures for API integration tests."""

from __future__ import annotations

from collections.abc import AsyncGenerator

import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from morocco_payroll.api.app import create_app


@pytest_asyncio.fixture
async def client() -> AsyncGenerator[AsyncClient, None]:
    """Create async HTTP client for API testing."""
    app = create_app()
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


REPORT_PAYLOAD = {
    "period": "2025-03",
    "employees": [
        {
            "employee_id": "EMP-001",
            "name": "Amina Alaoui",
            "cnss_number": "123456789",
            "payroll": {"base_salary": 8000, "working_days": 22},
        },
        {
            "employee_id": "EMP-002",
            "name": "Youssef Bennani",
            "payroll": {"base_salary": 20000, "working_days": 22},
        },
    ],
}
