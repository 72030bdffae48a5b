# Test type: Configuration
# Validation to be executed: Shared fixtures for all test modules
# Command: pytest test/ -v (this file is auto-loaded by pytest)

"""Shared pytest fixtures for the Salary Calculator API test suite."""

from __future__ import annotations

import pytest
from httpx import ASGITransport, AsyncClient

from salarycalc.database import get_db
from salarycalc.main import app


class FakeResult:
    """Mimics the parts of ``Result`` the services use."""

    def __init__(self, rows=None):
        self._rows = list(rows or [])

    def scalar_one_or_none(self):
        return self._rows[0] if self._rows else None

    def scalars(self):
        return self

    def all(self):
        return list(self._rows)


class FakeSession:
    """In-memory stand-in for ``AsyncSession``.

    ``execute`` returns whatever rows were queued in ``results`` (one list
    per call, oldest first) and an empty result once the queue is drained.
    """

    def __init__(self, results=None):
        self.results = list(results or [])
        self.added = []
        self.deleted = []
        self.statements = []
        self.flushes = 0

    async def execute(self, statement):
        self.statements.append(statement)
        return FakeResult(self.results.pop(0) if self.results else [])

    def add(self, obj):
        self.added.append(obj)

    async def delete(self, obj):
        self.deleted.append(obj)

    async def flush(self):
        self.flushes += 1


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
async def client():
    """Async HTTP client bound to the FastAPI app (no real server needed)."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
        yield ac


@pytest.fixture
def fake_session():
    return FakeSession()


@pytest.fixture
async def db_client(fake_session):
    """Variant of ``client`` whose routes receive ``fake_session``."""

    async def _override():
        yield fake_session

    app.dependency_overrides[get_db] = _override
    try:
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
            yield ac
    finally:
        app.dependency_overrides.pop(get_db, None)


# ── Sample data fixtures ─────────────────────────────────────────────────

@pytest.fixture
def delhi_12l():
    """Worked example: ₹12 L CTC in Delhi, no non-monthly components."""
    return {"ctc": 1_200_000, "city": "Delhi"}
