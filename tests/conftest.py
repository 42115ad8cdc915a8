"""
Shared pytest fixtures.

Every test gets its own MemoryStore; the API client is wired to it through a
dependency override so nothing leaks between tests.
"""

from datetime import date

import pytest
from fastapi.testclient import TestClient

from apps.api.deps import get_store
from apps.api.main import app
from services.persistence.memory import MemoryStore

THIS_YEAR = date.today().year


@pytest.fixture
def store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def client(store):
    app.dependency_overrides[get_store] = lambda: store
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def registration() -> dict:
    """A well-established trading company: scores the 850 ceiling."""
    return {
        "email": "owner@falcontrading.ae",
        "password": "s3cret-pass",
        "businessName": "Falcon Trading LLC",
        "businessType": "Trading",
        "contactPerson": "Mariam Al Hashimi",
        "phoneNumber": "+971500000000",
        "tradeLicense": "DXB-123456",
        "establishedYear": THIS_YEAR - 10,
        "employeeCount": 60,
        "monthlyRevenue": "150000",
    }
