"""
conftest.py — shared pytest fixtures
Adds the project root to sys.path so `docshare.*` imports resolve correctly
regardless of where pytest is invoked from.
"""

import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

import pytest
from fastapi.testclient import TestClient
from docshare.main import app
from docshare.middleware import rate_limit
from docshare.models import Estimate, Invoice


@pytest.fixture(scope="session")
def client():
    """Synchronous test client."""
    with TestClient(app) as c:
        yield c


@pytest.fixture(autouse=True)
def reset_rate_limit():
    rate_limit._window.clear()
    yield
    rate_limit._window.clear()


@pytest.fixture
def make_estimate():
    """Factory for an Estimate; keyword overrides replace defaults."""
    def _make(**overrides) -> Estimate:
        data = {
            "id": "abcdef12-3456-7890-abcd-ef1234567890",
            "customer_id": "c1",
            "line_items": [
                {"id": "1", "name": "Pressure Wash", "quantity": 1, "unit_price": 150, "total": 150},
            ],
            "subtotal": 150,
            "tax_rate": 0.08,
            "tax_amount": 12,
            "total": 162,
            "status": "draft",
            "expires_at": "2026-03-01T00:00:00Z",
            "created_at": "2026-02-01T00:00:00Z",
            "updated_at": "2026-02-01T00:00:00Z",
        }
        data.update(overrides)
        return Estimate(**data)
    return _make


@pytest.fixture
def make_invoice():
    """Factory for an Invoice; keyword overrides replace defaults."""
    def _make(**overrides) -> Invoice:
        data = {
            "id": "inv12345-6789-abcd-ef01-234567890abc",
            "invoice_number": "INV-001",
            "customer_id": "c1",
            "line_items": [
                {"id": "1", "name": "Lawn Mowing", "quantity": 2, "unit_price": 75, "total": 150},
            ],
            "subtotal": 150,
            "tax_rate": 0.1,
            "tax_amount": 15,
            "total": 165,
            "status": "sent",
            "created_at": "2026-02-15T00:00:00Z",
            "updated_at": "2026-02-15T00:00:00Z",
        }
        data.update(overrides)
        return Invoice(**data)
    return _make
