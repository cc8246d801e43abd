"""
Pytest configuration for all tests.
Puts the repository root on the path and provides store/service fixtures.
"""

import os
import sys

import pytest

root_path = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if root_path not in sys.path:
    sys.path.insert(0, root_path)

from database.store import MemoryStore  # noqa: E402
from services.charge_ledger import ChargeLedger  # noqa: E402
from services.payment_methods import PaymentMethodRegistry  # noqa: E402


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def ledger(store):
    return ChargeLedger(store)


@pytest.fixture
def registry(store):
    return PaymentMethodRegistry(store)


@pytest.fixture
def client(store):
    """Test client wired to the in-memory store."""
    from fastapi.testclient import TestClient
    from main import create_app

    app = create_app(store=store)
    with TestClient(app) as test_client:
        yield test_client


def make_charge(charge_id="chg-1", total=100, patient_id="pat-1", **extra):
    data = {
        "id": charge_id,
        "total": total,
        "description": "Initial consultation",
        "status": "UNPAID",
        "patient": {"id": patient_id, "firstName": "Ada", "lastName": "Moss"},
        "creator": {"id": "usr-1", "firstName": "Lena", "lastName": "Ortiz"},
        "locationId": "loc-1",
        "locationName": "Main Street",
    }
    data.update(extra)
    return data


def make_payment(payment_id="pay-1", amount=40):
    return {
        "id": payment_id,
        "amount": amount,
        "paymentMedium": "CASH",
        "refunds": [],
    }


def make_card(method_id, patient_id="pat-1", is_default=False):
    return {
        "id": method_id,
        "patientId": patient_id,
        "type": "CARD",
        "description": f"Visa {method_id}",
        "brand": "visa",
        "last4": "4242",
        "expMonth": 12,
        "expYear": 2030,
        "isDefault": is_default,
    }
