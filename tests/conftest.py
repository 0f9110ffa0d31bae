import json

import pytest
from rest_framework.test import APIRequestFactory

from billing.calculator import calculate_bill
from billing.models import NewBill, new_bill_from_calculation
from billing.storage import MemoryBillStore


@pytest.fixture
def store():
    return MemoryBillStore()


@pytest.fixture
def factory():
    return APIRequestFactory()


@pytest.fixture
def sample_calculation():
    return calculate_bill({"nutella": 2, "atta": 1})


@pytest.fixture
def make_bill(sample_calculation):
    """Return a factory for NewBill objects priced from {nutella: 2, atta: 1}."""
    def _make(bill_number="INV-1234", customer_name="Asha Rao", customer_phone="9876543210"):
        return new_bill_from_calculation(bill_number, customer_name, customer_phone, sample_calculation)
    return _make


@pytest.fixture
def bill_payload(sample_calculation):
    """Request body in the shape the billing counter sends."""
    data = sample_calculation.to_dict()
    return {
        "billNumber": "INV-4321",
        "customerName": "Asha Rao",
        "customerPhone": "9876543210",
        "snacksTotal": str(data["snacksTotal"]),
        "groceryTotal": str(data["groceryTotal"]),
        "hygieneTotal": str(data["hygieneTotal"]),
        "snacksTax": str(data["snacksTax"]),
        "groceryTax": str(data["groceryTax"]),
        "hygieneTax": str(data["hygieneTax"]),
        "grandTotal": str(data["grandTotal"]),
        "items": json.dumps(data["items"]),
    }


@pytest.fixture
def empty_bill():
    return NewBill(bill_number="INV-2000", customer_name="Ravi", customer_phone="9123456780")
