from datetime import UTC, datetime

import pytest
from bson import ObjectId

from src.domain.repositories.batch_repository import BatchRepository
from src.domain.repositories.order_repository import OrderRepository
from src.domain.repositories.product_repository import ProductRepository


@pytest.fixture
def order_repository(mongodb_database):
    """Real OrderRepository using the test MongoDB database"""
    return OrderRepository(mongodb_database)


@pytest.fixture
def product_repository(mongodb_database):
    """Real ProductRepository using the test MongoDB database"""
    return ProductRepository(mongodb_database)


@pytest.fixture
def batch_repository(mongodb_database):
    """Real BatchRepository using the test MongoDB database"""
    return BatchRepository(mongodb_database)


def ordering_key(n: int) -> ObjectId:
    """A deterministic ObjectId; ordering_key(1) < ordering_key(2) < ..."""
    return ObjectId(f"{n:024x}")


def insert_order_document(repository, n: int, batch: int = 1, archived=False):
    """Insert an order whose ordering key is ordering_key(n)"""
    now = datetime.now(UTC)
    repository.collection.insert_one(
        {
            "_id": ordering_key(n),
            "client": f"Client {n}",
            "batch": batch,
            "deliver_at": datetime(2024, 5, 1, 12, 0, 0),
            "items": [{"item": str(ordering_key(100)), "quantity": n}],
            "archived": archived,
            "created_at": now,
            "updated_at": now,
        }
    )
    return str(ordering_key(n))


def insert_product_document(repository, n: int, description=None, archived=False):
    """Insert a product whose ordering key is ordering_key(n)"""
    now = datetime.now(UTC)
    repository.collection.insert_one(
        {
            "_id": ordering_key(n),
            "description": description or f"Product {n}",
            "default_measurement_unit": "kg",
            "conversions": [{"measurement_unit": "g", "factor": 1000}],
            "archived": archived,
            "created_at": now,
            "updated_at": now,
        }
    )
    return str(ordering_key(n))
