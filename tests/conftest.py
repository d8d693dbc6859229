import fakeredis
import pytest
from fastapi.testclient import TestClient

from app.domain.errors import ProductNotFoundError
from app.domain.schemas import ProductSnapshot
from app.main import create_app
from app.services.basket_service import BasketService
from app.services.lock_service import LockService


class FakeCatalog:
    """Catalog double: serves products from a dict and records every lookup."""

    def __init__(self, products):
        self.products = {p.id: p for p in products}
        self.calls = []

    def fetch_product(self, product_id: str) -> ProductSnapshot:
        self.calls.append(product_id)
        product = self.products.get(product_id)
        if product is None:
            raise ProductNotFoundError(product_id)
        return product.model_copy()


def make_product(product_id: str, restaurant_id: str, price: float = 10.0) -> ProductSnapshot:
    return ProductSnapshot(
        id=product_id,
        label=f"Label {product_id}",
        description=f"Description of {product_id}",
        price=price,
        visible=True,
        quantity=100,
        categoryId="c1",
        restaurantId=restaurant_id,
    )


@pytest.fixture
def redis_client():
    return fakeredis.FakeRedis(server=fakeredis.FakeServer(), decode_responses=True)


@pytest.fixture
def catalog():
    return FakeCatalog(
        [
            make_product("p1", "r1", price=9.5),
            make_product("p2", "r2", price=4.0),
            make_product("p3", "r1", price=12.25),
        ]
    )


@pytest.fixture
def lock_service(redis_client):
    return LockService(redis_client, ttl_ms=2000, attempts=2, wait_seconds=0)


@pytest.fixture
def service(redis_client, catalog, lock_service):
    return BasketService(
        client=redis_client,
        product_client=catalog,
        lock_service=lock_service,
    )


@pytest.fixture
def test_client(redis_client, catalog):
    app = create_app(redis_client=redis_client, product_client=catalog)
    with TestClient(app) as client:
        yield client


@pytest.fixture
def headers():
    return {"UserID": "u1"}
