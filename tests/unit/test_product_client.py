from unittest.mock import MagicMock

import pytest
import requests

from app.domain.errors import ProductNotFoundError
from app.services.product_client import ProductClient

PRODUCT = {
    "id": "p1",
    "label": "Burger",
    "description": "Beef burger",
    "price": 9.5,
    "visible": True,
    "quantity": 10,
    "categoryId": "c1",
    "restaurantId": "r1",
}


def make_client(response=None, error=None):
    session = MagicMock()
    if error is not None:
        session.get.side_effect = error
    else:
        session.get.return_value = response
    return ProductClient(base_url="http://catalog/product/", timeout=1, session=session), session


def make_response(payload, status_ok=True):
    resp = MagicMock()
    resp.json.return_value = payload
    if not status_ok:
        resp.raise_for_status.side_effect = requests.HTTPError("404 Not Found")
    return resp


def test_fetch_product_returns_snapshot():
    client, session = make_client(make_response(PRODUCT))

    product = client.fetch_product("p1")

    session.get.assert_called_once_with("http://catalog/product/p1", timeout=1)
    assert product.id == "p1"
    assert product.price == 9.5
    assert product.category_id == "c1"
    assert product.restaurant_id == "r1"


def test_product_id_is_quoted():
    client, session = make_client(make_response(PRODUCT))

    client.fetch_product("a/b c")

    session.get.assert_called_once_with("http://catalog/product/a%2Fb%20c", timeout=1)


def test_http_error_means_not_found():
    client, _ = make_client(make_response({}, status_ok=False))

    with pytest.raises(ProductNotFoundError) as exc:
        client.fetch_product("p1")

    assert exc.value.product_id == "p1"
    assert exc.value.code == "PRODUCT_NOT_FOUND"


def test_transport_error_means_not_found_without_retry():
    client, session = make_client(error=requests.ConnectionError("refused"))

    with pytest.raises(ProductNotFoundError):
        client.fetch_product("p1")

    assert session.get.call_count == 1


def test_undecodable_body_means_not_found():
    resp = MagicMock()
    resp.json.side_effect = ValueError("not json")
    client, _ = make_client(resp)

    with pytest.raises(ProductNotFoundError):
        client.fetch_product("p1")


def test_incomplete_product_means_not_found():
    client, _ = make_client(make_response({"id": "p1", "price": 1.0}))

    with pytest.raises(ProductNotFoundError):
        client.fetch_product("p1")
