# tests/test_sdk.py
from unittest.mock import Mock

import pytest
import requests

from sdk.pystore import StoreClient, _parse_bool


def _client(api_key=None):
    c = StoreClient(base_url="http://api.test/", api_key=api_key)
    c.session = Mock()
    c.session.headers = {"x-api-key": api_key} if api_key else {}
    response = Mock()
    response.json.return_value = {"ok": True}
    for verb in ("get", "post", "put", "delete"):
        getattr(c.session, verb).return_value = response
    return c, response


def test_api_key_header_set_on_session():
    c = StoreClient(api_key="k")
    assert c.session.headers["x-api-key"] == "k"
    assert "x-api-key" not in StoreClient().session.headers


def test_list_products_params():
    c, _ = _client()
    c.list_products(category="kitchen", search="cof", page=2, limit=5)
    c.session.get.assert_called_once_with(
        "http://api.test/api/products",
        params={"category": "kitchen", "search": "cof", "page": 2, "limit": 5},
        timeout=10,
    )


def test_list_products_no_params():
    c, _ = _client()
    c.list_products()
    assert c.session.get.call_args.kwargs["params"] == {}


def test_create_product_payload():
    c, _ = _client("k")
    assert c.create_product("Mouse", "Wireless", 25, "electronics", False) == {"ok": True}
    c.session.post.assert_called_once_with(
        "http://api.test/api/products",
        json={"name": "Mouse", "description": "Wireless", "price": 25, "category": "electronics", "inStock": False},
        timeout=10,
    )


def test_update_sends_only_given_fields():
    c, _ = _client("k")
    c.update_product("3", in_stock=False, price=0)
    c.session.put.assert_called_once_with(
        "http://api.test/api/products/3", json={"price": 0, "inStock": False}, timeout=10,
    )


def test_delete_and_stats_urls():
    c, _ = _client("k")
    c.delete_product("2")
    c.stats()
    c.session.delete.assert_called_once_with("http://api.test/api/products/2", timeout=10)
    c.session.get.assert_called_once_with("http://api.test/api/products/stats", timeout=10)


def test_errors_raise():
    c, response = _client()
    response.raise_for_status.side_effect = requests.exceptions.HTTPError("404")
    with pytest.raises(requests.exceptions.HTTPError):
        c.get_product("missing")


def test_parse_bool():
    assert _parse_bool("TRUE") is True
    assert _parse_bool("no") is False
    with pytest.raises(ValueError):
        _parse_bool("maybe")
