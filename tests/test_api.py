"""Tests for the storefront API client"""
import json
import pytest
import httpx
from decimal import Decimal

from storefront.errors import ApiError, ProductNotFound
from storefront.services import StorefrontApi


def make_api(handler):
    return StorefrontApi(base_url="http://storefront.test", transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_get_stock():
    def handler(request):
        assert request.url.path == "/stock/3"
        return httpx.Response(200, json={"id": 3, "amount": 5})

    async with make_api(handler) as api:
        stock = await api.get_stock(3)

    assert stock.id == 3
    assert stock.amount == 5


@pytest.mark.asyncio
async def test_get_product():
    def handler(request):
        assert request.url.path == "/products/7"
        return httpx.Response(200, json={"id": 7, "title": "Tênis", "price": 139.9, "image": "a.jpg"})

    async with make_api(handler) as api:
        product = await api.get_product(7)

    assert product.name == "Tênis"
    assert product.price == Decimal("139.9")
    assert product.image == "a.jpg"


@pytest.mark.asyncio
async def test_not_found():
    async with make_api(lambda request: httpx.Response(404, json={})) as api:
        with pytest.raises(ProductNotFound) as exc:
            await api.get_stock(99)

    assert exc.value.product_id == 99
    assert exc.value.status_code == 404


@pytest.mark.asyncio
async def test_server_error():
    async with make_api(lambda request: httpx.Response(503, text="down")) as api:
        with pytest.raises(ApiError) as exc:
            await api.get_product(1)

    assert exc.value.status_code == 503


@pytest.mark.asyncio
async def test_network_error():
    def handler(request):
        raise httpx.ConnectError("refused", request=request)

    async with make_api(handler) as api:
        with pytest.raises(ApiError):
            await api.get_stock(1)


@pytest.mark.asyncio
@pytest.mark.parametrize("body", ["not json", json.dumps({"id": 1}), json.dumps([1])])
async def test_malformed_payload(body):
    async with make_api(lambda request: httpx.Response(200, text=body)) as api:
        with pytest.raises(ApiError):
            await api.get_stock(1)


@pytest.mark.asyncio
async def test_injected_client_not_closed():
    client = httpx.AsyncClient(
        base_url="http://storefront.test",
        transport=httpx.MockTransport(lambda request: httpx.Response(200, json={"id": 1, "amount": 0})),
    )
    api = StorefrontApi(client=client)

    assert (await api.get_stock(1)).amount == 0
    await api.aclose()

    assert not client.is_closed
    await client.aclose()


@pytest.mark.asyncio
@pytest.mark.parametrize("payload", [
    {"id": 7, "name": "X", "price": "not-a-price"},
    {"id": 7, "name": "X"},
])
async def test_bad_catalog_price_rejected(payload):
    """A product without a usable price never reaches the cart"""
    async with make_api(lambda request: httpx.Response(200, json=payload)) as api:
        with pytest.raises(ApiError):
            await api.get_product(7)
