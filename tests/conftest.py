"""Pytest configuration and fixtures"""
import os
import pytest
from unittest.mock import Mock, AsyncMock

# Set test environment variables before storefront modules read them
os.environ.setdefault("STOREFRONT_API_URL", "http://storefront.test")
os.environ.setdefault("STORAGE_KEY", "@RocketShoes")
os.environ.setdefault("STOREFRONT_LANGUAGE", "pt")

from storefront.cart import Cart, CartItem, CartStorage, CartStore
from storefront.db import MemorySlot, RedisKeys
from storefront.services import NotificationQueue, Product, Stock


@pytest.fixture
def sample_product():
    """Sample catalog payload"""
    return {
        "id": 7,
        "title": "Tênis de Caminhada Leve Confortável",
        "price": 179.9,
        "image": "https://cdn.storefront.test/tenis1.jpg",
    }


@pytest.fixture
def make_item():
    """Factory for line items"""
    def _make(product_id: int, amount: int = 1, price: float = 100.0) -> CartItem:
        return CartItem(
            id=product_id,
            name=f"Product {product_id}",
            price=price,
            image=f"https://cdn.storefront.test/{product_id}.jpg",
            amount=amount,
        )
    return _make


@pytest.fixture
def stock_levels():
    """Mutable product_id -> available amount map used by mock_api"""
    return {}


@pytest.fixture
def mock_api(stock_levels):
    """Mock catalog/stock client backed by stock_levels"""
    api = Mock()

    async def get_stock(product_id):
        return Stock(id=product_id, amount=stock_levels.get(product_id, 0))

    async def get_product(product_id):
        return Product(id=product_id, name=f"Product {product_id}", price=100)

    api.get_stock = AsyncMock(side_effect=get_stock)
    api.get_product = AsyncMock(side_effect=get_product)
    return api


@pytest.fixture
def slot():
    """In-memory persistence slot"""
    return MemorySlot()


@pytest.fixture
def cart_key():
    return RedisKeys.cart_key()


@pytest.fixture
def notifier():
    return NotificationQueue()


@pytest.fixture
def make_store(mock_api, slot, notifier):
    """Factory for a loaded CartStore seeded with the given items"""
    async def _make(*items: CartItem) -> CartStore:
        storage = CartStorage(slot)
        if items:
            await storage.save(Cart(items))
        store = CartStore(api=mock_api, storage=storage, notifier=notifier, language="pt")
        await store.load()
        return store
    return _make
