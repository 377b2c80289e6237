import threading
from typing import Callable, List

from .core import ProductNotFoundError
from .models import Product

# This file holds the in-memory product collection and its lock.


def seed_products() -> List[Product]:
    return [
        Product(id="1", name="Laptop", description="High-performance laptop with 16GB RAM",
                price=1200, category="electronics", in_stock=True),
        Product(id="2", name="Smartphone", description="Latest model with 128GB storage",
                price=800, category="electronics", in_stock=True),
        Product(id="3", name="Coffee Maker", description="Programmable coffee maker with timer",
                price=50, category="kitchen", in_stock=False),
    ]


class ProductStore:
    """Insertion-ordered product list. Every method takes the lock, so each
    call is atomic with respect to the others."""

    def __init__(self, products: List[Product] = None):
        self._products: List[Product] = list(products or [])
        self._lock = threading.Lock()

    def _index(self, product_id: str) -> int:
        for i, p in enumerate(self._products):
            if p.id == product_id:
                return i
        raise ProductNotFoundError()

    def all(self) -> List[Product]:
        with self._lock:
            return list(self._products)

    def count(self) -> int:
        with self._lock:
            return len(self._products)

    def get(self, product_id: str) -> Product:
        with self._lock:
            return self._products[self._index(product_id)]

    def add(self, product: Product) -> Product:
        with self._lock:
            if any(p.id == product.id for p in self._products):
                raise ValueError(f"duplicate product id {product.id}")
            self._products.append(product)
            return product

    def update(self, product_id: str, fn: Callable[[Product], Product]) -> Product:
        """Replace the product at its current position with ``fn(old)``."""
        with self._lock:
            idx = self._index(product_id)
            new = fn(self._products[idx])
            if new.id != product_id:
                raise ValueError("product id is immutable")
            self._products[idx] = new
            return new

    def remove(self, product_id: str) -> Product:
        with self._lock:
            return self._products.pop(self._index(product_id))
