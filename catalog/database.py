import threading
import uuid
from typing import Iterable, List, Optional

from .models import Product

# This file holds the in-memory product store and its startup contents.


class ProductStore:
    def __init__(self, products: Optional[Iterable[Product]] = None):
        self._products: List[Product] = []
        self._lock = threading.Lock()
        for p in products or ():
            self.insert(p)

    def __len__(self) -> int:
        return len(self._products)

    def __contains__(self, product_id: str) -> bool:
        return self.find_by_id(product_id) is not None

    def list(self) -> List[Product]:
        return self._products[:]

    def find_by_id(self, product_id: str) -> Optional[Product]:
        for p in self._products:
            if p.id == product_id:
                return p
        return None

    def new_id(self) -> str:
        while True:
            pid = str(uuid.uuid4())
            if pid not in self:
                return pid

    def insert(self, product: Product) -> None:
        with self._lock:
            if product.id in self:
                raise ValueError(f"duplicate product id: {product.id}")
            self._products.append(product)

    def replace(self, product_id: str, product: Product) -> bool:
        with self._lock:
            for i, p in enumerate(self._products):
                if p.id == product_id:
                    self._products[i] = product
                    return True
            return False

    def remove(self, product_id: str) -> bool:
        with self._lock:
            remaining = [p for p in self._products if p.id != product_id]
            if len(remaining) == len(self._products):
                return False
            self._products = remaining
            return True


def seed_products() -> List[Product]:
    return [
        Product(
            id="1",
            name="Laptop",
            description="Powerful laptop for all your needs.",
            price=1200,
            category="electronics",
            in_stock=True,
        ),
        Product(
            id="2",
            name="Coffee Mug",
            description="A large ceramic mug.",
            price=15,
            category="home goods",
            in_stock=False,
        ),
        Product(
            id="3",
            name="Smartphone",
            description="Latest model with advanced features.",
            price=800,
            category="electronics",
            in_stock=True,
        ),
    ]
