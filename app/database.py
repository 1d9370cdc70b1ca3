# app/database.py
import copy
from typing import Any, Dict, Iterable, List, Optional

from .models import Product

# This file holds the in-memory product store. One ProductStore is built per
# application; nothing survives a process restart.

Record = Dict[str, Any]

SEED_PRODUCTS: List[Product] = [
    Product(
        id="1",
        name="Laptop",
        description="High-performance laptop with 16GB RAM",
        price=1200,
        category="electronics",
        in_stock=True,
    ),
    Product(
        id="2",
        name="Smartphone",
        description="Latest model with 128GB storage",
        price=800,
        category="electronics",
        in_stock=True,
    ),
    Product(
        id="3",
        name="Coffee Maker",
        description="Programmable coffee maker with timer",
        price=50,
        category="kitchen",
        in_stock=False,
    ),
]


class ProductNotFound(KeyError):
    def __init__(self, product_id: str):
        self.product_id = product_id
        super().__init__(product_id)


class ProductStore:
    """Ordered collection of product records keyed by id.

    Records go in and come out as copies, so callers never hold a reference
    into the store's own state.
    """

    def __init__(self, seed: Optional[Iterable[Record]] = None):
        self._seed = [copy.deepcopy(r) for r in (seed or [])]
        self._products: Dict[str, Record] = {}
        self.reset()

    @classmethod
    def with_seed_data(cls) -> "ProductStore":
        return cls(seed=[p.to_record() for p in SEED_PRODUCTS])

    def reset(self) -> None:
        self._products = {r["id"]: copy.deepcopy(r) for r in self._seed}

    def __len__(self) -> int:
        return len(self._products)

    def __contains__(self, product_id: str) -> bool:
        return product_id in self._products

    def list(self) -> List[Record]:
        return [copy.deepcopy(r) for r in self._products.values()]

    def get(self, product_id: str) -> Record:
        record = self._products.get(product_id)
        if record is None:
            raise ProductNotFound(product_id)
        return copy.deepcopy(record)

    def insert(self, record: Record) -> None:
        if record["id"] in self._products:
            raise ValueError(f"duplicate product id: {record['id']}")
        self._products[record["id"]] = copy.deepcopy(record)

    def replace(self, product_id: str, record: Record) -> None:
        if product_id not in self._products:
            raise ProductNotFound(product_id)
        # dict assignment on an existing key keeps its position
        self._products[product_id] = copy.deepcopy(record)

    def remove(self, product_id: str) -> None:
        if product_id not in self._products:
            raise ProductNotFound(product_id)
        del self._products[product_id]
