from __future__ import annotations

import json
from pathlib import Path
from typing import Iterable, List

from ..core.exceptions import ConfigurationError

DEFAULT_PRODUCTS_FILE = Path(__file__).resolve().parents[1] / "data" / "products.json"


class ProductCatalog:
    """Closed list of product descriptions a work log may reference."""

    def __init__(self, products: Iterable[str]):
        self._products = [str(p) for p in products]

    def __contains__(self, product: object) -> bool:
        return product in self._products

    def __iter__(self):
        return iter(self._products)

    def __len__(self) -> int:
        return len(self._products)

    def options(self) -> List[str]:
        return list(self._products)


def load_products(path: str | Path | None = None) -> ProductCatalog:
    path = Path(path) if path else DEFAULT_PRODUCTS_FILE
    try:
        products = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        raise ConfigurationError(f"Product list {path} is invalid: {e}") from e
    if not isinstance(products, list):
        raise ConfigurationError(f"Product list {path} is invalid: expected a list")
    return ProductCatalog(products)
