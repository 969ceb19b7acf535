"""REST implementation of ProductRepository."""

from __future__ import annotations

from typing import Any

from hopshop.domain.exceptions import ValidationError
from hopshop.domain.model.product import CatalogProduct
from hopshop.domain.model.value_objects import Money
from hopshop.domain.repository.product_repository import ProductRepository
from hopshop.infrastructure.api.client import ApiClient
from hopshop.infrastructure.logging_config import get_logger

logger = get_logger(__name__)

# Written back by the order repository itself; the rest goes in ``extra``.
_MODELLED_FIELDS = ("_id", "id", "name", "price")


class HttpProductRepository(ProductRepository):

    def __init__(self, client: ApiClient) -> None:
        self._client = client

    def list_all(self) -> list[CatalogProduct]:
        body = self._client.get("/api/products")
        if not isinstance(body, list):
            raise ValidationError("Product catalog payload is not a list")

        products: list[CatalogProduct] = []
        for raw in body:
            if not isinstance(raw, dict):
                raise ValidationError("Malformed product in catalog payload")
            product_id = raw.get("_id") or raw.get("id")
            if not product_id:
                logger.warning("Skipping catalog entry without an id: %r", raw.get("name"))
                continue
            products.append(self._to_domain(str(product_id), raw))
        return products

    @staticmethod
    def _to_domain(product_id: str, raw: dict[str, Any]) -> CatalogProduct:
        stock = raw.get("stock")
        return CatalogProduct(
            id=product_id,
            name=raw.get("name") or "",
            price=Money.of(raw.get("price")),
            category=raw.get("category") or None,
            stock=int(stock) if isinstance(stock, (int, float)) else None,
            extra={k: v for k, v in raw.items() if k not in _MODELLED_FIELDS},
        )
