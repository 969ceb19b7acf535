"""Abstract repository for the product catalog.

Defined in the domain layer so the domain never depends on
infrastructure. The concrete implementation talks to the remote API
and lives in the infrastructure layer.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from hopshop.domain.model.product import CatalogProduct


class ProductRepository(ABC):

    @abstractmethod
    def list_all(self) -> list[CatalogProduct]:
        """Return every product in the catalog."""
