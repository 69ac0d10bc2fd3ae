from __future__ import annotations
from typing import List
import logging

from skincare_advisor.schemas import Product
from skincare_advisor.services.catalog_index import CatalogIndex

logger = logging.getLogger(__name__)

NO_SELECTION_TEXT = "No products selected yet."


class SelectionSet:
    """Ordered, de-duplicated working set of products, kept in selection order."""

    def __init__(self, catalog: CatalogIndex):
        self._catalog = catalog
        self._members: List[Product] = []

    def toggle(self, product_id: int) -> bool:
        """Add or remove a product by id. Returns whether it is selected afterwards.

        Ids the catalog does not know are ignored.
        """
        product = self._catalog.get(product_id)
        if product is None:
            logger.debug("Ignoring toggle for unknown product id %s", product_id)
            return False
        for i, p in enumerate(self._members):
            if p.id == product_id:
                del self._members[i]
                return False
        self._members.append(product)
        return True

    def members(self) -> List[Product]:
        return list(self._members)

    def is_selected(self, product_id: int) -> bool:
        return any(p.id == product_id for p in self._members)

    def __len__(self) -> int:
        return len(self._members)
