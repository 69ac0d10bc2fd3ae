from __future__ import annotations
from typing import Callable, Dict, List, Optional, Tuple
import logging

from skincare_advisor.errors import LoadFailure
from skincare_advisor.schemas import Product
from skincare_advisor.services.catalog_loader import load_catalog

logger = logging.getLogger(__name__)

LOAD_ERROR_TEXT = "Failed to load products. Please refresh the page."
NO_RESULTS_TEXT = "No products found matching your search."

def _search_fields(p: Product) -> Tuple[str, str, str, str]:
    return (p.name, p.brand, p.category, p.description)

class CatalogIndex:
    """
    Read-only product catalog, loaded once.
    search(): case-insensitive substring match over name/brand/category/description,
    results in catalog order, no ranking.
    """
    def __init__(self, source: str, timeout: float = 30.0,
                 loader: Callable[..., List[Product]] = load_catalog):
        self.source = source
        self.timeout = timeout
        self._loader = loader
        self.catalog: List[Product] = []
        self._by_id: Dict[int, Product] = {}
        self.load_error: Optional[LoadFailure] = None
        self._loaded = False

    def load(self) -> bool:
        """Load the catalog. A failure leaves the index empty and sets load_error."""
        if self._loaded:
            return self.load_error is None
        self._loaded = True
        try:
            products = self._loader(self.source, timeout=self.timeout)
        except LoadFailure as e:
            logger.warning("Catalog load failed for %s: %s", self.source, e)
            self.load_error = e
            return False
        self.catalog = list(products)
        self._by_id = {p.id: p for p in self.catalog}
        return True

    @property
    def error_message(self) -> Optional[str]:
        return LOAD_ERROR_TEXT if self.load_error is not None else None

    def get(self, product_id: int) -> Optional[Product]:
        return self._by_id.get(product_id)

    def search(self, term: Optional[str]) -> List[Product]:
        if not term or not term.strip():
            return list(self.catalog)
        needle = term.lower()
        return [p for p in self.catalog if any(needle in f.lower() for f in _search_fields(p))]

    def __len__(self) -> int:
        return len(self.catalog)
