import json

import pytest

from skincare_advisor.services.catalog_index import CatalogIndex

PRODUCTS = [
    {
        "id": 1,
        "brand": "CeraVe",
        "name": "Foaming Facial Cleanser",
        "category": "cleanser",
        "description": "Gel-to-foam cleanser for normal to oily skin.",
        "image": "img/cerave-foaming-cleanser.jpg",
    },
    {
        "id": 2,
        "brand": "CeraVe",
        "name": "Moisturizing Cream",
        "category": "moisturizer",
        "description": "Rich cream with ceramides and hyaluronic acid.",
        "image": "img/cerave-moisturizing-cream.jpg",
    },
    {
        "id": 3,
        "brand": "La Roche-Posay",
        "name": "Anthelios",
        "category": "suncare",
        "description": "Melt-in milk sunscreen SPF 60 with broad spectrum UVA/UVB protection, fast absorbing and gentle.",
        "image": "img/lrp-anthelios.jpg",
    },
    {
        "id": 4,
        "brand": "Maybelline",
        "name": "Instant Age Rewind Concealer",
        "category": "makeup",
        "description": "Concealer that erases dark circles.",
        "image": "",
    },
]


class FakeTransport:
    """Stands in for ChatClient; records the history it was sent."""

    def __init__(self, replies=None, error=None):
        self.replies = list(replies or [])
        self.error = error
        self.calls = []

    def complete(self, messages):
        self.calls.append(list(messages))
        if self.error is not None:
            raise self.error
        return self.replies.pop(0) if self.replies else "ok"


@pytest.fixture
def catalog_file(tmp_path):
    path = tmp_path / "products.json"
    path.write_text(json.dumps({"products": PRODUCTS}), encoding="utf-8")
    return path


@pytest.fixture
def catalog(catalog_file):
    index = CatalogIndex(str(catalog_file))
    assert index.load()
    return index
