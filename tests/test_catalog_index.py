import pytest

from skincare_advisor.errors import LoadFailure
from skincare_advisor.services.catalog_index import LOAD_ERROR_TEXT, CatalogIndex


def _ids(products):
    return [p.id for p in products]


def test_empty_term_returns_full_catalog(catalog):
    assert _ids(catalog.search("")) == [1, 2, 3, 4]
    assert _ids(catalog.search("   ")) == [1, 2, 3, 4]
    assert _ids(catalog.search(None)) == [1, 2, 3, 4]


def test_search_is_case_insensitive_over_all_fields(catalog):
    assert _ids(catalog.search("CERAVE")) == [1, 2]
    assert _ids(catalog.search("anthelios")) == [3]
    assert _ids(catalog.search("Makeup")) == [4]
    assert _ids(catalog.search("hyaluronic")) == [2]


def test_no_match(catalog):
    assert catalog.search("retinol") == []


@pytest.mark.parametrize("term", ["e", "skin", "cream", "C", "spf 60", "zzz"])
def test_results_are_ordered_subsequence(catalog, term):
    results = catalog.search(term)
    positions = [catalog.catalog.index(p) for p in results]
    assert positions == sorted(positions)
    for p in results:
        fields = (p.brand, p.name, p.category, p.description)
        assert any(term.lower() in f.lower() for f in fields)


def test_search_returns_same_product_objects(catalog):
    first, second = catalog.search("cerave"), catalog.search("cerave")
    assert first is not second
    assert all(a is b for a, b in zip(first, second))


def test_get(catalog):
    assert catalog.get(3).name == "Anthelios"
    assert catalog.get(99) is None
    assert len(catalog) == 4


def test_load_failure_leaves_index_empty(tmp_path):
    index = CatalogIndex(str(tmp_path / "missing.json"))
    assert index.load() is False
    assert isinstance(index.load_error, LoadFailure)
    assert index.error_message == LOAD_ERROR_TEXT
    assert index.search("") == []
    assert index.search("cerave") == []
    assert index.get(1) is None


def test_load_runs_once(catalog_file):
    calls = []

    def loader(source, timeout):
        calls.append(source)
        raise LoadFailure("boom")

    index = CatalogIndex(str(catalog_file), loader=loader)
    assert index.load() is False
    assert index.load() is False
    assert len(calls) == 1


def test_search_before_load_is_empty(catalog_file):
    index = CatalogIndex(str(catalog_file))
    assert index.search("cerave") == []
    assert index.error_message is None


def test_undecodable_catalog_leaves_index_empty(tmp_path):
    path = tmp_path / "products.json"
    path.write_bytes(b'{"products": [\xff\xfe]}')
    index = CatalogIndex(str(path))
    assert index.load() is False
    assert isinstance(index.load_error, LoadFailure)
    assert index.search("x") == []
    assert index.error_message == LOAD_ERROR_TEXT
