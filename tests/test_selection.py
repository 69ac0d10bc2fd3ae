from skincare_advisor.services.catalog_index import CatalogIndex
from skincare_advisor.services.selection import SelectionSet


def _ids(selection):
    return [p.id for p in selection.members()]


def test_toggle_appends_in_selection_order(catalog):
    selection = SelectionSet(catalog)
    assert selection.toggle(3) is True
    assert selection.toggle(1) is True
    assert _ids(selection) == [3, 1]
    assert selection.is_selected(3)
    assert not selection.is_selected(2)


def test_toggle_twice_restores_membership(catalog):
    selection = SelectionSet(catalog)
    selection.toggle(1)
    selection.toggle(2)

    selection.toggle(3)
    selection.toggle(3)
    assert _ids(selection) == [1, 2]

    selection.toggle(1)
    assert selection.toggle(1) is True
    assert set(_ids(selection)) == {1, 2}
    assert _ids(selection) == [2, 1]


def test_unknown_id_is_ignored(catalog):
    selection = SelectionSet(catalog)
    selection.toggle(2)
    assert selection.toggle(42) is False
    assert _ids(selection) == [2]
    assert len(selection) == 1


def test_members_is_a_copy(catalog):
    selection = SelectionSet(catalog)
    selection.toggle(1)
    selection.members().clear()
    assert _ids(selection) == [1]


def test_selection_over_failed_catalog(tmp_path):
    index = CatalogIndex(str(tmp_path / "missing.json"))
    index.load()
    selection = SelectionSet(index)
    selection.toggle(1)
    assert selection.members() == []
