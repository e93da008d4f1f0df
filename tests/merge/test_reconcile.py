from __future__ import annotations

import pytest

from pdfweld.errors import StructuralError
from pdfweld.merge.reconcile import Role, classify, merge_dictionaries, outline_tree_ids, reconcile
from pdfweld.model.objects import Name, Reference, Stream


def test_merge_dictionaries_prefers_dominant_and_keeps_recessive_only_keys() -> None:
    dominant = {"Type": Name("Pages"), "Custom": 1}
    recessive = {"Type": Name("Pages"), "Custom": 2, "Extra": 3}

    merged = merge_dictionaries(dominant, recessive)

    assert merged == {"Type": Name("Pages"), "Custom": 1, "Extra": 3}
    assert merged is not dominant and merged is not recessive
    assert recessive["Custom"] == 2


def test_classify_switches_on_type_tag() -> None:
    assert classify({"Type": Name("Catalog")}) is Role.CATALOG
    assert classify({"Type": Name("Pages")}) is Role.PAGES
    assert classify({"Type": Name("Page")}) is Role.PAGE
    assert classify({"Type": Name("Outlines")}) is Role.OUTLINE
    assert classify({"Type": Name("Outline")}) is Role.OUTLINE
    assert classify({"Type": Name("Font")}) is Role.OTHER
    assert classify(Stream({"Type": Name("XObject")}, b"")) is Role.OTHER
    assert classify(7) is Role.OTHER


def test_first_catalog_wins_and_later_ones_are_discarded() -> None:
    objects = {
        (1, 0): {"Type": Name("Catalog"), "Pages": Reference(2), "Lang": "first"},
        (2, 0): {"Type": Name("Pages"), "Kids": [], "Count": 0},
        (5, 0): {"Type": Name("Catalog"), "Pages": Reference(6), "Lang": "second"},
        (6, 0): {"Type": Name("Pages"), "Kids": [], "Count": 0},
    }

    graph = reconcile(objects)

    assert graph.catalog_id == (1, 0)
    assert graph.catalog["Lang"] == "first"
    assert (5, 0) not in graph.objects


def test_pages_fold_keeps_earliest_values_and_later_unique_keys() -> None:
    objects = {
        (2, 0): {"Type": Name("Pages"), "Custom": "earliest", "Kids": [Reference(3)], "Count": 1},
        (3, 0): {"Type": Name("Page"), "Parent": Reference(2)},
        (4, 0): {"Type": Name("Catalog"), "Pages": Reference(2)},
        (7, 0): {"Type": Name("Pages"), "Custom": "middle", "OnlyMiddle": 1, "Kids": [], "Count": 0},
        (9, 0): {"Type": Name("Pages"), "Custom": "latest", "OnlyLatest": 2, "Kids": [], "Count": 0},
    }

    graph = reconcile(objects)

    assert graph.pages["Custom"] == "earliest"
    assert graph.pages["OnlyMiddle"] == 1
    assert graph.pages["OnlyLatest"] == 2
    assert graph.pages["Kids"] == [Reference(3)]
    assert graph.pages_id == (9, 0)


def test_pages_and_outline_nodes_are_dropped_other_objects_pass_through() -> None:
    font = {"Type": Name("Font"), "BaseFont": Name("Courier")}
    content = Stream({}, b"BT ET")
    objects = {
        (1, 0): {"Type": Name("Catalog"), "Pages": Reference(2), "Outlines": Reference(5)},
        (2, 0): {"Type": Name("Pages"), "Kids": [Reference(3)], "Count": 1},
        (3, 0): {"Type": Name("Page"), "Parent": Reference(2)},
        (4, 0): font,
        (5, 0): {"Type": Name("Outlines"), "First": Reference(6)},
        (6, 0): {"Type": Name("Outline"), "Parent": Reference(5)},
        (8, 0): content,
    }

    graph = reconcile(objects)

    assert graph.objects == {(4, 0): font, (8, 0): content}


def test_non_dictionary_pages_object_is_dropped() -> None:
    objects = {
        (1, 0): {"Type": Name("Catalog"), "Pages": Reference(2)},
        (2, 0): {"Type": Name("Pages"), "Kids": [], "Count": 0},
        (3, 0): Stream({"Type": Name("Pages")}, b""),
    }

    graph = reconcile(objects)

    assert graph.pages_id == (2, 0)
    assert (3, 0) not in graph.objects


def test_missing_anchors_raise_structural_error() -> None:
    with pytest.raises(StructuralError, match="Catalog"):
        reconcile({(1, 0): {"Type": Name("Pages"), "Kids": [], "Count": 0}})

    with pytest.raises(StructuralError, match="Pages"):
        reconcile({(1, 0): {"Type": Name("Catalog")}})

    with pytest.raises(StructuralError):
        reconcile({})


def _untyped_outline_objects() -> dict:
    return {
        (1, 0): {"Type": Name("Catalog"), "Pages": Reference(2), "Outlines": Reference(10)},
        (2, 0): {"Type": Name("Pages"), "Kids": [Reference(3)], "Count": 1},
        (3, 0): {"Type": Name("Page"), "Parent": Reference(2)},
        (4, 0): {"Type": Name("Font"), "BaseFont": Name("Courier")},
        (10, 0): {"Count": 3, "First": Reference(11), "Last": Reference(12)},
        (11, 0): {"Title": "Chapter 1", "Parent": Reference(10), "Next": Reference(12), "First": Reference(13)},
        (12, 0): {"Title": "Chapter 2", "Parent": Reference(10), "Prev": Reference(11), "Next": Reference(4)},
        (13, 0): {"Title": "Section 1.1", "Parent": Reference(11), "Dest": [Reference(3), Name("Fit")]},
    }


def test_outline_tree_ids_follows_first_and_next_links_without_type_tags() -> None:
    assert outline_tree_ids(_untyped_outline_objects()) == {(10, 0), (11, 0), (12, 0), (13, 0)}


def test_untyped_outline_items_are_dropped_but_linked_fonts_survive() -> None:
    graph = reconcile(_untyped_outline_objects())

    assert set(graph.objects) == {(4, 0)}


def test_outline_trees_from_every_source_are_dropped() -> None:
    objects = {
        (1, 0): {"Type": Name("Catalog"), "Pages": Reference(2), "Outlines": Reference(3)},
        (2, 0): {"Type": Name("Pages"), "Kids": [], "Count": 0},
        (3, 0): {"Type": Name("Outlines"), "First": Reference(4)},
        (4, 0): {"Title": "First source"},
        (5, 0): {"Type": Name("Catalog"), "Pages": Reference(6), "Outlines": Reference(7)},
        (6, 0): {"Type": Name("Pages"), "Kids": [], "Count": 0},
        (7, 0): {"First": Reference(8)},
        (8, 0): {"Title": "Second source", "Next": Reference(8)},
    }

    graph = reconcile(objects)

    assert graph.objects == {}
