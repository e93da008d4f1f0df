from __future__ import annotations

import pytest

from pdfweld.errors import StructuralError
from pdfweld.merge.pages import extract_leaves, leaves_of
from pdfweld.model.objects import Document, Name, Reference


def _nested_document() -> Document:
    objects = {
        (1, 0): {"Type": Name("Catalog"), "Pages": Reference(2)},
        (2, 0): {"Type": Name("Pages"), "Kids": [Reference(3), Reference(6)], "Count": 3},
        (3, 0): {"Type": Name("Pages"), "Parent": Reference(2), "Kids": [Reference(5), Reference(4)], "Count": 2},
        (4, 0): {"Type": Name("Page"), "Parent": Reference(3), "Label": 2},
        (5, 0): {"Type": Name("Page"), "Parent": Reference(3), "Label": 1},
        (6, 0): {"Type": Name("Page"), "Parent": Reference(2), "Label": 3},
    }
    return Document(objects=objects, trailer={"Root": Reference(1)}, source="nested.pdf")


def test_leaves_follow_display_order_through_nested_nodes() -> None:
    assert leaves_of(_nested_document()) == [(5, 0), (4, 0), (6, 0)]


def test_extract_leaves_copies_page_objects_in_order() -> None:
    document = _nested_document()

    leaves = extract_leaves(document)
    leaves[(5, 0)]["Label"] = 99

    assert list(leaves) == [(5, 0), (4, 0), (6, 0)]
    assert [page["Label"] for page in leaves.values()] == [99, 2, 3]
    assert document.objects[(5, 0)]["Label"] == 1


def test_cycles_and_dangling_kids_are_skipped() -> None:
    document = _nested_document()
    document.objects[(3, 0)]["Kids"].extend([Reference(2), Reference(42)])

    assert leaves_of(document) == [(5, 0), (4, 0), (6, 0)]


def test_missing_root_raises_structural_error() -> None:
    document = _nested_document()
    document.trailer.clear()

    with pytest.raises(StructuralError, match="Root"):
        leaves_of(document)


def test_catalog_without_pages_raises_structural_error() -> None:
    document = _nested_document()
    del document.objects[(1, 0)]["Pages"]

    with pytest.raises(StructuralError, match="Pages") as excinfo:
        leaves_of(document)

    assert excinfo.value.source == "nested.pdf"


def test_empty_pages_root_has_no_leaves() -> None:
    document = Document(
        objects={
            (1, 0): {"Type": Name("Catalog"), "Pages": Reference(2)},
            (2, 0): {"Type": Name("Pages"), "Count": 0},
        },
        trailer={"Root": Reference(1)},
    )

    assert leaves_of(document) == []
