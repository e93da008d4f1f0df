"""Page-tree traversal and leaf extraction."""

from __future__ import annotations

import copy
import logging
from typing import Any

from pdfweld.errors import StructuralError
from pdfweld.model.objects import Document, ObjectId, Reference, dictionary_of, type_name

logger = logging.getLogger(__name__)


def _pages_root(document: Document, index: dict[int, ObjectId]) -> Reference:
    root_ref = document.trailer.get("Root")
    if not isinstance(root_ref, Reference):
        raise StructuralError("Trailer has no Root reference", document.source)

    resolved = document.resolve_number(root_ref, index)
    catalog = dictionary_of(resolved[1]) if resolved else None
    if catalog is None:
        raise StructuralError("Root does not resolve to a catalog dictionary", document.source)

    pages_ref = catalog.get("Pages")
    if not isinstance(pages_ref, Reference) or document.resolve_number(pages_ref, index) is None:
        raise StructuralError("Catalog has no resolvable Pages entry", document.source)
    return pages_ref


def _kids_of(node: Any) -> list[Any] | None:
    if not isinstance(node, dict):
        return None
    kind = type_name(node)
    if kind == "Page":
        return None
    kids = node.get("Kids")
    if isinstance(kids, list):
        return kids
    # An intermediate node without Kids contributes no pages.
    return [] if kind == "Pages" else None


def leaves_of(document: Document) -> list[ObjectId]:
    """Return page identifiers in display order."""

    index = document.number_index()
    leaves: list[ObjectId] = []
    visited: set[ObjectId] = set()
    stack: list[Reference] = [_pages_root(document, index)]

    while stack:
        ref = stack.pop()
        resolved = document.resolve_number(ref, index)
        if resolved is None:
            logger.warning("Skipping dangling page-tree entry %d %d R in %s", ref.number, ref.generation, document.source)
            continue
        object_id, node = resolved
        if object_id in visited:
            logger.warning("Page tree cycle at object %d in %s", object_id[0], document.source)
            continue
        visited.add(object_id)

        kids = _kids_of(node)
        if kids is None:
            leaves.append(object_id)
            continue
        stack.extend(kid for kid in reversed(kids) if isinstance(kid, Reference))

    return leaves


def extract_leaves(document: Document) -> dict[ObjectId, Any]:
    """Map each page identifier, in display order, to a copy of the page object."""

    return {object_id: copy.deepcopy(document.objects[object_id]) for object_id in leaves_of(document)}
