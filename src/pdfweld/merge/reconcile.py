"""Select the single catalog and pages root of the merged graph.

Precedence is earliest-source-wins for both anchors:

* the first ``/Catalog`` seen is kept and later ones are discarded;
* every ``/Pages`` node is folded into one dictionary where, on key conflict,
  the value from the earliest source survives and keys that only later
  sources define are still added.

Pages and outline nodes are removed here; pages are re-attached by the tree
rebuild and outlines are not carried into the merged document. Outline items
are often written without a `/Type` entry, so they are found by walking each
outline tree through its `First` and `Next` links rather than by tag.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import logging
from typing import Any, Mapping

from pdfweld.errors import StructuralError
from pdfweld.model.objects import ObjectId, Reference, type_name

logger = logging.getLogger(__name__)


class Role(Enum):
    CATALOG = "catalog"
    PAGES = "pages"
    PAGE = "page"
    OUTLINE = "outline"
    OTHER = "other"


_ROLE_BY_TYPE = {
    "Catalog": Role.CATALOG,
    "Pages": Role.PAGES,
    "Page": Role.PAGE,
    "Outlines": Role.OUTLINE,
    "Outline": Role.OUTLINE,
}


def classify(value: Any) -> Role:
    return _ROLE_BY_TYPE.get(type_name(value) or "", Role.OTHER)


def merge_dictionaries(dominant: Mapping[str, Any], recessive: Mapping[str, Any]) -> dict[str, Any]:
    """Return a new dict with every key of both; ``dominant`` wins on conflict."""

    merged = dict(recessive)
    merged.update(dominant)
    return merged


def _outline_node(objects: Mapping[ObjectId, Any], ref: Any) -> dict[str, Any] | None:
    if not isinstance(ref, Reference):
        return None
    node = objects.get(ref.object_id)
    if not isinstance(node, dict) or type_name(node) not in (None, "Outlines", "Outline"):
        return None
    return node


def outline_tree_ids(objects: Mapping[ObjectId, Any]) -> set[ObjectId]:
    """Return the identifiers of every outline root and item, typed or not.

    Roots are the ``/Outlines`` objects plus whatever a catalog's ``Outlines``
    entry points at. Items are reached from a root through ``First`` (children)
    and ``Next`` (siblings). Only untyped or outline-typed dictionaries are
    followed, so a stray link never pulls in a font or a page.
    """

    stack: list[Reference] = []
    for object_id, value in objects.items():
        kind = type_name(value)
        if kind == "Outlines":
            stack.append(Reference(*object_id))
        elif kind == "Catalog" and isinstance(value, dict) and isinstance(value.get("Outlines"), Reference):
            stack.append(value["Outlines"])

    found: set[ObjectId] = set()
    while stack:
        ref = stack.pop()
        if ref.object_id in found:
            continue
        node = _outline_node(objects, ref)
        if node is None:
            continue
        found.add(ref.object_id)
        for key in ("First", "Next"):
            link = node.get(key)
            if isinstance(link, Reference):
                stack.append(link)
    return found


@dataclass(slots=True)
class ReconciledGraph:
    objects: dict[ObjectId, Any]
    catalog_id: ObjectId
    catalog: dict[str, Any]
    pages_id: ObjectId
    pages: dict[str, Any]


def reconcile(objects: Mapping[ObjectId, Any]) -> ReconciledGraph:
    """Classify every object in ascending identifier order and pick the anchors."""

    kept: dict[ObjectId, Any] = {}
    catalog: tuple[ObjectId, dict[str, Any]] | None = None
    pages: tuple[ObjectId, dict[str, Any]] | None = None
    dropped = 0
    outline_ids = outline_tree_ids(objects)

    for object_id in sorted(objects):
        value = objects[object_id]
        role = Role.OUTLINE if object_id in outline_ids else classify(value)

        if role is Role.CATALOG:
            if catalog is None and isinstance(value, dict):
                catalog = (object_id, dict(value))
            else:
                dropped += 1
        elif role is Role.PAGES:
            if not isinstance(value, dict):
                logger.warning("Dropping non-dictionary Pages object %d", object_id[0])
                dropped += 1
                continue
            folded = dict(value) if pages is None else merge_dictionaries(pages[1], value)
            pages = (object_id, folded)
        elif role in (Role.PAGE, Role.OUTLINE):
            dropped += 1
        else:
            kept[object_id] = value

    if catalog is None:
        raise StructuralError("No Catalog object found in merged documents")
    if pages is None:
        raise StructuralError("No Pages root found in merged documents")

    logger.debug("Reconciled graph: kept %d objects, dropped %d", len(kept), dropped)
    return ReconciledGraph(
        objects=kept,
        catalog_id=catalog[0],
        catalog=catalog[1],
        pages_id=pages[0],
        pages=pages[1],
    )
