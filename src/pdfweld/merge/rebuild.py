"""Rebuild the single page tree of the merged document."""

from __future__ import annotations

import logging
from typing import Any, Sequence

from pdfweld.errors import StructuralError
from pdfweld.merge.aggregate import LeafEntry
from pdfweld.merge.reconcile import ReconciledGraph
from pdfweld.model.objects import ObjectId, Reference

logger = logging.getLogger(__name__)


def attach_leaves(objects: dict[ObjectId, Any], leaves: Sequence[LeafEntry], pages_id: ObjectId) -> list[ObjectId]:
    """Insert every page into ``objects`` with ``Parent`` pointing at ``pages_id``."""

    parent = Reference(*pages_id)
    attached: list[ObjectId] = []
    for entry in leaves:
        if not isinstance(entry.value, dict):
            raise StructuralError(
                f"Page object {entry.object_id[0]} is a {type(entry.value).__name__}, not a dictionary"
            )
        page = dict(entry.value)
        page["Parent"] = parent
        objects[entry.object_id] = page
        attached.append(entry.object_id)
    return attached


def rewrite_pages_node(pages: dict[str, Any], leaf_ids: Sequence[ObjectId]) -> dict[str, Any]:
    rewritten = dict(pages)
    rewritten["Count"] = len(leaf_ids)
    rewritten["Kids"] = [Reference(*object_id) for object_id in leaf_ids]
    # The merged pages node is the tree root.
    rewritten.pop("Parent", None)
    return rewritten


def rewrite_catalog(catalog: dict[str, Any], pages_id: ObjectId) -> dict[str, Any]:
    rewritten = dict(catalog)
    rewritten["Pages"] = Reference(*pages_id)
    rewritten.pop("Outlines", None)
    return rewritten


def rebuild_tree(graph: ReconciledGraph, leaves: Sequence[LeafEntry]) -> dict[ObjectId, Any]:
    """Return the output object table with pages, pages root and catalog in place."""

    objects = dict(graph.objects)
    leaf_ids = attach_leaves(objects, leaves, graph.pages_id)
    objects[graph.pages_id] = rewrite_pages_node(graph.pages, leaf_ids)
    objects[graph.catalog_id] = rewrite_catalog(graph.catalog, graph.pages_id)
    logger.debug("Rebuilt page tree with %d pages under object %d", len(leaf_ids), graph.pages_id[0])
    return objects
