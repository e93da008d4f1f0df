"""Object-graph merge core."""

from .aggregate import Aggregate, LeafEntry, aggregate_documents, fold_document
from .merger import finalize, merge_documents, merge_pdfs
from .pages import extract_leaves, leaves_of
from .reconcile import ReconciledGraph, Role, classify, merge_dictionaries, reconcile
from .rebuild import attach_leaves, rebuild_tree, rewrite_catalog, rewrite_pages_node
from .renumber import compact, renumber

__all__ = [
    "Aggregate",
    "LeafEntry",
    "ReconciledGraph",
    "Role",
    "aggregate_documents",
    "attach_leaves",
    "classify",
    "compact",
    "extract_leaves",
    "finalize",
    "fold_document",
    "leaves_of",
    "merge_dictionaries",
    "merge_documents",
    "merge_pdfs",
    "rebuild_tree",
    "reconcile",
    "renumber",
    "rewrite_catalog",
    "rewrite_pages_node",
]
