"""Merge pipeline: load, renumber, reconcile, rebuild, finalize."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Sequence

from pdfweld.codec.loader import load_documents
from pdfweld.config import DEFAULT_PDF_VERSION, MergeSettings
from pdfweld.merge.aggregate import aggregate_documents
from pdfweld.merge.reconcile import reconcile
from pdfweld.merge.rebuild import rebuild_tree
from pdfweld.merge.renumber import compact
from pdfweld.model.objects import Document, ObjectId, Reference

logger = logging.getLogger(__name__)


def finalize(
    objects: dict[ObjectId, Any],
    catalog_id: ObjectId,
    *,
    info: Reference | None = None,
    version: str = DEFAULT_PDF_VERSION,
) -> Document:
    """Install the catalog as document root and compact identifiers."""

    trailer: dict[str, Any] = {"Root": Reference(*catalog_id)}
    if info is not None and info.object_id in objects:
        trailer["Info"] = info
    document = Document(objects=objects, trailer=trailer, version=version)
    return compact(document)


def merge_documents(documents: Sequence[Document], *, version: str = DEFAULT_PDF_VERSION) -> Document:
    """Merge already-loaded documents; page order follows ``documents`` order."""

    aggregate = aggregate_documents(documents)
    graph = reconcile(aggregate.objects)
    objects = rebuild_tree(graph, aggregate.ordered_leaves())
    merged = finalize(objects, graph.catalog_id, info=aggregate.info, version=version)
    logger.info(
        "Merged %d documents: %d pages, %d objects",
        len(documents),
        len(aggregate.leaves),
        len(merged.objects),
    )
    return merged


def merge_pdfs(paths: Sequence[str | Path], settings: MergeSettings | None = None) -> Document:
    """Load ``paths`` and merge them into one document."""

    settings = settings or MergeSettings()
    documents = load_documents(paths, workers=settings.load_workers)
    return merge_documents(documents, version=settings.pdf_version)
