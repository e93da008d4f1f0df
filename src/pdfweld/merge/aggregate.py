"""Fold renumbered documents into one object table and one leaf sequence."""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import Any, Sequence

from pdfweld.merge.pages import extract_leaves
from pdfweld.merge.renumber import renumber
from pdfweld.model.objects import Document, ObjectId, Reference

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class LeafEntry:
    """One page with its position in the merged output."""

    source_index: int
    position: int
    object_id: ObjectId
    value: Any


@dataclass(slots=True)
class Aggregate:
    """Running state of the ordered fold over source documents."""

    objects: dict[ObjectId, Any] = field(default_factory=dict)
    leaves: list[LeafEntry] = field(default_factory=list)
    info: Reference | None = None
    next_id: int = 1
    sources: list[str | None] = field(default_factory=list)

    def ordered_leaves(self) -> list[LeafEntry]:
        """Leaves sorted by source order, then by page order within the source."""

        return sorted(self.leaves, key=lambda entry: (entry.source_index, entry.position))


def fold_document(aggregate: Aggregate, document: Document) -> Aggregate:
    """Renumber one document past ``aggregate.next_id`` and merge it in."""

    source_index = len(aggregate.sources)
    renumbered, next_id = renumber(document, aggregate.next_id)
    leaves = extract_leaves(renumbered)

    # renumber starts at next_id, above every identifier already folded in.
    objects = dict(aggregate.objects)
    objects.update(renumbered.objects)

    new_leaves = [
        LeafEntry(source_index=source_index, position=position, object_id=object_id, value=value)
        for position, (object_id, value) in enumerate(leaves.items())
    ]

    info = aggregate.info
    if info is None and isinstance(renumbered.trailer.get("Info"), Reference):
        info = renumbered.trailer["Info"]

    logger.debug(
        "Folded %s: %d objects, %d pages, next id %d",
        document.source,
        len(renumbered.objects),
        len(new_leaves),
        next_id,
    )
    return Aggregate(
        objects=objects,
        leaves=aggregate.leaves + new_leaves,
        info=info,
        next_id=next_id,
        sources=aggregate.sources + [document.source],
    )


def aggregate_documents(documents: Sequence[Document]) -> Aggregate:
    """Fold documents strictly in input order, starting at identifier 1."""

    aggregate = Aggregate()
    for document in documents:
        aggregate = fold_document(aggregate, document)
    return aggregate
