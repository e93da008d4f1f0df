"""Identifier renumbering as an explicit fold step."""

from __future__ import annotations

import logging
from typing import Any

from pdfweld.model.objects import Document, ObjectId, Reference, Stream

logger = logging.getLogger(__name__)


class _Remapper:
    def __init__(self, new_numbers: dict[ObjectId, int], index: dict[int, ObjectId], source: str | None) -> None:
        self._new_numbers = new_numbers
        self._by_number = {number: new_numbers[object_id] for number, object_id in index.items()}
        self._source = source

    def reference(self, ref: Reference) -> Reference | None:
        new_number = self._new_numbers.get(ref.object_id)
        if new_number is None:
            new_number = self._by_number.get(ref.number)
        if new_number is None:
            # A reference to a missing object reads as null.
            logger.debug("Dangling reference %d %d R in %s", ref.number, ref.generation, self._source)
            return None
        return Reference(new_number, 0)

    def __call__(self, value: Any) -> Any:
        if isinstance(value, Reference):
            return self.reference(value)
        if isinstance(value, list):
            return [self(item) for item in value]
        if isinstance(value, dict):
            return {key: self(item) for key, item in value.items()}
        if isinstance(value, Stream):
            return Stream(dictionary=self(value.dictionary), data=value.data)
        return value


def renumber(document: Document, next_id: int) -> tuple[Document, int]:
    """Move every identifier of ``document`` into ``next_id, next_id + 1, ...``.

    Objects keep their relative order. References inside objects and the
    trailer are rewritten to the new identifiers. Returns the renumbered copy
    and the next free identifier; the input document is left untouched.
    """

    if next_id < 1:
        raise ValueError("next_id must be >= 1")

    new_numbers: dict[ObjectId, int] = {}
    current = next_id
    for object_id in sorted(document.objects):
        new_numbers[object_id] = current
        current += 1

    remap = _Remapper(new_numbers, document.number_index(), document.source)
    objects = {(new_numbers[object_id], 0): remap(value) for object_id, value in document.iter_sorted()}
    trailer = remap(document.trailer)
    renumbered = Document(objects=objects, trailer=trailer, version=document.version, source=document.source)
    return renumbered, current


def compact(document: Document) -> Document:
    """Renumber densely from 1 so that ``max_id == len(objects)``."""

    compacted, _ = renumber(document, 1)
    return compacted
