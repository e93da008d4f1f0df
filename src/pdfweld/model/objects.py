"""In-memory PDF object graph shared by the loader, merge core and encoder."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterator

ObjectId = tuple[int, int]


class Name(str):
    """PDF name object, stored without its leading slash."""

    __slots__ = ()

    def __repr__(self) -> str:
        return f"/{str.__str__(self)}"


@dataclass(frozen=True, slots=True)
class PdfString:
    """PDF string object holding raw bytes."""

    value: bytes
    hexadecimal: bool = False


@dataclass(frozen=True, slots=True)
class Reference:
    """Indirect reference to another object in the same table."""

    number: int
    generation: int = 0

    @property
    def object_id(self) -> ObjectId:
        return (self.number, self.generation)


@dataclass(slots=True)
class Stream:
    """Stream object: a dictionary plus its raw, still-filtered payload."""

    dictionary: dict[str, Any]
    data: bytes = b""


@dataclass(slots=True)
class Document:
    """A complete object table with its trailer."""

    objects: dict[ObjectId, Any] = field(default_factory=dict)
    trailer: dict[str, Any] = field(default_factory=dict)
    version: str = "1.5"
    source: str | None = None

    @property
    def max_id(self) -> int:
        return max((number for number, _ in self.objects), default=0)

    def get(self, ref: Reference | ObjectId | None) -> Any:
        """Resolve a reference or identifier, returning None when absent."""

        if ref is None:
            return None
        object_id = ref.object_id if isinstance(ref, Reference) else ref
        return self.objects.get(object_id)

    def number_index(self) -> dict[int, ObjectId]:
        """Map each object number to its lowest-generation identifier."""

        index: dict[int, ObjectId] = {}
        for object_id in sorted(self.objects):
            index.setdefault(object_id[0], object_id)
        return index

    def resolve_number(
        self, ref: Reference, index: dict[int, ObjectId] | None = None
    ) -> tuple[ObjectId, Any] | None:
        """Resolve by object number only, the way PDF readers address objects.

        Pass a prebuilt ``number_index()`` when resolving many references
        against an unchanged table.
        """

        exact = self.objects.get(ref.object_id)
        if exact is not None:
            return ref.object_id, exact
        if index is None:
            index = self.number_index()
        object_id = index.get(ref.number)
        if object_id is None:
            return None
        return object_id, self.objects[object_id]

    def iter_sorted(self) -> Iterator[tuple[ObjectId, Any]]:
        for object_id in sorted(self.objects):
            yield object_id, self.objects[object_id]


def dictionary_of(value: Any) -> dict[str, Any] | None:
    """Return the dictionary carried by a dict or stream object."""

    if isinstance(value, dict):
        return value
    if isinstance(value, Stream):
        return value.dictionary
    return None


def type_name(value: Any) -> str | None:
    """Return the ``/Type`` tag of a dictionary or stream, if any."""

    dictionary = dictionary_of(value)
    if dictionary is None:
        return None
    tag = dictionary.get("Type")
    if isinstance(tag, str):
        return str(tag)
    return None
