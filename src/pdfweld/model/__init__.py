"""PDF object model."""

from .objects import (
    Document,
    Name,
    ObjectId,
    PdfString,
    Reference,
    Stream,
    dictionary_of,
    type_name,
)

__all__ = [
    "Document",
    "Name",
    "ObjectId",
    "PdfString",
    "Reference",
    "Stream",
    "dictionary_of",
    "type_name",
]
