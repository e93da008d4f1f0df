"""PDF byte-level codec: pypdf parsing and writing, PyMuPDF compression."""

from .convert import from_pypdf, to_pypdf
from .loader import load_document, load_documents
from .writer import encode_document, save_document, write_raw

__all__ = [
    "encode_document",
    "from_pypdf",
    "load_document",
    "load_documents",
    "save_document",
    "to_pypdf",
    "write_raw",
]
