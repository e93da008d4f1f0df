"""Decode PDF files into the in-memory object model using pypdf."""

from __future__ import annotations

from concurrent.futures import ProcessPoolExecutor
import logging
from pathlib import Path
from typing import Sequence

from pypdf import PdfReader
from pypdf.errors import PyPdfError
from pypdf.generic import IndirectObject

from pdfweld.codec.convert import from_pypdf
from pdfweld.errors import LoadError
from pdfweld.model.objects import Document, ObjectId, type_name

logger = logging.getLogger(__name__)

_PDF_MAGIC = b"%PDF-"
_CONTAINER_TYPES = {"XRef", "ObjStm"}
_TRAILER_KEYS = ("/Root", "/Info")


def _version_of(reader: PdfReader) -> str:
    # pdf_header is the first eight bytes, e.g. "%PDF-1.7"
    version = reader.pdf_header[len("%PDF-") :].strip()
    return version or "1.5"


def _object_ids(reader: PdfReader) -> list[ObjectId]:
    generations: dict[int, int] = {number: 0 for number in reader.xref_objStm}
    for generation, entries in reader.xref.items():
        for number in entries:
            if number not in reader.xref_objStm:
                generations[number] = max(generation, generations.get(number, generation))
    return sorted(generations.items())


def _read_objects(reader: PdfReader) -> dict[ObjectId, object]:
    objects: dict[ObjectId, object] = {}
    for number, generation in _object_ids(reader):
        if number == 0:
            continue
        value = from_pypdf(reader.get_object(IndirectObject(number, generation, reader)))
        if value is None or type_name(value) in _CONTAINER_TYPES:
            continue
        objects[(number, generation)] = value
    return objects


def load_document(path: str | Path) -> Document:
    """Load one PDF into a ``Document``; raises ``LoadError`` naming the path."""

    source = Path(path)
    try:
        with source.open("rb") as handle:
            header = handle.read(1024)
    except OSError as exc:
        raise LoadError(source, f"Failed to read source file: {exc}") from exc
    if _PDF_MAGIC not in header:
        raise LoadError(source, "File is not a PDF document")

    try:
        with PdfReader(source) as reader:
            if reader.is_encrypted:
                raise LoadError(source, "Encrypted PDF documents are not supported")
            objects = _read_objects(reader)
            trailer = {key[1:]: from_pypdf(reader.trailer.raw_get(key)) for key in _TRAILER_KEYS if key in reader.trailer}
            version = _version_of(reader)
    except LoadError:
        raise
    except (PyPdfError, ValueError, TypeError) as exc:
        raise LoadError(source, f"PDF decoding failed: {exc}") from exc

    logger.debug("Loaded %s: %d objects", source, len(objects))
    return Document(objects=objects, trailer=trailer, version=version, source=str(source))


def load_documents(paths: Sequence[str | Path], *, workers: int = 1) -> list[Document]:
    """Load every path, keeping input order.

    With ``workers > 1`` the sources are decoded in a process pool, since
    parsing is CPU-bound pure Python. The first failure in input order is
    raised and no documents are returned.
    """

    if workers <= 1 or len(paths) <= 1:
        return [load_document(path) for path in paths]

    with ProcessPoolExecutor(max_workers=min(workers, len(paths))) as executor:
        documents = list(executor.map(load_document, paths))
    logger.info("Loaded %d documents with %d workers", len(documents), workers)
    return documents
