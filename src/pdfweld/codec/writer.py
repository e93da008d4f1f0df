"""Serialize a ``Document`` through pypdf and compress it with PyMuPDF."""

from __future__ import annotations

from io import BytesIO
import logging
from pathlib import Path

import pymupdf
from pypdf import PdfWriter
from pypdf.errors import PyPdfError
from pypdf.generic import IndirectObject

from pdfweld.codec.convert import to_pypdf
from pdfweld.config import MergeSettings
from pdfweld.errors import EncodeError
from pdfweld.model.objects import Document, Reference

logger = logging.getLogger(__name__)


class _ObjectTableWriter(PdfWriter):
    """A ``PdfWriter`` whose object table is exactly the document's.

    ``PdfWriter`` numbers objects by their position in its table and writes
    every object with generation 0, so the document must use generation 0
    throughout. Identifiers missing from the table become free xref entries.
    """

    def __init__(self, document: Document) -> None:
        super().__init__()
        generations = {generation for _, generation in document.objects}
        if generations - {0}:
            raise EncodeError("Only generation 0 objects can be written; compact the document first")

        root = document.trailer.get("Root")
        if not isinstance(root, Reference) or root.object_id not in document.objects:
            raise EncodeError("Trailer Root does not resolve to an object")

        self._objects = [None] * document.max_id
        for (number, _), value in document.iter_sorted():
            converted = to_pypdf(value, self)
            converted.indirect_reference = IndirectObject(number, 0, self)
            self._objects[number - 1] = converted

        self._root_object = self._objects[root.number - 1]
        info = document.trailer.get("Info")
        if isinstance(info, Reference) and info.object_id in document.objects:
            self._info_obj = IndirectObject(info.number, 0, self)
        else:
            self._info_obj = None
        self.pdf_header = f"%PDF-{document.version}"


def write_raw(document: Document) -> bytes:
    """Write an uncompressed classic-xref PDF for the given object table."""

    buffer = BytesIO()
    try:
        _ObjectTableWriter(document).write(buffer)
    except (TypeError, PyPdfError) as exc:
        raise EncodeError(f"Cannot serialize object graph: {exc}") from exc
    return buffer.getvalue()


def encode_document(document: Document, settings: MergeSettings | None = None) -> bytes:
    """Return final PDF bytes, compressed according to ``settings``."""

    settings = settings or MergeSettings()
    raw = write_raw(document)
    try:
        with pymupdf.open(stream=raw, filetype="pdf") as doc:
            payload = doc.tobytes(garbage=settings.garbage_level, deflate=settings.deflate)
    except (RuntimeError, ValueError) as exc:
        raise EncodeError(f"PyMuPDF failed to encode merged document: {exc}") from exc

    logger.debug("Encoded %d objects into %d bytes", len(document.objects), len(payload))
    return payload


def save_document(document: Document, path: str | Path, settings: MergeSettings | None = None) -> Path:
    target = Path(path)
    payload = encode_document(document, settings)
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(payload)
    except OSError as exc:
        raise EncodeError(f"Failed to write {target}: {exc}") from exc
    return target
