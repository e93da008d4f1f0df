"""Translate between ``pypdf.generic`` objects and the in-memory model."""

from __future__ import annotations

from typing import Any

from pypdf.generic import (
    ArrayObject,
    BooleanObject,
    ByteStringObject,
    DecodedStreamObject,
    DictionaryObject,
    FloatObject,
    IndirectObject,
    NameObject,
    NullObject,
    NumberObject,
    StreamObject,
    TextStringObject,
)

from pdfweld.model.objects import Name, PdfString, Reference, Stream


def _name(value: str) -> str:
    return value[1:] if value.startswith("/") else value


def from_pypdf(value: Any) -> Any:
    """Convert a parsed pypdf object; indirect references are not followed."""

    if value is None or isinstance(value, NullObject):
        return None
    if isinstance(value, IndirectObject):
        return Reference(value.idnum, value.generation)
    if isinstance(value, BooleanObject):
        return bool(value.value)
    if isinstance(value, NameObject):
        return Name(_name(value))
    if isinstance(value, TextStringObject):
        return PdfString(value.original_bytes)
    if isinstance(value, ByteStringObject):
        return PdfString(bytes(value), hexadecimal=True)
    if isinstance(value, FloatObject):
        return float(value)
    if isinstance(value, NumberObject):
        return int(value)
    if isinstance(value, StreamObject):
        # _data is the payload exactly as stored, filters still applied.
        dictionary = {_name(key): from_pypdf(item) for key, item in value.items()}
        return Stream(dictionary=dictionary, data=value._data or b"")
    if isinstance(value, DictionaryObject):
        return {_name(key): from_pypdf(item) for key, item in value.items()}
    if isinstance(value, ArrayObject):
        return [from_pypdf(item) for item in value]
    raise TypeError(f"Unsupported pypdf object {type(value).__name__}")


def _dictionary(value: dict[str, Any], pdf: Any, target: DictionaryObject) -> DictionaryObject:
    for key, item in value.items():
        target[NameObject("/" + key)] = to_pypdf(item, pdf)
    return target


def to_pypdf(value: Any, pdf: Any) -> Any:
    """Build the pypdf object for a model value; references point into ``pdf``."""

    if value is None:
        return NullObject()
    if isinstance(value, bool):
        return BooleanObject(value)
    if isinstance(value, int):
        return NumberObject(value)
    if isinstance(value, float):
        return FloatObject(value)
    if isinstance(value, str):
        return NameObject("/" + value)
    if isinstance(value, PdfString):
        if value.hexadecimal:
            return ByteStringObject(value.value)
        return TextStringObject(value.value)
    if isinstance(value, Reference):
        return IndirectObject(value.number, value.generation, pdf)
    if isinstance(value, list):
        return ArrayObject(to_pypdf(item, pdf) for item in value)
    if isinstance(value, dict):
        return _dictionary(value, pdf, DictionaryObject())
    if isinstance(value, Stream):
        stream = _dictionary(value.dictionary, pdf, DecodedStreamObject())
        # Length is rewritten from the payload when the stream is written.
        stream.set_data(value.data)
        return stream
    raise TypeError(f"Cannot convert {type(value).__name__} to a PDF object")
