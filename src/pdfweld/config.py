"""Runtime configuration for merging and encoding."""

from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path
import re
from typing import Mapping


DEFAULT_LOAD_WORKERS = 1
DEFAULT_PDF_VERSION = "1.5"
DEFAULT_GARBAGE_LEVEL = 0
DEFAULT_OUTPUT_DIR = "."

_VERSION_RE = re.compile(r"\d\.\d")
_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def _parse_bounded_int(*, name: str, raw_value: str, minimum: int, maximum: int | None = None) -> int:
    try:
        value = int(raw_value)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer") from exc
    if value < minimum:
        raise ValueError(f"{name} must be >= {minimum}")
    if maximum is not None and value > maximum:
        raise ValueError(f"{name} must be <= {maximum}")
    return value


def _parse_bool(*, name: str, raw_value: str) -> bool:
    lowered = raw_value.lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ValueError(f"{name} must be a boolean flag")


@dataclass(frozen=True, slots=True)
class MergeSettings:
    """Validated settings for loading, merging and writing documents."""

    load_workers: int = DEFAULT_LOAD_WORKERS
    pdf_version: str = DEFAULT_PDF_VERSION
    garbage_level: int = DEFAULT_GARBAGE_LEVEL
    deflate: bool = True
    output_dir: Path = Path(DEFAULT_OUTPUT_DIR)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "MergeSettings":
        source: Mapping[str, str] = os.environ if environ is None else environ

        workers_raw = source.get("PDFWELD_LOAD_WORKERS", str(DEFAULT_LOAD_WORKERS)).strip()
        version_raw = source.get("PDFWELD_PDF_VERSION", DEFAULT_PDF_VERSION).strip()
        garbage_raw = source.get("PDFWELD_GARBAGE_LEVEL", str(DEFAULT_GARBAGE_LEVEL)).strip()
        deflate_raw = source.get("PDFWELD_DEFLATE", "true").strip()
        output_dir_raw = source.get("PDFWELD_OUTPUT_DIR", DEFAULT_OUTPUT_DIR).strip()

        if not output_dir_raw:
            raise ValueError("PDFWELD_OUTPUT_DIR cannot be empty")
        if not _VERSION_RE.fullmatch(version_raw):
            raise ValueError("PDFWELD_PDF_VERSION must look like 1.7")

        return cls(
            load_workers=_parse_bounded_int(name="PDFWELD_LOAD_WORKERS", raw_value=workers_raw, minimum=1),
            pdf_version=version_raw,
            garbage_level=_parse_bounded_int(
                name="PDFWELD_GARBAGE_LEVEL",
                raw_value=garbage_raw,
                minimum=0,
                maximum=4,
            ),
            deflate=_parse_bool(name="PDFWELD_DEFLATE", raw_value=deflate_raw),
            output_dir=Path(output_dir_raw),
        )
