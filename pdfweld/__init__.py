"""Checkout shim so `python -m pdfweld.cli.merge_pdfs` works without installing.

The real modules live under ``src/pdfweld``; this package only extends its
search path to point there.
"""

from __future__ import annotations

from pathlib import Path

__version__ = "0.1.0"

_SRC_PACKAGE = Path(__file__).resolve().parent.parent / "src" / "pdfweld"

if _SRC_PACKAGE.is_dir() and str(_SRC_PACKAGE) not in __path__:
    __path__.append(str(_SRC_PACKAGE))
