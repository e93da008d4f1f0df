"""CLI command that merges PDF files into one timestamped output document."""

from __future__ import annotations

import argparse
from dataclasses import replace
from datetime import datetime
import json
import logging
from pathlib import Path

from dotenv import load_dotenv

from pdfweld.codec.writer import save_document
from pdfweld.config import MergeSettings
from pdfweld.errors import MergeError
from pdfweld.merge.merger import merge_pdfs
from pdfweld.merge.pages import leaves_of


load_dotenv()

LOGGER = logging.getLogger(__name__)


def default_output_name(now: datetime | None = None) -> str:
    stamp = (now or datetime.now()).strftime("%Y-%m-%d_%H-%M-%S")
    return f"merged_output_{stamp}.pdf"


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Merge PDF files in the given order")
    parser.add_argument("inputs", nargs="+", help="Source PDF files; order decides page order")
    parser.add_argument("--output", help="Explicit output file path")
    parser.add_argument("--output-dir", help="Directory for the timestamped output file")
    parser.add_argument("--workers", type=int, help="Process count used to load sources")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(message)s")
    args = _parse_args(argv)

    try:
        settings = MergeSettings.from_env()
    except ValueError as exc:
        LOGGER.error("Invalid configuration: %s", exc)
        return 2
    if args.workers is not None:
        if args.workers < 1:
            LOGGER.error("--workers must be >= 1")
            return 2
        settings = replace(settings, load_workers=args.workers)

    if args.output:
        output_path = Path(args.output)
    else:
        output_dir = Path(args.output_dir) if args.output_dir else settings.output_dir
        output_path = output_dir / default_output_name()

    inputs = [str(Path(path)) for path in args.inputs]
    payload: dict[str, object] = {
        "inputs": inputs,
        "output": None,
        "page_count": 0,
        "object_count": 0,
        "errors": [],
    }

    try:
        merged = merge_pdfs(inputs, settings)
        save_document(merged, output_path, settings)
    except MergeError as exc:
        LOGGER.error("Merge failed: %s", exc)
        payload["errors"] = [{"type": type(exc).__name__, "error": str(exc)}]
        print(json.dumps(payload, ensure_ascii=True, indent=2))
        return 1

    payload["output"] = str(output_path)
    payload["page_count"] = len(leaves_of(merged))
    payload["object_count"] = len(merged.objects)
    LOGGER.info("Wrote %s (%d pages)", output_path, payload["page_count"])
    print(json.dumps(payload, ensure_ascii=True, indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
