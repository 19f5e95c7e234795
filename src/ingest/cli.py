from __future__ import annotations

import argparse
import logging
from pathlib import Path

from contracts import PipelineError
from ocr import OcrConfig
from pipeline import PipelineConfig
from rasterize import RasterizeConfig

from .artifacts import build_error_response, build_response, write_response_json
from .logging_config import configure_logging
from .module import submit
from .storage import LocalArtifactStore

logger = logging.getLogger(__name__)


def build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="ocr-highlight",
        description=(
            "OCR an image or PDF: emit word text + bounding boxes + confidences as JSON "
            "and one highlighted PNG per page."
        ),
    )
    p.add_argument("--input", required=True, type=Path, help="Image or PDF file to process.")
    p.add_argument(
        "--out-dir",
        required=True,
        type=Path,
        help="Directory for highlighted page images.",
    )
    p.add_argument(
        "--out-json",
        required=True,
        type=Path,
        help="Output JSON response file path.",
    )
    p.add_argument(
        "--url-prefix",
        default="/uploads",
        help="Prefix used for highlighted image references in the JSON (default: /uploads).",
    )
    p.add_argument(
        "--language",
        default="eng",
        help="Tesseract language model (default: eng).",
    )
    p.add_argument(
        "--psm",
        type=int,
        default=None,
        help="Tesseract page segmentation mode (optional).",
    )
    p.add_argument(
        "--timeout-s",
        type=float,
        default=120.0,
        help="Tesseract timeout per page in seconds.",
    )
    p.add_argument(
        "--scale",
        type=float,
        default=2.0,
        help="PDF render scale relative to 72 DPI (default: 2.0).",
    )
    p.add_argument(
        "--keep-partial",
        action="store_true",
        help="Keep highlighted images of pages processed before a failure.",
    )
    p.add_argument("--log-level", default="INFO", help="Logging level (default: INFO).")
    return p


def main(argv: list[str] | None = None) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(argv)
    if not args.input.is_file():
        parser.error(f"--input is not a file: {args.input}")
    configure_logging(level=args.log_level)

    config = PipelineConfig(
        rasterize=RasterizeConfig(scale=args.scale),
        ocr=OcrConfig(language=args.language, psm=args.psm, timeout_s=args.timeout_s),
        keep_partial_artifacts=args.keep_partial,
    )
    store = LocalArtifactStore(args.out_dir, url_prefix=args.url_prefix)

    try:
        report = submit(args.input.read_bytes(), args.input.name, store=store, config=config)
    except PipelineError as e:
        write_response_json(payload=build_error_response(e), out_file=args.out_json)
        return 2

    write_response_json(payload=build_response(report), out_file=args.out_json)
    logger.info("words=%d pages=%d", report.total_words, len(report.artifacts))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
