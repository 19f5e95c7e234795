from __future__ import annotations

import logging
from pathlib import Path

from contracts import DecodeError, OcrReport
from ocr import EngineFactory
from pipeline import ArtifactStore, PipelineConfig, process_document

logger = logging.getLogger(__name__)


def declared_extension(original_filename: str) -> str:
    """
    Document type hint from the uploaded filename ("" when there is none).
    """

    return Path(original_filename).suffix.lower()


def submit(
    file_bytes: bytes,
    original_filename: str,
    *,
    store: ArtifactStore,
    config: PipelineConfig | None = None,
    engine_factory: EngineFactory | None = None,
) -> OcrReport:
    """
    Route one upload into the page pipeline by its file extension.
    """

    ext = declared_extension(original_filename)
    if not file_bytes:
        raise DecodeError("Uploaded file is empty", code="UPLOAD_EMPTY", detail={"filename": original_filename})

    logger.info("processing upload %r (%d bytes, type=%s)", original_filename, len(file_bytes), ext or "<none>")
    return process_document(
        file_bytes,
        ext,
        config=config,
        store=store,
        engine_factory=engine_factory,
    )
