from __future__ import annotations

from typing import Any


class PipelineError(Exception):
    """
    Base class for failures raised by a pipeline stage.

    Carries the stage name and, once known, the page number so callers can
    report the failure without unpacking the cause chain.
    """

    default_code = "PIPELINE_ERROR"
    stage = "pipeline"

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        page_num: int | None = None,
        detail: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.page_num = page_num
        self.detail = detail

    def __str__(self) -> str:
        if self.page_num is None:
            return f"[{self.stage}] {self.message}"
        return f"[{self.stage} page={self.page_num}] {self.message}"

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "stage": self.stage,
            "page_num": self.page_num,
            "detail": self.detail,
        }


class DecodeError(PipelineError):
    """Bytes are not a readable image/document of the declared type."""

    default_code = "DECODE_FAILED"
    stage = "rasterize"


class RecognitionError(PipelineError):
    """The OCR engine could not process a page."""

    default_code = "OCR_ENGINE_FAILED"
    stage = "recognize"


class ArtifactWriteError(PipelineError):
    """An annotated page could not be persisted."""

    default_code = "ARTIFACT_WRITE_FAILED"
    stage = "store"
