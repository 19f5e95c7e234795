from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class OcrEngineName(str, Enum):
    """
    OCR backends supported by this module.

    Note: the OCR module is *perception only*; the backend must not perform
    post-correction, confidence filtering or re-ordering.
    """

    TESSERACT_CLI = "tesseract_cli"


@dataclass(frozen=True, slots=True)
class OcrConfig:
    """
    OCR module configuration.

    One fixed language model per run; no environment variable reads here.
    """

    engine: OcrEngineName = OcrEngineName.TESSERACT_CLI
    language: str = "eng"
    psm: int | None = None  # Tesseract page segmentation mode; if None, use default.
    timeout_s: float = 120.0

    def __post_init__(self) -> None:
        if self.timeout_s <= 0:
            raise ValueError("timeout_s must be positive")
        if self.language.strip() == "":
            raise ValueError("language must be a non-empty model name")
