"""
OCR stage (perception only).

Contract:
- Input: one in-memory page raster
- Output: word text, absolute bounding boxes, confidence scores (engine scale)
- Constraints: no correction, no merging, no filtering, no re-ordering
- One engine instance per page, always terminated before returning
"""

from .contracts import OcrConfig, OcrEngineName
from .engines import OcrEngine, TesseractCliEngine
from .module import EngineFactory, recognize_page

__all__ = [
    "EngineFactory",
    "OcrConfig",
    "OcrEngine",
    "OcrEngineName",
    "TesseractCliEngine",
    "recognize_page",
]
