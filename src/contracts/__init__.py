"""
Shared contracts passed between the rasterize, OCR, annotate and pipeline
stages.

Stage code should consume/produce these objects (not ad-hoc dicts).
"""

from .errors import ArtifactWriteError, DecodeError, PipelineError, RecognitionError
from .ocr import BBox, RecognizedWord
from .pages import OcrReport, PageArtifact, RasterPage

__all__ = [
    "ArtifactWriteError",
    "BBox",
    "DecodeError",
    "OcrReport",
    "PageArtifact",
    "PipelineError",
    "RasterPage",
    "RecognitionError",
    "RecognizedWord",
]
