"""
Rasterize stage (document -> ordered in-memory page images).

This package is intentionally limited to format normalization:
- It renders PDFs page by page at a fixed scale.
- It decodes still images at native resolution.
- It performs NO OCR, annotation, or file output.
"""

from .contracts import ColorMode, RasterizeConfig, RenderEngineName, is_pdf_extension
from .module import rasterize

__all__ = [
    "ColorMode",
    "RasterizeConfig",
    "RenderEngineName",
    "is_pdf_extension",
    "rasterize",
]
