"""
PDF rendering engines for the rasterize stage.
"""

from .base import PdfRenderEngine
from .pypdfium2_engine import Pypdfium2Engine

__all__ = ["PdfRenderEngine", "Pypdfium2Engine"]
