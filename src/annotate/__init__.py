"""
Annotate stage: draw recognized-word boxes onto a copy of a page raster.
"""

from .contracts import IMAGE_STYLE, PAGE_STYLE, AnnotationStyle
from .module import annotate

__all__ = ["AnnotationStyle", "IMAGE_STYLE", "PAGE_STYLE", "annotate"]
