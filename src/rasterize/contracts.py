from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ColorMode(str, Enum):
    RGB = "rgb"
    GRAY = "gray"


class RenderEngineName(str, Enum):
    """
    PDF rendering backend identifiers.
    """

    PYPDFIUM2 = "pypdfium2"


# Declared extensions routed to the multi-page document path; everything else
# is decoded as a single still image.
PDF_EXTENSIONS = frozenset({".pdf"})


@dataclass(frozen=True, slots=True)
class RasterizeConfig:
    """
    Page rasterization configuration.

    `scale` multiplies the document's native page units (PDF points, 1/72 inch),
    so the default of 2.0 renders at 144 DPI; small glyphs stay legible to OCR.
    Still images are never rescaled.
    """

    engine: RenderEngineName = RenderEngineName.PYPDFIUM2
    scale: float = 2.0
    color_mode: ColorMode = ColorMode.RGB

    def __post_init__(self) -> None:
        if self.scale <= 0:
            raise ValueError("scale must be positive")


def normalize_extension(declared_extension: str) -> str:
    """
    Canonical ".ext" form: lower-cased, leading dot, surrounding whitespace stripped.
    """

    ext = declared_extension.strip().lower()
    if ext and not ext.startswith("."):
        ext = "." + ext
    return ext


def is_pdf_extension(declared_extension: str) -> bool:
    return normalize_extension(declared_extension) in PDF_EXTENSIONS
