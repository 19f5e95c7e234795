from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from PIL import Image

from .ocr import RecognizedWord


@dataclass(frozen=True, slots=True)
class RasterPage:
    """
    One rendered page (or decoded still image) held in memory.

    The image is owned by whichever stage currently holds the page. Stages
    that produce new pixels return a new RasterPage instead of drawing on the
    one they were handed.
    """

    page_num: int  # 1-indexed
    image: Image.Image

    def __post_init__(self) -> None:
        if self.page_num < 1:
            raise ValueError("page_num must be 1-indexed")

    @property
    def width_px(self) -> int:
        return int(self.image.width)

    @property
    def height_px(self) -> int:
        return int(self.image.height)


@dataclass(frozen=True, slots=True)
class PageArtifact:
    page_num: int
    location: str  # URL or path handed back by the artifact store

    def to_dict(self) -> dict[str, Any]:
        return {"page": self.page_num, "url": self.location}


@dataclass(frozen=True, slots=True)
class OcrReport:
    """
    Aggregate result for one processed document.

    `results` are in page order, then engine emission order within a page.
    `artifacts` hold one entry per processed page, in page order.
    """

    results: list[RecognizedWord] = field(default_factory=list)
    artifacts: list[PageArtifact] = field(default_factory=list)

    @property
    def total_words(self) -> int:
        return len(self.results)

    def to_dict(self) -> dict[str, Any]:
        return {
            "totalWords": self.total_words,
            "results": [w.to_dict() for w in self.results],
            "highlightedImages": [a.to_dict() for a in self.artifacts],
        }
