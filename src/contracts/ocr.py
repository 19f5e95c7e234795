from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class BBox:
    """
    Absolute pixel coordinates in the space of the page image the box was
    recognized against:
    - (x0, y0) is top-left
    - (x1, y1) is bottom-right

    Zero-size boxes are legal (degenerate tokens); inverted boxes are not.
    """

    x0: int
    y0: int
    x1: int
    y1: int

    def __post_init__(self) -> None:
        if self.x1 < self.x0 or self.y1 < self.y0:
            raise ValueError(
                f"Inverted bounding box: ({self.x0}, {self.y0}, {self.x1}, {self.y1})"
            )

    def width(self) -> int:
        return int(self.x1 - self.x0)

    def height(self) -> int:
        return int(self.y1 - self.y0)

    def is_degenerate(self) -> bool:
        return self.width() == 0 or self.height() == 0

    def as_xyxy(self) -> tuple[int, int, int, int]:
        return (self.x0, self.y0, self.x1, self.y1)

    def to_dict(self) -> dict[str, Any]:
        return {"x0": self.x0, "y0": self.y0, "x1": self.x1, "y1": self.y1}


@dataclass(frozen=True, slots=True)
class RecognizedWord:
    """
    Single word hypothesis as reported by the OCR engine.

    `text` and `confidence` are passed through exactly as the engine reported
    them. `page_num` stays None until the pipeline stamps it.
    """

    text: str
    confidence: float  # engine-native scale, 0..100
    bbox: BBox
    page_num: int | None = None

    def __post_init__(self) -> None:
        if not 0.0 <= self.confidence <= 100.0:
            raise ValueError(f"confidence must be within [0, 100], got {self.confidence}")
        if self.page_num is not None and self.page_num < 1:
            raise ValueError("page_num must be 1-indexed")

    def to_dict(self) -> dict[str, Any]:
        return {
            "text": self.text,
            "confidence": self.confidence,
            "bbox": self.bbox.to_dict(),
            "page": self.page_num,
        }
