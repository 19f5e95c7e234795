from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class AnnotationStyle:
    """
    Word box overlay style: an opaque outline, then a translucent fill of the
    same rectangle drawn on top of it.
    """

    stroke_rgb: tuple[int, int, int] = (0, 255, 0)
    stroke_width: int = 3
    fill_rgba: tuple[int, int, int, int] = (0, 255, 0, 38)  # ~0.15 alpha

    def __post_init__(self) -> None:
        if self.stroke_width < 0:
            raise ValueError("stroke_width must be >= 0")
        for channel in (*self.stroke_rgb, *self.fill_rgba):
            if not 0 <= channel <= 255:
                raise ValueError("color channels must be within [0, 255]")


# Rendered document pages are larger (scaled), so they get a heavier stroke.
PAGE_STYLE = AnnotationStyle()
IMAGE_STYLE = AnnotationStyle(stroke_width=2, fill_rgba=(0, 255, 0, 26))  # ~0.1 alpha
