from __future__ import annotations

from PIL import ImageDraw

from contracts import RasterPage, RecognizedWord

from .contracts import PAGE_STYLE, AnnotationStyle


def annotate(
    page: RasterPage,
    words: list[RecognizedWord],
    *,
    style: AnnotationStyle | None = None,
) -> RasterPage:
    """
    Return a new page with one box per word drawn over a copy of the input.

    Words are drawn in the given order, so later boxes cover earlier ones where
    they overlap. The input page's pixels are never touched.
    """

    style = style or PAGE_STYLE

    annotated = page.image.copy()
    if not words:
        return RasterPage(page_num=page.page_num, image=annotated)

    if annotated.mode not in ("RGB", "RGBA"):
        annotated = annotated.convert("RGB")

    # RGBA draw mode alpha-blends fills onto the underlying pixels.
    draw = ImageDraw.Draw(annotated, "RGBA")
    for word in words:
        box = word.bbox.as_xyxy()
        if style.stroke_width > 0:
            draw.rectangle(box, outline=(*style.stroke_rgb, 255), width=style.stroke_width)
        draw.rectangle(box, fill=style.fill_rgba)

    return RasterPage(page_num=page.page_num, image=annotated)
