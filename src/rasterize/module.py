from __future__ import annotations

import logging
from io import BytesIO

from PIL import Image

from contracts import DecodeError, RasterPage

from .contracts import ColorMode, RasterizeConfig, RenderEngineName, is_pdf_extension
from .engines import PdfRenderEngine, Pypdfium2Engine

logger = logging.getLogger(__name__)


def _get_engine(engine: RenderEngineName) -> PdfRenderEngine:
    if engine == RenderEngineName.PYPDFIUM2:
        return Pypdfium2Engine()
    raise ValueError(f"Unsupported render engine: {engine}")


def _decode_still_image(*, image_bytes: bytes, color_mode: ColorMode) -> Image.Image:
    try:
        with Image.open(BytesIO(image_bytes)) as img:
            # Multi-frame containers (TIFF, GIF) contribute their first frame only.
            img.load()
            target = "L" if color_mode == ColorMode.GRAY else "RGB"
            return img.convert(target)
    except (OSError, ValueError, Image.DecompressionBombError) as e:
        raise DecodeError(
            f"Unreadable image: {e}",
            code="RASTERIZE_IMAGE_UNREADABLE",
            detail={"error": repr(e)},
        ) from e


def rasterize(
    document_bytes: bytes,
    declared_extension: str,
    *,
    config: RasterizeConfig | None = None,
) -> list[RasterPage]:
    """
    Turn an uploaded document into an ordered list of page rasters.

    - PDF (by declared extension): one page per logical page, rendered at
      `config.scale`, ascending page order. Zero pages -> empty list.
    - Anything else: decoded as a single still image at native resolution.

    The declared extension is trusted; content is never sniffed. Nothing is
    written to disk.
    """

    config = config or RasterizeConfig()

    if not is_pdf_extension(declared_extension):
        image = _decode_still_image(image_bytes=document_bytes, color_mode=config.color_mode)
        logger.debug("Decoded still image %dx%d", image.width, image.height)
        return [RasterPage(page_num=1, image=image)]

    engine = _get_engine(config.engine)
    try:
        pages = engine.render_pdf_pages(
            pdf_bytes=document_bytes,
            scale=config.scale,
            color_mode=config.color_mode,
        )
    except DecodeError:
        raise
    except Exception as e:
        raise DecodeError(
            f"PDF rendering failed: {e}",
            code="RASTERIZE_PDF_RENDER_FAILED",
            detail={"backend": engine.backend_id(), "error": repr(e)},
        ) from e

    logger.debug(
        "Rendered %d PDF page(s) with %s %s",
        len(pages),
        engine.backend_id(),
        engine.backend_version() or "",
    )
    return pages
