from __future__ import annotations

import logging

from contracts import DecodeError, RasterPage

from ..contracts import ColorMode
from .base import PdfRenderEngine

logger = logging.getLogger(__name__)


class Pypdfium2Engine(PdfRenderEngine):
    def backend_id(self) -> str:
        return "pypdfium2"

    def backend_version(self) -> str | None:
        return getattr(self._require_pdfium(), "__version__", None)

    def _require_pdfium(self):
        try:
            import pypdfium2 as pdfium  # type: ignore

            return pdfium
        except ImportError as e:
            raise RuntimeError(
                "Missing dependency: pypdfium2 is required for PDF rendering."
            ) from e

    def render_pdf_pages(
        self,
        *,
        pdf_bytes: bytes,
        scale: float,
        color_mode: ColorMode,
    ) -> list[RasterPage]:
        pdfium = self._require_pdfium()

        try:
            doc = pdfium.PdfDocument(pdf_bytes)
        except pdfium.PdfiumError as e:
            # PDFium refuses to load a well-formed document with no pages and
            # reports FPDF_ERR_SUCCESS for it.
            if getattr(e, "err_code", None) == pdfium.raw.FPDF_ERR_SUCCESS:
                logger.debug("PDF has no pages")
                return []
            raise DecodeError(
                f"Unreadable PDF: {e}",
                code="RASTERIZE_PDF_UNREADABLE",
                detail={"backend": self.backend_id()},
            ) from e

        try:
            page_count = len(doc)
            logger.debug("PDF opened: %d page(s), scale=%s", page_count, scale)

            rendered: list[RasterPage] = []
            for page_num in range(1, page_count + 1):
                page = doc[page_num - 1]
                try:
                    bitmap = page.render(scale=scale)
                    # convert() copies out of the pdfium-owned buffer.
                    pil_img = bitmap.to_pil()
                    if color_mode == ColorMode.GRAY:
                        pil_img = pil_img.convert("L")
                    else:
                        pil_img = pil_img.convert("RGB")
                finally:
                    page.close()

                rendered.append(RasterPage(page_num=page_num, image=pil_img))
            return rendered
        finally:
            doc.close()
