from __future__ import annotations

from abc import ABC, abstractmethod

from contracts import RasterPage

from ..contracts import ColorMode


class PdfRenderEngine(ABC):
    """
    PDF rendering engine abstraction.

    Engines must:
    - Render every page of the document to an in-memory raster, in page order
    - Be deterministic for a given input+params
    - Perform NO OCR, text extraction, layout inference, or filtering
    """

    @abstractmethod
    def backend_id(self) -> str:
        raise NotImplementedError

    def backend_version(self) -> str | None:
        return None

    @abstractmethod
    def render_pdf_pages(
        self,
        *,
        pdf_bytes: bytes,
        scale: float,
        color_mode: ColorMode,
    ) -> list[RasterPage]:
        """
        Return one RasterPage per page (page_num 1..N, ascending). A document
        without pages returns an empty list.

        Raises DecodeError if the bytes cannot be opened as a document.
        """

        raise NotImplementedError
