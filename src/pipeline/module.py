from __future__ import annotations

import logging
import uuid
from dataclasses import replace

from annotate import AnnotationStyle, annotate
from contracts import (
    ArtifactWriteError,
    OcrReport,
    PageArtifact,
    PipelineError,
    RasterPage,
    RecognizedWord,
)
from ocr import EngineFactory, recognize_page
from rasterize import is_pdf_extension, rasterize

from .contracts import TERMINAL_STATES, ArtifactStore, PipelineConfig, PipelineState

logger = logging.getLogger(__name__)


def artifact_filename(*, page_num: int, request_token: str) -> str:
    return f"highlighted-page-{page_num:03d}-{request_token}.png"


class PagePipeline:
    """
    Drives one document through rasterize -> (recognize -> annotate)* -> report.

    Pages are processed strictly in order, one OCR engine instance at a time.
    The first failure aborts the remaining pages and is re-raised as-is, with
    its page number filled in. An instance handles exactly one request.
    """

    def __init__(
        self,
        *,
        config: PipelineConfig,
        store: ArtifactStore,
        engine_factory: EngineFactory | None = None,
        request_token: str | None = None,
    ) -> None:
        self.config = config
        self.store = store
        self.engine_factory = engine_factory
        self.request_token = request_token or uuid.uuid4().hex
        self.state = PipelineState.IDLE
        self._artifacts: list[PageArtifact] = []

    def _transition(self, state: PipelineState) -> None:
        logger.debug("pipeline %s: %s -> %s", self.request_token, self.state.value, state.value)
        self.state = state

    def process(self, document_bytes: bytes, declared_extension: str) -> OcrReport:
        if self.state != PipelineState.IDLE:
            raise RuntimeError(f"PagePipeline already used (state={self.state.value})")

        current_page: int | None = None
        try:
            self._transition(PipelineState.RASTERIZING)
            pages = rasterize(document_bytes, declared_extension, config=self.config.rasterize)
            logger.info(
                "pipeline %s: %d page(s) from %r input",
                self.request_token,
                len(pages),
                declared_extension,
            )

            style = self.config.page_style if is_pdf_extension(declared_extension) else self.config.image_style

            results: list[RecognizedWord] = []
            for page in pages:
                current_page = page.page_num
                results.extend(self._process_page(page, style=style))

            self._transition(PipelineState.AGGREGATING)
            report = OcrReport(results=results, artifacts=list(self._artifacts))
            self._transition(PipelineState.DONE)
            return report
        except PipelineError as e:
            if e.page_num is None:
                e.page_num = current_page
            self._fail(e)
            raise
        except Exception as e:
            self._fail(e)
            raise

    def _process_page(self, page: RasterPage, *, style: AnnotationStyle) -> list[RecognizedWord]:
        self._transition(PipelineState.RECOGNIZING)
        words = recognize_page(page, config=self.config.ocr, engine_factory=self.engine_factory)
        stamped = [replace(w, page_num=page.page_num) for w in words]

        self._transition(PipelineState.ANNOTATING)
        annotated = annotate(page, stamped, style=style)

        name = artifact_filename(page_num=page.page_num, request_token=self.request_token)
        try:
            location = self.store.save(annotated, name)
        except PipelineError:
            raise
        except Exception as e:
            raise ArtifactWriteError(
                f"Failed to store annotated page: {e}",
                detail={"suggested_name": name, "error": repr(e)},
            ) from e
        self._artifacts.append(PageArtifact(page_num=page.page_num, location=location))

        logger.info(
            "pipeline %s: page %d -> %d word(s)",
            self.request_token,
            page.page_num,
            len(stamped),
        )
        return stamped

    def _fail(self, error: Exception) -> None:
        failed_in = self.state
        if self.state not in TERMINAL_STATES:
            self._transition(PipelineState.FAILED)
        logger.error(
            "pipeline %s failed in state %s: %s",
            self.request_token,
            failed_in.value,
            error,
            exc_info=error,
        )

        if self.config.keep_partial_artifacts:
            return
        for artifact in self._artifacts:
            try:
                self.store.discard(artifact.location)
            except Exception:
                logger.warning(
                    "pipeline %s: could not discard partial artifact %s",
                    self.request_token,
                    artifact.location,
                    exc_info=True,
                )
        self._artifacts.clear()


def process_document(
    document_bytes: bytes,
    declared_extension: str,
    *,
    config: PipelineConfig | None = None,
    store: ArtifactStore,
    engine_factory: EngineFactory | None = None,
) -> OcrReport:
    """
    Run a fresh PagePipeline over one document. See PagePipeline.process().
    """

    pipeline = PagePipeline(
        config=config or PipelineConfig(),
        store=store,
        engine_factory=engine_factory,
    )
    return pipeline.process(document_bytes, declared_extension)
