from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum

from annotate import IMAGE_STYLE, PAGE_STYLE, AnnotationStyle
from contracts import RasterPage
from ocr import OcrConfig
from rasterize import RasterizeConfig


class PipelineState(str, Enum):
    IDLE = "idle"
    RASTERIZING = "rasterizing"
    RECOGNIZING = "recognizing"
    ANNOTATING = "annotating"
    AGGREGATING = "aggregating"
    DONE = "done"
    FAILED = "failed"


TERMINAL_STATES = frozenset({PipelineState.DONE, PipelineState.FAILED})


@dataclass(frozen=True, slots=True)
class PipelineConfig:
    """
    Per-request pipeline configuration.

    `keep_partial_artifacts`: when a page fails mid-document, artifacts already
    stored for earlier pages are discarded unless this is set.
    """

    rasterize: RasterizeConfig = field(default_factory=RasterizeConfig)
    ocr: OcrConfig = field(default_factory=OcrConfig)
    page_style: AnnotationStyle = PAGE_STYLE
    image_style: AnnotationStyle = IMAGE_STYLE
    keep_partial_artifacts: bool = False


class ArtifactStore(ABC):
    """
    Persistence collaborator for annotated pages.

    The pipeline only suggests a filename; where bytes land and how they are
    served is up to the store.
    """

    @abstractmethod
    def save(self, page: RasterPage, suggested_name: str) -> str:
        """Persist the page and return a referenceable location (URL or path)."""

        raise NotImplementedError

    @abstractmethod
    def discard(self, location: str) -> None:
        """Remove a previously saved artifact. Unknown locations are ignored."""

        raise NotImplementedError
