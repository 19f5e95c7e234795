from __future__ import annotations

from abc import ABC, abstractmethod

from PIL import Image

from contracts import RecognizedWord

from ..contracts import OcrConfig


class OcrEngine(ABC):
    """
    Interface for OCR perception engines.

    An engine instance serves exactly one page: it is started, asked to
    recognize once, then terminated. Use it as a context manager so
    `terminate()` runs on every exit path.

    IMPORTANT:
    - Engines must return literal text hypotheses, bounding boxes, confidences.
    - Engines must NOT apply semantic correction, filtering or re-sorting.
    """

    def __init__(self, config: OcrConfig) -> None:
        self.config = config

    def start(self) -> None:
        """Acquire native resources. Default: nothing to acquire."""

    @abstractmethod
    def recognize(self, image: Image.Image) -> list[RecognizedWord]:
        raise NotImplementedError

    def terminate(self) -> None:
        """Release everything `start()` acquired. Must be safe to call once after a failed start."""

    def __enter__(self) -> "OcrEngine":
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.terminate()
