from __future__ import annotations

import logging
from typing import Callable

from contracts import RasterPage, RecognitionError, RecognizedWord

from .contracts import OcrConfig, OcrEngineName
from .engines import OcrEngine, TesseractCliEngine

logger = logging.getLogger(__name__)

EngineFactory = Callable[[OcrConfig], OcrEngine]


def _get_engine(config: OcrConfig) -> OcrEngine:
    if config.engine == OcrEngineName.TESSERACT_CLI:
        return TesseractCliEngine(config)
    raise ValueError(f"Unsupported OCR engine: {config.engine}")


def recognize_page(
    page: RasterPage,
    *,
    config: OcrConfig | None = None,
    engine_factory: EngineFactory | None = None,
) -> list[RecognizedWord]:
    """
    Run OCR on one page with a freshly created engine instance.

    The engine is terminated before this function returns or raises. Words
    come back in engine emission order with `page_num` unset; confidences are
    not filtered. Any engine failure surfaces as RecognitionError.
    """

    config = config or OcrConfig()
    factory = engine_factory or _get_engine

    try:
        with factory(config) as engine:
            return list(engine.recognize(page.image))
    except RecognitionError:
        raise
    except Exception as e:
        logger.debug("OCR engine %s failed", config.engine.value, exc_info=True)
        raise RecognitionError(
            f"OCR engine failed: {e}",
            detail={"engine": config.engine.value, "error": repr(e)},
        ) from e
