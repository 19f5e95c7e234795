from __future__ import annotations

import unittest

from PIL import Image

from contracts import BBox, RasterPage, RecognitionError, RecognizedWord
from ocr import OcrConfig, OcrEngine, recognize_page


class _TrackingEngine(OcrEngine):
    def __init__(self, config: OcrConfig, *, log: list[str], words=None, error: Exception | None = None) -> None:
        super().__init__(config)
        self.log = log
        self.words = words or []
        self.error = error

    def start(self) -> None:
        self.log.append("start")

    def recognize(self, image: Image.Image) -> list[RecognizedWord]:
        self.log.append("recognize")
        if self.error is not None:
            raise self.error
        return list(self.words)

    def terminate(self) -> None:
        self.log.append("terminate")


def _page(page_num: int = 1) -> RasterPage:
    return RasterPage(page_num=page_num, image=Image.new("RGB", (40, 20), (255, 255, 255)))


class TestRecognizePageLifecycle(unittest.TestCase):
    def test_engine_started_and_terminated_on_success(self) -> None:
        log: list[str] = []
        words = [
            RecognizedWord(text="b", confidence=10.0, bbox=BBox(5, 5, 9, 9)),
            RecognizedWord(text="a", confidence=99.0, bbox=BBox(1, 1, 4, 4)),
        ]

        out = recognize_page(_page(), engine_factory=lambda cfg: _TrackingEngine(cfg, log=log, words=words))

        self.assertEqual(log, ["start", "recognize", "terminate"])
        # Engine order is preserved, low confidence is not filtered.
        self.assertEqual([w.text for w in out], ["b", "a"])

    def test_engine_terminated_when_recognition_raises(self) -> None:
        log: list[str] = []
        factory = lambda cfg: _TrackingEngine(cfg, log=log, error=ValueError("bad pixels"))

        with self.assertRaises(RecognitionError) as ctx:
            recognize_page(_page(), engine_factory=factory)

        self.assertEqual(log, ["start", "recognize", "terminate"])
        self.assertEqual(ctx.exception.code, "OCR_ENGINE_FAILED")
        self.assertIsInstance(ctx.exception.__cause__, ValueError)

    def test_recognition_errors_pass_through_unwrapped(self) -> None:
        log: list[str] = []
        original = RecognitionError("engine said no", code="OCR_BACKEND_ERROR")
        factory = lambda cfg: _TrackingEngine(cfg, log=log, error=original)

        with self.assertRaises(RecognitionError) as ctx:
            recognize_page(_page(), engine_factory=factory)

        self.assertIs(ctx.exception, original)
        self.assertEqual(log[-1], "terminate")

    def test_fresh_engine_per_page(self) -> None:
        created: list[_TrackingEngine] = []

        def factory(cfg: OcrConfig) -> _TrackingEngine:
            engine = _TrackingEngine(cfg, log=[])
            created.append(engine)
            return engine

        recognize_page(_page(1), engine_factory=factory)
        recognize_page(_page(2), engine_factory=factory)

        self.assertEqual(len(created), 2)
        self.assertIsNot(created[0], created[1])
        for engine in created:
            self.assertEqual(engine.log, ["start", "recognize", "terminate"])

    def test_config_is_handed_to_factory(self) -> None:
        seen: list[OcrConfig] = []

        def factory(cfg: OcrConfig) -> _TrackingEngine:
            seen.append(cfg)
            return _TrackingEngine(cfg, log=[])

        cfg = OcrConfig(language="fra")
        recognize_page(_page(), config=cfg, engine_factory=factory)
        self.assertEqual(seen, [cfg])


class TestWordContracts(unittest.TestCase):
    def test_inverted_bbox_rejected(self) -> None:
        with self.assertRaises(ValueError):
            BBox(x0=10, y0=0, x1=5, y1=3)

    def test_degenerate_bbox_allowed(self) -> None:
        self.assertTrue(BBox(0, 0, 0, 0).is_degenerate())

    def test_confidence_range(self) -> None:
        with self.assertRaises(ValueError):
            RecognizedWord(text="x", confidence=100.5, bbox=BBox(0, 0, 1, 1))


class TestOcrConfig(unittest.TestCase):
    def test_timeout_must_be_positive(self) -> None:
        with self.assertRaises(ValueError):
            OcrConfig(timeout_s=0)


if __name__ == "__main__":
    unittest.main()
