from __future__ import annotations

import json
import shutil
import tempfile
import unittest
from io import BytesIO
from pathlib import Path

from PIL import Image

from contracts import ArtifactWriteError, BBox, DecodeError, OcrReport, PageArtifact, RasterPage, RecognizedWord
from ingest import LocalArtifactStore, build_error_response, build_response, declared_extension, submit
from ingest.artifacts import serialize_response
from ocr import OcrConfig, OcrEngine


class _OneWordEngine(OcrEngine):
    def recognize(self, image: Image.Image) -> list[RecognizedWord]:
        return [RecognizedWord(text="Hi", confidence=95.0, bbox=BBox(10, 10, 30, 20))]


def _png_bytes(width: int, height: int) -> bytes:
    buf = BytesIO()
    Image.new("RGB", (width, height), (255, 255, 255)).save(buf, format="PNG")
    return buf.getvalue()


class _TmpDirCase(unittest.TestCase):
    def setUp(self) -> None:
        self.tmp = Path(tempfile.mkdtemp(prefix="ocr-ingest-test-"))

    def tearDown(self) -> None:
        shutil.rmtree(self.tmp, ignore_errors=True)


class TestLocalArtifactStore(_TmpDirCase):
    def test_save_and_discard(self) -> None:
        store = LocalArtifactStore(self.tmp / "out", url_prefix="/uploads/")
        page = RasterPage(page_num=1, image=Image.new("RGB", (12, 8), (0, 0, 0)))

        location = store.save(page, "highlighted-page-001-abc.png")

        self.assertEqual(location, "/uploads/highlighted-page-001-abc.png")
        out_file = self.tmp / "out" / "highlighted-page-001-abc.png"
        self.assertTrue(out_file.exists())
        with Image.open(out_file) as img:
            self.assertEqual(img.size, (12, 8))

        store.discard(location)
        self.assertFalse(out_file.exists())

    def test_traversal_rejected(self) -> None:
        store = LocalArtifactStore(self.tmp)
        page = RasterPage(page_num=1, image=Image.new("RGB", (1, 1)))

        for name in ("../escape.png", "/etc/passwd", ""):
            with self.assertRaises(ArtifactWriteError):
                store.save(page, name)

    def test_discard_ignores_foreign_locations(self) -> None:
        store = LocalArtifactStore(self.tmp)
        store.discard("https://elsewhere.example/x.png")
        store.discard("/uploads/never-written.png")


class TestSubmit(_TmpDirCase):
    def test_extension_routing_is_case_insensitive(self) -> None:
        self.assertEqual(declared_extension("Scan.PDF"), ".pdf")
        self.assertEqual(declared_extension("archive.tar.PNG"), ".png")
        self.assertEqual(declared_extension("noext"), "")

    def test_submit_image(self) -> None:
        store = LocalArtifactStore(self.tmp)
        report = submit(_png_bytes(100, 50), "photo.PNG", store=store, engine_factory=_OneWordEngine)

        self.assertEqual(report.total_words, 1)
        self.assertEqual(report.results[0].page_num, 1)
        self.assertEqual(len(list(self.tmp.glob("highlighted-page-001-*.png"))), 1)

    def test_empty_upload_rejected(self) -> None:
        with self.assertRaises(DecodeError) as ctx:
            submit(b"", "empty.png", store=LocalArtifactStore(self.tmp))
        self.assertEqual(ctx.exception.code, "UPLOAD_EMPTY")

    def test_corrupt_pdf_leaves_no_artifacts(self) -> None:
        with self.assertRaises(DecodeError):
            submit(b"not a pdf", "doc.pdf", store=LocalArtifactStore(self.tmp), engine_factory=_OneWordEngine)
        self.assertEqual(list(self.tmp.iterdir()), [])


class TestResponseShape(unittest.TestCase):
    def test_success_payload(self) -> None:
        report = OcrReport(
            results=[RecognizedWord(text="Hi", confidence=95.0, bbox=BBox(10, 10, 30, 20), page_num=1)],
            artifacts=[PageArtifact(page_num=1, location="/uploads/highlighted-page-001-x.png")],
        )

        payload = build_response(report)

        self.assertEqual(
            payload,
            {
                "success": True,
                "totalWords": 1,
                "results": [
                    {
                        "text": "Hi",
                        "confidence": 95.0,
                        "bbox": {"x0": 10, "y0": 10, "x1": 30, "y1": 20},
                        "page": 1,
                    }
                ],
                "highlightedImages": [{"page": 1, "url": "/uploads/highlighted-page-001-x.png"}],
            },
        )
        self.assertEqual(json.loads(serialize_response(payload)), payload)

    def test_error_payload(self) -> None:
        payload = build_error_response(DecodeError("Unreadable PDF: bad xref"))
        self.assertEqual(payload["error"], "OCR processing failed")
        self.assertIn("Unreadable PDF: bad xref", payload["details"])


if __name__ == "__main__":
    unittest.main()
