from __future__ import annotations

import json
import shutil
import tempfile
import unittest
from io import BytesIO
from pathlib import Path
from unittest.mock import patch

from PIL import Image

from contracts import BBox, RecognizedWord
from ingest.cli import main
from ocr import OcrEngine


class _FakeEngine(OcrEngine):
    def recognize(self, image: Image.Image) -> list[RecognizedWord]:
        return [RecognizedWord(text="X", confidence=100.0, bbox=BBox(1, 2, 3, 4))]


def _pdf_bytes(page_count: int) -> bytes:
    images = [Image.new("RGB", (40, 20), (255, 255, 255)) for _ in range(page_count)]
    buf = BytesIO()
    images[0].save(buf, format="PDF", save_all=True, append_images=images[1:])
    return buf.getvalue()


class TestCli(unittest.TestCase):
    def setUp(self) -> None:
        self.tmp = Path(tempfile.mkdtemp(prefix="ocr-cli-test-"))

    def tearDown(self) -> None:
        shutil.rmtree(self.tmp, ignore_errors=True)

    def test_pdf_run_writes_json_and_images(self) -> None:
        src = self.tmp / "doc.pdf"
        src.write_bytes(_pdf_bytes(2))
        out_json = self.tmp / "out" / "result.json"

        with patch("ocr.module._get_engine", side_effect=lambda cfg: _FakeEngine(cfg)):
            rc = main(
                [
                    "--input", str(src),
                    "--out-dir", str(self.tmp / "images"),
                    "--out-json", str(out_json),
                    "--url-prefix", "/static",
                    "--scale", "1.0",
                ]
            )

        self.assertEqual(rc, 0)
        payload = json.loads(out_json.read_text(encoding="utf-8"))
        self.assertEqual(payload["totalWords"], 2)
        self.assertEqual([r["page"] for r in payload["results"]], [1, 2])
        self.assertEqual([i["page"] for i in payload["highlightedImages"]], [1, 2])
        for image in payload["highlightedImages"]:
            self.assertTrue(image["url"].startswith("/static/"))
            name = image["url"].rsplit("/", 1)[-1]
            self.assertTrue((self.tmp / "images" / name).exists())

    def test_failure_exit_code_and_error_json(self) -> None:
        src = self.tmp / "broken.pdf"
        src.write_bytes(b"%PDF-1.4 garbage")
        out_json = self.tmp / "result.json"

        rc = main(["--input", str(src), "--out-dir", str(self.tmp / "images"), "--out-json", str(out_json)])

        self.assertEqual(rc, 2)
        payload = json.loads(out_json.read_text(encoding="utf-8"))
        self.assertEqual(payload["error"], "OCR processing failed")


if __name__ == "__main__":
    unittest.main()
