from __future__ import annotations

import csv
import logging
import shutil
import subprocess
import tempfile
from pathlib import Path

from PIL import Image

from contracts import BBox, RecognitionError, RecognizedWord

from ..contracts import OcrConfig
from .base import OcrEngine

logger = logging.getLogger(__name__)


def _clamp_confidence(raw_conf: float | None) -> float:
    # Tesseract reports -1 for rows without a word hypothesis.
    if raw_conf is None or raw_conf < 0:
        return 0.0
    return min(100.0, raw_conf)


def parse_tsv_words(tsv: str) -> list[RecognizedWord]:
    """
    Parse `tesseract ... tsv` output into words, in the order Tesseract emitted
    them (block, paragraph, line, word reading order).

    Only word-level rows (level 5) with non-empty text are kept. Text is not
    stripped, normalized or corrected.
    """

    words: list[RecognizedWord] = []
    reader = csv.DictReader(tsv.splitlines(), delimiter="\t", quoting=csv.QUOTE_NONE)

    for row in reader:
        # level meanings: 1=page,2=block,3=para,4=line,5=word
        try:
            level = int(row.get("level", "") or "0")
        except ValueError:
            continue
        if level != 5:
            continue

        text = row.get("text") or ""
        if text == "":
            continue

        try:
            left = int(row.get("left", "") or "0")
            top = int(row.get("top", "") or "0")
            width = int(row.get("width", "") or "0")
            height = int(row.get("height", "") or "0")
        except ValueError:
            # Malformed geometry rows are dropped (no guessing).
            continue

        conf_str = row.get("conf", "")
        try:
            raw_conf: float | None = float(conf_str) if conf_str else None
        except ValueError:
            raw_conf = None

        words.append(
            RecognizedWord(
                text=text,
                confidence=_clamp_confidence(raw_conf),
                bbox=BBox(
                    x0=left,
                    y0=top,
                    x1=left + max(0, width),
                    y1=top + max(0, height),
                ),
            )
        )

    return words


class TesseractCliEngine(OcrEngine):
    """
    Tesseract OCR via the `tesseract` CLI, parsed from TSV output.

    Each instance owns a private scratch directory for the page image handed
    to the CLI; `terminate()` removes it.
    """

    def __init__(self, config: OcrConfig) -> None:
        super().__init__(config)
        self._workdir: Path | None = None

    def start(self) -> None:
        self._workdir = Path(tempfile.mkdtemp(prefix="ocr-tesseract-"))

    def terminate(self) -> None:
        if self._workdir is not None:
            shutil.rmtree(self._workdir, ignore_errors=True)
            self._workdir = None

    def _command(self, image_file: Path) -> list[str]:
        cmd = ["tesseract", str(image_file), "stdout", "-l", self.config.language]
        if self.config.psm is not None:
            cmd.extend(["--psm", str(self.config.psm)])
        # Request TSV output (word-level rows include bounding boxes + conf + text).
        cmd.append("tsv")
        return cmd

    def recognize(self, image: Image.Image) -> list[RecognizedWord]:
        if self._workdir is None:
            raise RuntimeError("TesseractCliEngine.recognize() called outside start()/terminate()")

        image_file = self._workdir / "page.png"
        image.save(image_file, format="PNG")

        try:
            proc = subprocess.run(
                self._command(image_file),
                check=False,
                capture_output=True,
                text=True,
                timeout=self.config.timeout_s,
            )
        except FileNotFoundError as e:
            raise RecognitionError(
                "tesseract binary not found on PATH",
                code="OCR_BACKEND_NOT_INSTALLED",
                detail={"expected_command": "tesseract"},
            ) from e
        except subprocess.TimeoutExpired as e:
            raise RecognitionError(
                "OCR backend timed out",
                code="OCR_TIMEOUT",
                detail={"timeout_s": self.config.timeout_s},
            ) from e

        if proc.returncode != 0:
            raise RecognitionError(
                "OCR backend returned a non-zero exit code",
                code="OCR_BACKEND_ERROR",
                detail={
                    "returncode": proc.returncode,
                    "stderr": proc.stderr[-4000:],
                },
            )

        words = parse_tsv_words(proc.stdout)
        logger.debug("tesseract produced %d word(s) for %dx%d image", len(words), image.width, image.height)
        return words
