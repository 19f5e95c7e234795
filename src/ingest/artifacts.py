from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from contracts import OcrReport


def build_response(report: OcrReport) -> dict[str, Any]:
    """
    JSON-ready success payload for one processed upload.
    """

    return {"success": True, **report.to_dict()}


def build_error_response(error: BaseException) -> dict[str, Any]:
    return {"error": "OCR processing failed", "details": str(error)}


def serialize_response(payload: dict[str, Any]) -> str:
    """
    Stable JSON serialization for response artifacts.
    """

    return json.dumps(payload, ensure_ascii=False, sort_keys=True, indent=2) + "\n"


def write_response_json(*, payload: dict[str, Any], out_file: Path) -> None:
    out_file.parent.mkdir(parents=True, exist_ok=True)
    out_file.write_text(serialize_response(payload), encoding="utf-8")
