"""
Service settings, read once at application start.

Library stages never read the environment; only the ingestion entry points
build their configs from these values.
"""

from pathlib import Path

from pydantic_settings import BaseSettings

from ocr import OcrConfig
from pipeline import PipelineConfig
from rasterize import RasterizeConfig


class ServiceSettings(BaseSettings):
    """OCR upload service configuration (env prefix OCR_)."""

    upload_dir: Path = Path("uploads")
    url_prefix: str = "/uploads"
    max_upload_bytes: int = 10 * 1024 * 1024
    language: str = "eng"
    psm: int | None = None
    timeout_s: float = 120.0
    pdf_scale: float = 2.0
    keep_partial_artifacts: bool = False
    log_level: str = "INFO"
    log_json: bool = False

    model_config = {"env_prefix": "OCR_", "env_file": ".env", "extra": "ignore"}

    def pipeline_config(self) -> PipelineConfig:
        return PipelineConfig(
            rasterize=RasterizeConfig(scale=self.pdf_scale),
            ocr=OcrConfig(language=self.language, psm=self.psm, timeout_s=self.timeout_s),
            keep_partial_artifacts=self.keep_partial_artifacts,
        )
