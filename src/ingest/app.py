"""FastAPI application exposing the OCR page pipeline over HTTP.

Run with: uvicorn --factory ingest.app:create_app
"""

import logging

from fastapi import FastAPI, File, Request, UploadFile, status
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from contracts import PipelineError
from ocr import EngineFactory

from .artifacts import build_error_response, build_response
from .logging_config import configure_logging
from .module import submit
from .settings import ServiceSettings
from .storage import LocalArtifactStore

logger = logging.getLogger(__name__)

UPLOAD_CHUNK_BYTES = 1024 * 1024


async def read_upload_limited(file: UploadFile, limit: int) -> bytes | None:
    """
    Read an upload into memory, or return None as soon as it is known to be
    larger than `limit` bytes. Reading stops at the first chunk past the limit.
    """

    if file.size is not None and file.size > limit:
        return None

    chunks: list[bytes] = []
    total = 0
    while True:
        chunk = await file.read(UPLOAD_CHUNK_BYTES)
        if not chunk:
            break
        total += len(chunk)
        if total > limit:
            return None
        chunks.append(chunk)
    return b"".join(chunks)


async def handle_pipeline_error(request: Request, exc: PipelineError):
    logger.error(
        "OCR processing failed: code=%s stage=%s page=%s path=%s",
        exc.code,
        exc.stage,
        exc.page_num,
        request.url.path,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=build_error_response(exc),
    )


async def handle_unknown_error(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s", request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=build_error_response(exc),
    )


def create_app(
    settings: ServiceSettings | None = None,
    *,
    engine_factory: EngineFactory | None = None,
) -> FastAPI:
    settings = settings or ServiceSettings()
    configure_logging(level=settings.log_level, json_format=settings.log_json)

    upload_dir = settings.upload_dir.expanduser().resolve()
    upload_dir.mkdir(parents=True, exist_ok=True)

    store = LocalArtifactStore(upload_dir, url_prefix=settings.url_prefix)
    pipeline_config = settings.pipeline_config()

    app = FastAPI(
        title="OCR Highlight API",
        version="0.1.0",
        description="Word-level OCR with highlighted page renders",
    )
    app.add_exception_handler(PipelineError, handle_pipeline_error)
    app.add_exception_handler(Exception, handle_unknown_error)

    @app.get("/health", tags=["health"])
    async def health_check():
        return {"status": "healthy", "service": "ocr-highlight"}

    @app.post("/api/ocr", tags=["ocr"])
    async def run_ocr(file: UploadFile | None = File(None, description="Image or PDF file")):
        if file is None:
            return JSONResponse(
                status_code=status.HTTP_400_BAD_REQUEST,
                content={"error": "No file uploaded"},
            )

        data = await read_upload_limited(file, settings.max_upload_bytes)
        if data is None:
            return JSONResponse(
                status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
                content={
                    "error": "File too large",
                    "details": f"Upload exceeds limit of {settings.max_upload_bytes} bytes",
                },
            )

        # Pages run sequentially inside one worker thread; each request gets
        # its own pipeline instance.
        report = await run_in_threadpool(
            submit,
            data,
            file.filename or "",
            store=store,
            config=pipeline_config,
            engine_factory=engine_factory,
        )
        logger.info("OCR done: file=%s words=%d pages=%d", file.filename, report.total_words, len(report.artifacts))
        return build_response(report)

    app.mount(settings.url_prefix, StaticFiles(directory=upload_dir), name="uploads")
    return app
