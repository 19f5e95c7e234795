"""
Ingestion: upload routing, artifact storage, response shaping, HTTP and CLI
entry points around the page pipeline.
"""

from .artifacts import build_error_response, build_response, serialize_response
from .module import declared_extension, submit
from .storage import LocalArtifactStore

__all__ = [
    "LocalArtifactStore",
    "build_error_response",
    "build_response",
    "declared_extension",
    "serialize_response",
    "submit",
]
