"""
Page pipeline orchestration: one request, pages in order, fail-fast.
"""

from .contracts import ArtifactStore, PipelineConfig, PipelineState
from .module import PagePipeline, artifact_filename, process_document

__all__ = [
    "ArtifactStore",
    "PagePipeline",
    "PipelineConfig",
    "PipelineState",
    "artifact_filename",
    "process_document",
]
