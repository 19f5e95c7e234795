from __future__ import annotations

import logging
from pathlib import Path

from contracts import ArtifactWriteError, RasterPage
from pipeline import ArtifactStore

logger = logging.getLogger(__name__)


def resolve_under_root(*, root: Path, name: str) -> Path:
    """
    Resolve a plain filename under an explicit root directory, rejecting
    absolute paths and traversal.
    """

    if name.strip() == "" or name.startswith(("/", "\\")) or (":" in name and "\\" in name):
        raise ArtifactWriteError(
            f"Expected a relative filename under the artifact root, got: {name!r}",
            code="ARTIFACT_BAD_NAME",
        )

    root = root.expanduser().resolve()
    candidate = (root / name).resolve()
    if not candidate.is_relative_to(root) or candidate == root:
        raise ArtifactWriteError(
            f"Path traversal or external reference detected: name={name!r}",
            code="ARTIFACT_BAD_NAME",
        )
    return candidate


class LocalArtifactStore(ArtifactStore):
    """
    Writes annotated pages as PNG files into `out_dir` and hands back URLs
    under `url_prefix` (the directory is expected to be served there).
    """

    def __init__(self, out_dir: Path, *, url_prefix: str = "/uploads") -> None:
        self.out_dir = out_dir
        self.url_prefix = url_prefix.rstrip("/")

    def location_for(self, name: str) -> str:
        return f"{self.url_prefix}/{name}"

    def path_for(self, location: str) -> Path | None:
        prefix = self.url_prefix + "/"
        if not location.startswith(prefix):
            return None
        return resolve_under_root(root=self.out_dir, name=location[len(prefix):])

    def save(self, page: RasterPage, suggested_name: str) -> str:
        out_file = resolve_under_root(root=self.out_dir, name=suggested_name)
        try:
            out_file.parent.mkdir(parents=True, exist_ok=True)
            page.image.save(out_file, format="PNG")
        except OSError as e:
            raise ArtifactWriteError(
                f"Could not write artifact {suggested_name}: {e}",
                page_num=page.page_num,
                detail={"out_file": str(out_file)},
            ) from e

        logger.debug("stored page %d at %s", page.page_num, out_file)
        return self.location_for(suggested_name)

    def discard(self, location: str) -> None:
        path = self.path_for(location)
        if path is None:
            return
        path.unlink(missing_ok=True)
        logger.debug("discarded artifact %s", path)
