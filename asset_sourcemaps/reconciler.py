"""Serve non-fingerprinted duplicates from their fingerprinted twin's output."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, List, Optional

import aiofiles.os

from . import layout
from .config import PipelineConfig
from .errors import AlreadyProcessed, NoMatchingOriginalError, UnprocessedOriginalError
from .fileio import read_bytes, write_bytes
from .layout import AssetLayout
from .matcher import ContentMatcher
from .report import FileOutcome, Status

logger = logging.getLogger(__name__)


class DuplicateReconciler:
    """Copies already minified output instead of minifying a file twice.

    Must run after the work queue has drained; files are handled one at a
    time in the order given.
    """

    def __init__(self, asset_layout: AssetLayout, config: PipelineConfig, matcher: ContentMatcher) -> None:
        self.layout = asset_layout
        self.config = config
        self.matcher = matcher

    async def reconcile(self, paths: Iterable[Path]) -> List[FileOutcome]:
        outcomes = []
        for path in paths:
            outcomes.append(await self.reconcile_file(path))
        return outcomes

    async def reconcile_file(self, path: Path) -> FileOutcome:
        try:
            await self._reconcile(path)
        except AlreadyProcessed:
            logger.info("Skipping file which already has a source map: %s", path)
            return FileOutcome(path, Status.ALREADY_PROCESSED)
        except Exception as exc:
            logger.error("Error processing file %s: %s", path, exc)
            return FileOutcome.failure(path, exc)
        return FileOutcome(path, Status.REUSED)

    def _marker_bytes(self, sibling: Path) -> bytes:
        return self.layout.marker_for(sibling).encode("utf-8")

    async def _served_sibling(self, path: Path) -> Optional[Path]:
        """The twin whose output ``path`` already serves, found through its own ``.orig.js``."""
        try:
            previous = await read_bytes(layout.original_path(path))
        except FileNotFoundError:
            return None
        sibling_original = self.matcher.find(previous)
        if sibling_original is None:
            return None
        return layout.asset_path_for_original(sibling_original)

    async def _reconcile(self, path: Path) -> None:
        content = await read_bytes(path)
        served = await self._served_sibling(path)
        if served is not None and content.endswith(self._marker_bytes(served)):
            raise AlreadyProcessed(path)

        sibling_original = self.matcher.find(content)
        if sibling_original is None:
            raise NoMatchingOriginalError(path)
        sibling = layout.asset_path_for_original(sibling_original)

        # Read every artifact before the rename: a failure leaves the duplicate untouched.
        minified = await self._read_artifact(path, sibling, sibling)
        if not minified.endswith(self._marker_bytes(sibling)):
            raise UnprocessedOriginalError(path, sibling)
        compressed: Optional[bytes] = None
        if self.config.gzip:
            compressed = await self._read_artifact(path, sibling, layout.gzip_path(sibling))

        logger.info("Reusing output of %s for %s", sibling, path)
        await aiofiles.os.rename(path, layout.original_path(path))
        await write_bytes(path, minified)
        if compressed is not None:
            await write_bytes(layout.gzip_path(path), compressed)

    @staticmethod
    async def _read_artifact(path: Path, sibling: Path, artifact: Path) -> bytes:
        try:
            return await read_bytes(artifact)
        except FileNotFoundError as exc:
            raise UnprocessedOriginalError(path, sibling) from exc
