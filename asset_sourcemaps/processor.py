"""Minify one fingerprinted asset and write its source map and gzip copy."""
from __future__ import annotations

import asyncio
import logging
from pathlib import Path

import aiofiles.os

from . import layout
from .config import PipelineConfig
from .errors import AlreadyProcessed
from .fileio import gzip_file, read_text, write_text
from .layout import AssetLayout
from .minifier import Minifier
from .report import FileOutcome, Status

logger = logging.getLogger(__name__)


class FileProcessor:
    """Runs the per-file steps strictly in order.

    1. skip files that already end with their source map reference
    2. rename ``x.js`` to ``x.orig.js``
    3. minify the original with a map pointing at ``/assets/x.js.map``
    4. rewrite ``public/assets/`` paths in code and map
    5. append the source map reference
    6. write ``x.js`` and ``x.js.map``
    7. gzip ``x.js`` into ``x.js.gz`` when enabled
    """

    def __init__(self, asset_layout: AssetLayout, config: PipelineConfig, minifier: Minifier) -> None:
        self.layout = asset_layout
        self.config = config
        self.minifier = minifier

    async def process(self, path: Path) -> FileOutcome:
        try:
            await self._process(path)
        except AlreadyProcessed:
            logger.info("Skipping file which already has a source map: %s", path)
            return FileOutcome(path, Status.ALREADY_PROCESSED)
        except Exception as exc:
            logger.error("Error processing file %s: %s", path, exc)
            return FileOutcome.failure(path, exc)
        return FileOutcome(path, Status.PROCESSED)

    async def _process(self, path: Path) -> None:
        map_path = layout.sourcemap_path(path)
        map_url = self.layout.site_path(map_path)

        source = await read_text(path)
        if layout.has_marker(source, map_url):
            raise AlreadyProcessed(path)
        logger.info("Generating source map for file: %s", path)

        original = layout.original_path(path)
        await aiofiles.os.rename(path, original)

        result = await asyncio.to_thread(
            self.minifier.minify,
            source,
            source_name=self.layout.source_name(original),
            map_url=map_url,
        )
        code = self.layout.rewrite(result.code) + layout.marker(map_url)
        source_map = self.layout.rewrite(result.map)

        await asyncio.gather(write_text(path, code), write_text(map_path, source_map))

        if self.config.gzip:
            await asyncio.to_thread(gzip_file, path, layout.gzip_path(path))
