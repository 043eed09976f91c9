"""Drive a full run over ``<root>/public/<assets folder>``."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional, Tuple

from . import layout
from .config import PipelineConfig
from .errors import InvalidAssetsDirectoryError
from .layout import AssetLayout
from .matcher import ContentMatcher
from .minifier import Minifier, build_minifier
from .processor import FileProcessor
from .reconciler import DuplicateReconciler
from .report import FileOutcome, RunReport
from .walker import find_nested_files
from .work_queue import WorkQueue

logger = logging.getLogger(__name__)


def classify(paths: List[Path]) -> Tuple[List[Path], List[Path]]:
    """Split candidate scripts into fingerprinted and non-fingerprinted lists."""
    fingerprinted: List[Path] = []
    plain: List[Path] = []
    for path in paths:
        if not layout.is_candidate(path):
            continue
        (fingerprinted if layout.is_fingerprinted(path) else plain).append(path)
    return fingerprinted, plain


class AssetPipeline:
    def __init__(self, config: Optional[PipelineConfig] = None, minifier: Optional[Minifier] = None) -> None:
        self.config = config or PipelineConfig()
        self.minifier = minifier or build_minifier(self.config)

    def layout_for(self, root: Path) -> AssetLayout:
        return AssetLayout(Path(root), self.config.assets_folder)

    def discover(self, asset_layout: AssetLayout) -> List[Path]:
        assets_dir = asset_layout.assets_dir
        if not assets_dir.exists():
            raise InvalidAssetsDirectoryError(assets_dir, "Error reading input directory")
        if not assets_dir.is_dir():
            raise InvalidAssetsDirectoryError(assets_dir, "Input is not a directory")
        try:
            return find_nested_files(assets_dir)
        except OSError as exc:
            raise InvalidAssetsDirectoryError(
                assets_dir, f"Encountered error walking directory tree ({exc})"
            ) from exc

    async def run(self, root: Path) -> RunReport:
        asset_layout = self.layout_for(root)
        fingerprinted, plain = classify(self.discover(asset_layout))
        logger.info(
            "Found %d fingerprinted and %d non-fingerprinted scripts in %s",
            len(fingerprinted),
            len(plain),
            asset_layout.assets_dir,
        )

        report = RunReport()
        processor = FileProcessor(asset_layout, self.config, self.minifier)
        queue = WorkQueue(processor.process, self.config.concurrency, on_drain=self._on_drain)
        report.extend(await queue.run(fingerprinted))

        if plain:
            matcher = await ContentMatcher.from_originals(layout.original_path(path) for path in fingerprinted)
            reconciler = DuplicateReconciler(asset_layout, self.config, matcher)
            report.extend(await reconciler.reconcile(plain))
        return report

    @staticmethod
    def _on_drain(outcomes: List[FileOutcome]) -> None:
        failed = sum(1 for outcome in outcomes if outcome.failed)
        logger.info("all files have been processed (%d of %d failed)", failed, len(outcomes))
