"""Exceptions raised while post-processing compiled assets."""
from __future__ import annotations

from pathlib import Path


class AssetSourcemapsError(Exception):
    """Base class for every error raised by this package."""


class AlreadyProcessed(AssetSourcemapsError):
    """Signal that a file already carries its source map reference."""

    def __init__(self, path: Path) -> None:
        super().__init__(f"{path} already has a source map")
        self.path = path


class MinificationError(AssetSourcemapsError):
    def __init__(self, source_name: str, message: str) -> None:
        super().__init__(f"Could not minify {source_name}: {message}")
        self.source_name = source_name


class NoMatchingOriginalError(AssetSourcemapsError):
    def __init__(self, path: Path) -> None:
        super().__init__(f"no matching original found for {path}")
        self.path = path


class UnprocessedOriginalError(AssetSourcemapsError):
    """The fingerprinted twin of a duplicate has no processed output to reuse."""

    def __init__(self, path: Path, sibling: Path) -> None:
        super().__init__(f"matched {sibling} for {path}, but it has not been processed")
        self.path = path
        self.sibling = sibling


class InvalidAssetsDirectoryError(AssetSourcemapsError):
    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"{reason}: {path}")
        self.path = path
