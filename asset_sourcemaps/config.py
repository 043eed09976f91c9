"""Runtime configuration for the asset pipeline."""
from __future__ import annotations

import os
from dataclasses import dataclass

DEFAULT_CONCURRENCY = 3
DEFAULT_ASSETS_FOLDER = "assets"
MINIFIERS = ("rjsmin", "terser")

_FALSE_VALUES = {"0", "false", "no", "off"}


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return value.strip().lower() not in _FALSE_VALUES


@dataclass(frozen=True)
class PipelineConfig:
    """Options threaded through the queue, processor and reconciler."""

    concurrency: int = DEFAULT_CONCURRENCY
    gzip: bool = True
    assets_folder: str = DEFAULT_ASSETS_FOLDER
    minifier: str = "rjsmin"
    terser_bin: str = "terser"

    def __post_init__(self) -> None:
        if self.concurrency < 1:
            raise ValueError(f"concurrency must be at least 1, got {self.concurrency}")
        if self.minifier not in MINIFIERS:
            raise ValueError(f"unknown minifier {self.minifier!r}, expected one of {', '.join(MINIFIERS)}")
        if not self.assets_folder.strip("/"):
            raise ValueError("assets folder name must not be empty")

    @classmethod
    def from_env(cls) -> "PipelineConfig":
        return cls(
            concurrency=int(os.getenv("ASSET_SOURCEMAPS_THREADS") or DEFAULT_CONCURRENCY),
            gzip=_env_flag("ASSET_SOURCEMAPS_GZIP", True),
            assets_folder=os.getenv("ASSET_SOURCEMAPS_FOLDER") or DEFAULT_ASSETS_FOLDER,
            minifier=os.getenv("ASSET_SOURCEMAPS_MINIFIER") or "rjsmin",
            terser_bin=os.getenv("TERSER_BIN") or "terser",
        )
