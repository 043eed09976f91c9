"""Minify compiled assets, write source maps and reuse output for duplicates."""

__version__ = "0.1.0"

from .config import PipelineConfig
from .layout import AssetLayout
from .matcher import ContentMatcher
from .minifier import MinifiedResult, Minifier, RjsminMinifier, TerserMinifier
from .pipeline import AssetPipeline
from .processor import FileProcessor
from .reconciler import DuplicateReconciler
from .report import FileOutcome, RunReport, Status
from .work_queue import WorkQueue

__all__ = [
    "AssetLayout",
    "AssetPipeline",
    "ContentMatcher",
    "DuplicateReconciler",
    "FileOutcome",
    "FileProcessor",
    "MinifiedResult",
    "Minifier",
    "PipelineConfig",
    "RjsminMinifier",
    "RunReport",
    "Status",
    "TerserMinifier",
    "WorkQueue",
]
