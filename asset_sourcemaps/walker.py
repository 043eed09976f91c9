"""Directory listing for the assets tree."""
from __future__ import annotations

from pathlib import Path
from typing import List


def find_nested_files(directory: Path) -> List[Path]:
    """Return every regular file below ``directory`` in sorted order."""
    if not directory.is_dir():
        raise NotADirectoryError(f"Not a directory: {directory}")
    return [path for path in sorted(directory.rglob("*")) if path.is_file()]
