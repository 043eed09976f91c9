"""Map raw compiled content back to the fingerprinted file it came from."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Iterable, Optional

from .fileio import read_bytes

logger = logging.getLogger(__name__)


class ContentMatcher:
    """Exact-content index over preserved ``.orig.js`` files.

    Two originals with identical bytes share one key; the one added last
    wins.
    """

    def __init__(self) -> None:
        self._by_content: Dict[bytes, Path] = {}

    def __len__(self) -> int:
        return len(self._by_content)

    def add(self, content: bytes, original: Path) -> None:
        previous = self._by_content.get(content)
        if previous is not None and previous != original:
            logger.debug("%s has the same content as %s, keeping %s", original, previous, original)
        self._by_content[content] = original

    def find(self, content: bytes) -> Optional[Path]:
        return self._by_content.get(content)

    @classmethod
    async def from_originals(cls, originals: Iterable[Path]) -> "ContentMatcher":
        matcher = cls()
        for original in originals:
            try:
                content = await read_bytes(original)
            except FileNotFoundError:
                logger.debug("No preserved original at %s", original)
                continue
            except OSError as exc:
                logger.warning("Could not read original %s: %s", original, exc)
                continue
            matcher.add(content, original)
        return matcher
