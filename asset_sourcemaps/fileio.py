"""Async file helpers used at every pipeline step."""
from __future__ import annotations

import gzip
import shutil
from pathlib import Path

import aiofiles


async def read_text(path: Path) -> str:
    async with aiofiles.open(path, "r", encoding="utf-8", newline="") as handle:
        return await handle.read()


async def write_text(path: Path, text: str) -> None:
    async with aiofiles.open(path, "w", encoding="utf-8", newline="") as handle:
        await handle.write(text)


async def read_bytes(path: Path) -> bytes:
    async with aiofiles.open(path, "rb") as handle:
        return await handle.read()


async def write_bytes(path: Path, data: bytes) -> None:
    async with aiofiles.open(path, "wb") as handle:
        await handle.write(data)


def gzip_file(source: Path, dest: Path) -> None:
    """Stream ``source`` into a gzip file at ``dest``. Blocking."""
    with source.open("rb") as src, gzip.open(dest, "wb") as dst:
        shutil.copyfileobj(src, dst)
