"""JavaScript minifiers producing code plus a source map."""
from __future__ import annotations

import json
import os
import re
import subprocess
import tempfile
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import Protocol

import rjsmin

from .config import PipelineConfig
from .errors import MinificationError

TRAILING_MAP_COMMENT_RE = re.compile(r"\n?//[#@] sourceMappingURL=[^\n]*\s*\Z")


@dataclass
class MinifiedResult:
    code: str
    map: str


class Minifier(Protocol):
    def minify(self, source: str, *, source_name: str, map_url: str) -> MinifiedResult:
        ...


def _output_name(map_url: str) -> str:
    name = PurePosixPath(map_url).name
    return name[: -len(".map")] if name.endswith(".map") else name


class RjsminMinifier:
    """Minify with rjsmin.

    rjsmin does not track token positions, so the map it gets here carries
    the source name and content with empty mappings.
    """

    def __init__(self, keep_bang_comments: bool = False) -> None:
        self.keep_bang_comments = keep_bang_comments

    def minify(self, source: str, *, source_name: str, map_url: str) -> MinifiedResult:
        try:
            code = rjsmin.jsmin(source, keep_bang_comments=self.keep_bang_comments)
        except Exception as exc:
            raise MinificationError(source_name, str(exc)) from exc
        source_map = {
            "version": 3,
            "file": _output_name(map_url),
            "sources": [source_name],
            "sourcesContent": [source],
            "names": [],
            "mappings": "",
        }
        return MinifiedResult(code=code, map=json.dumps(source_map, separators=(",", ":")))


class TerserMinifier:
    """Minify with the ``terser`` command line tool."""

    def __init__(self, binary: str = "terser", extra_args: list[str] | None = None) -> None:
        self.binary = binary
        self.extra_args = list(extra_args or [])

    def minify(self, source: str, *, source_name: str, map_url: str) -> MinifiedResult:
        with tempfile.TemporaryDirectory(prefix="asset-sourcemaps-") as workdir:
            # Mirror the project-relative name so terser records it in "sources".
            source_file = Path(workdir, *PurePosixPath(source_name).parts)
            source_file.parent.mkdir(parents=True, exist_ok=True)
            source_file.write_text(source, encoding="utf-8")
            output = Path(workdir, _output_name(map_url) or "out.js")
            map_file = output.with_name(output.name + ".map")

            args = [
                self.binary,
                source_name,
                "--compress",
                "--mangle",
                "--source-map",
                f"filename='{output.name}'",
                "--output",
                str(output),
                *self.extra_args,
            ]
            try:
                subprocess.run(
                    args,
                    cwd=workdir,
                    check=True,
                    capture_output=True,
                    text=True,
                    env={**os.environ, "NO_COLOR": "1"},
                )
            except FileNotFoundError as exc:
                raise MinificationError(source_name, f"{self.binary} not found") from exc
            except subprocess.CalledProcessError as exc:
                message = (exc.stderr or "").strip() or f"exit status {exc.returncode}"
                raise MinificationError(source_name, message) from exc

            code = TRAILING_MAP_COMMENT_RE.sub("", output.read_text(encoding="utf-8"))
            return MinifiedResult(code=code, map=map_file.read_text(encoding="utf-8"))


def build_minifier(config: PipelineConfig) -> Minifier:
    if config.minifier == "terser":
        return TerserMinifier(config.terser_bin)
    return RjsminMinifier()
