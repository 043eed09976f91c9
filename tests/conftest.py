"""Shared fixtures for the asset pipeline tests."""

import json
import sys
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from asset_sourcemaps.errors import MinificationError
from asset_sourcemaps.minifier import MinifiedResult

FINGERPRINT = "0123456789abcdef0123456789abcdef"


class FakeMinifier:
    """Collapses whitespace and records the source name in code and map."""

    def __init__(self):
        self.calls = []
        self.fail_on = set()

    def minify(self, source, *, source_name, map_url):
        self.calls.append(source_name)
        if any(fragment in source_name for fragment in self.fail_on):
            raise MinificationError(source_name, "unexpected token")
        code = f"/*{source_name}*/" + " ".join(source.split())
        source_map = json.dumps(
            {"version": 3, "file": map_url.rsplit("/", 1)[-1][: -len(".map")], "sources": [source_name], "mappings": ""}
        )
        return MinifiedResult(code=code, map=source_map)


@pytest.fixture
def fake_minifier():
    return FakeMinifier()


@pytest.fixture
def project(tmp_path: Path) -> Path:
    (tmp_path / "public" / "assets").mkdir(parents=True)
    return tmp_path


@pytest.fixture
def write_asset(project: Path):
    def _write(name: str, content: str) -> Path:
        path = project / "public" / "assets" / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
        return path

    return _write
