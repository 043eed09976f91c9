"""Path conventions for assets under ``<root>/public/<assets folder>``.

Every artifact of an asset is derived from its path by a fixed suffix
substitution::

    app-<hash>.js       minified output (overwrites the compiled file)
    app-<hash>.orig.js  untouched compiled source
    app-<hash>.js.map   source map
    app-<hash>.js.gz    gzip copy of the minified output
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path

from .config import DEFAULT_ASSETS_FOLDER

JS_SUFFIX = ".js"
ORIGINAL_SUFFIX = ".orig.js"
SOURCEMAP_SUFFIX = ".js.map"
GZIP_SUFFIX = ".js.gz"
MARKER_TAG = "//# sourceMappingURL="

FINGERPRINT_RE = re.compile(r"[0-9a-fA-F]{32}")
PUBLIC_PREFIX_RE = re.compile(r"^((\./)?public/)?")


def _swap_suffix(path: Path, old: str, new: str) -> Path:
    if not path.name.endswith(old):
        raise ValueError(f"{path} does not end with {old}")
    return path.with_name(path.name[: -len(old)] + new)


def original_path(path: Path) -> Path:
    return _swap_suffix(path, JS_SUFFIX, ORIGINAL_SUFFIX)


def sourcemap_path(path: Path) -> Path:
    return _swap_suffix(path, JS_SUFFIX, SOURCEMAP_SUFFIX)


def gzip_path(path: Path) -> Path:
    return _swap_suffix(path, JS_SUFFIX, GZIP_SUFFIX)


def asset_path_for_original(path: Path) -> Path:
    return _swap_suffix(path, ORIGINAL_SUFFIX, JS_SUFFIX)


def is_candidate(path: Path) -> bool:
    """Compiled JavaScript that is not one of our preserved originals."""
    return path.name.endswith(JS_SUFFIX) and not path.name.endswith(ORIGINAL_SUFFIX)


def is_fingerprinted(path: Path) -> bool:
    return FINGERPRINT_RE.search(path.name) is not None


def marker(map_url: str) -> str:
    return "\n" + MARKER_TAG + map_url


def has_marker(content: str, map_url: str) -> bool:
    return content.endswith(marker(map_url))


@dataclass(frozen=True)
class AssetLayout:
    root: Path
    assets_folder: str = DEFAULT_ASSETS_FOLDER

    @property
    def public_dir(self) -> Path:
        return self.root / "public"

    @property
    def assets_dir(self) -> Path:
        return self.public_dir / self.assets_folder.strip("/")

    @property
    def _prefix_re(self) -> re.Pattern[str]:
        folders = sorted({DEFAULT_ASSETS_FOLDER, self.assets_folder.strip("/")}, key=len, reverse=True)
        return re.compile(r"\.?/?public/(" + "|".join(re.escape(folder) for folder in folders) + ")/")

    def site_path(self, path: Path) -> str:
        """Absolute URL path under which the web server exposes ``path``."""
        try:
            return "/" + path.relative_to(self.public_dir).as_posix()
        except ValueError:
            return PUBLIC_PREFIX_RE.sub("/", path.as_posix(), count=1)

    def source_name(self, path: Path) -> str:
        try:
            return path.relative_to(self.root).as_posix()
        except ValueError:
            return path.as_posix()

    def rewrite(self, text: str) -> str:
        """Turn build-time ``public/assets/`` and ``public/<folder>/`` paths into site URLs."""
        return self._prefix_re.sub(r"/\1/", text)

    def marker_for(self, path: Path) -> str:
        """The source map reference appended to the minified ``path``."""
        return marker(self.site_path(sourcemap_path(path)))
