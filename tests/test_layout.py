from pathlib import Path

import pytest

from asset_sourcemaps import layout
from asset_sourcemaps.layout import AssetLayout

from conftest import FINGERPRINT


def test_artifact_paths_are_derived_by_suffix():
    path = Path("public/assets/app.js")
    assert layout.original_path(path) == Path("public/assets/app.orig.js")
    assert layout.sourcemap_path(path) == Path("public/assets/app.js.map")
    assert layout.gzip_path(path) == Path("public/assets/app.js.gz")
    assert layout.asset_path_for_original(Path("public/assets/app.orig.js")) == path


def test_derivation_rejects_other_suffixes():
    with pytest.raises(ValueError):
        layout.original_path(Path("public/assets/app.css"))


def test_site_path_is_relative_to_public_dir(tmp_path: Path):
    asset_layout = AssetLayout(tmp_path)
    map_path = tmp_path / "public" / "assets" / "nested" / "app.js.map"
    assert asset_layout.site_path(map_path) == "/assets/nested/app.js.map"


def test_site_path_with_relative_root():
    asset_layout = AssetLayout(Path("."))
    assert asset_layout.site_path(Path("./public/assets/app.js.map")) == "/assets/app.js.map"


def test_site_path_outside_public_strips_prefix():
    asset_layout = AssetLayout(Path("/srv/site"))
    assert asset_layout.site_path(Path("public/assets/app.js.map")) == "/assets/app.js.map"


def test_rewrite_replaces_every_prefix_variant():
    asset_layout = AssetLayout(Path("."))
    text = "a public/assets/foo.js b ./public/assets/bar.js c /public/assets/baz.js"
    rewritten = asset_layout.rewrite(text)
    assert rewritten == "a /assets/foo.js b /assets/bar.js c /assets/baz.js"
    assert "public/assets/" not in rewritten


def test_rewrite_follows_assets_folder():
    asset_layout = AssetLayout(Path("."), "packs")
    assert asset_layout.rewrite("public/packs/a.js ./public/assets/b.js") == "/packs/a.js /assets/b.js"
    assert asset_layout.assets_dir == Path("public/packs")


def test_source_name_is_relative_to_root(tmp_path: Path):
    asset_layout = AssetLayout(tmp_path)
    assert asset_layout.source_name(tmp_path / "public" / "assets" / "app.orig.js") == "public/assets/app.orig.js"


@pytest.mark.parametrize(
    "name, candidate, fingerprinted",
    [
        (f"application-{FINGERPRINT}.js", True, True),
        ("application.js", True, False),
        (f"application-{FINGERPRINT}.orig.js", False, True),
        ("application.js.map", False, False),
        ("application-abc123.js", True, False),
    ],
)
def test_classification(name, candidate, fingerprinted):
    path = Path("public/assets") / name
    assert layout.is_candidate(path) is candidate
    assert layout.is_fingerprinted(path) is fingerprinted


def test_marker_detection():
    content = "var a=1;" + layout.marker("/assets/app.js.map")
    assert content.endswith("\n//# sourceMappingURL=/assets/app.js.map")
    assert layout.has_marker(content, "/assets/app.js.map")
    assert not layout.has_marker(content, "/assets/other.js.map")
    assert not layout.has_marker("var a=1;\n//# sourceMappingURL=app.js.map", "/assets/app.js.map")


def test_marker_must_be_trailing():
    content = "var a=1;\n//# sourceMappingURL=/assets/app.js.map\nvar b=2;"
    assert not layout.has_marker(content, "/assets/app.js.map")


def test_marker_for_uses_site_path(tmp_path):
    asset_layout = AssetLayout(tmp_path)
    script = tmp_path / "public" / "assets" / f"app-{FINGERPRINT}.js"
    assert asset_layout.marker_for(script) == f"\n//# sourceMappingURL=/assets/app-{FINGERPRINT}.js.map"
