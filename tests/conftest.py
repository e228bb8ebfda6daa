import pathlib

import pytest

from sitesmith.site import Site


@pytest.fixture
def site_root(tmp_path) -> pathlib.Path:
    root = tmp_path / "site"
    root.mkdir()
    (root / "sitesmith.config.yml").write_text("site_name: test site\n", encoding="utf-8")
    return root


@pytest.fixture
def write(site_root):
    def _write(relative, text):
        path = site_root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        return path
    return _write


@pytest.fixture
def site(site_root):
    return Site().load(site_root)
