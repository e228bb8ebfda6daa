import pytest

from sitesmith.errors import PartialNotFound, PartialReadFailure
from sitesmith.partial import PARTIAL_PATTERN, PartialResolver


def test_resolve_replaces_every_marker_once(tmp_path):
    (tmp_path / "_a.html").write_text("A", encoding="utf-8")
    (tmp_path / "_b.html").write_text("B", encoding="utf-8")
    text = "<%= partial: _a.html %>-<%= partial: _b.html %>-<%= partial: _a.html %>"

    count, result = PartialResolver().resolve(tmp_path, text)
    assert count == 3
    assert result == "A-B-A"
    assert not PARTIAL_PATTERN.search(result)


def test_resolve_without_markers(tmp_path):
    assert PartialResolver().resolve(tmp_path, "plain") == (0, "plain")


def test_nested_partial_needs_another_pass(tmp_path):
    (tmp_path / "_outer.html").write_text("[<%= partial: _inner.html %>]", encoding="utf-8")
    (tmp_path / "_inner.html").write_text("inner", encoding="utf-8")
    resolver = PartialResolver()

    count, text = resolver.resolve(tmp_path, "<%= partial: _outer.html %>")
    assert count == 1
    assert text == "[<%= partial: _inner.html %>]"

    count, text = resolver.resolve(tmp_path, text)
    assert (count, text) == (1, "[inner]")
    assert resolver.resolve(tmp_path, text) == (0, "[inner]")


def test_reference_paths_are_relative_to_base(tmp_path):
    (tmp_path / "shared").mkdir()
    (tmp_path / "shared" / "_nav.html").write_text("nav", encoding="utf-8")
    count, text = PartialResolver().resolve(tmp_path, "<%= partial:  shared/_nav.html  %>")
    assert (count, text) == (1, "nav")


def test_absolute_reference(tmp_path):
    other = tmp_path / "elsewhere"
    other.mkdir()
    (other / "_x.html").write_text("x", encoding="utf-8")
    count, text = PartialResolver().resolve(tmp_path / "site", f"<%= partial: {other / '_x.html'} %>")
    assert (count, text) == (1, "x")


def test_load_uses_cache_until_expired(tmp_path):
    path = tmp_path / "_p.html"
    path.write_text("v1", encoding="utf-8")
    resolver = PartialResolver()
    first = resolver.load(path)
    path.write_text("v2", encoding="utf-8")
    assert resolver.load(path) is first

    resolver.expire()
    assert resolver.load(path).content == "v2"


def test_missing_partial(tmp_path):
    with pytest.raises(PartialNotFound):
        PartialResolver().resolve(tmp_path, "<%= partial: _gone.html %>")


def test_unreadable_partial(tmp_path):
    (tmp_path / "_dir.html").mkdir()
    with pytest.raises(PartialReadFailure):
        PartialResolver().load(tmp_path / "_dir.html")


def test_undecodable_partial(tmp_path):
    (tmp_path / "_bin.html").write_bytes(b"\xff\xfe\xfa")
    with pytest.raises(PartialReadFailure):
        PartialResolver().load(tmp_path / "_bin.html")
