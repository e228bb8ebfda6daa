import urllib.request

from watchdog.events import DirModifiedEvent, FileModifiedEvent, FileMovedEvent

from sitesmith.server import DevServer, RebuildHandler


def test_serves_output(site, write):
    write("index.html", "<p>served</p>")
    site.build()
    server = DevServer(site, 0, auto_build=False)
    server.start()
    try:
        with urllib.request.urlopen(f"http://localhost:{server.port}/index.html", timeout=5) as resp:
            assert resp.read().decode("utf-8") == "<p>served</p>"
    finally:
        server.stop()


def test_watcher_starts_and_stops(site):
    server = DevServer(site, 0, auto_build=True)
    server.start()
    server.stop()
    assert not server.observer.is_alive()


def test_changes_trigger_rebuild(site, write):
    write("index.html", "v1")
    handler = RebuildHandler(site)
    handler.on_any_event(FileModifiedEvent(str(site.site_path / "index.html")))
    assert (site.local_output_directory / "index.html").read_text(encoding="utf-8") == "v1"


def test_output_and_directory_events_are_ignored(site, monkeypatch):
    handler = RebuildHandler(site)
    calls = []
    monkeypatch.setattr(handler, "rebuild", lambda: calls.append(1))

    handler.on_any_event(FileModifiedEvent(str(site.local_output_directory / "index.html")))
    handler.on_any_event(FileModifiedEvent(str(site.release_directory / "a" / "b.html")))
    handler.on_any_event(DirModifiedEvent(str(site.site_path)))
    assert calls == []

    handler.on_any_event(FileMovedEvent(str(site.local_output_directory / "x.html"), str(site.site_path / "x.html")))
    assert calls == [1]


def test_failed_rebuild_keeps_watching(site, write, capsys):
    write("index.html", "<%= partial: _missing.html %>")
    handler = RebuildHandler(site)
    assert handler.rebuild() is False
    assert "Error rebuilding site:" in capsys.readouterr().out

    write("index.html", "fixed")
    assert handler.rebuild() is True
    assert (site.local_output_directory / "index.html").read_text(encoding="utf-8") == "fixed"


def test_rebuild_is_quiet_unless_debug(site, write, capsys):
    write("index.html", "index")
    RebuildHandler(site).rebuild()
    assert " - building page" not in capsys.readouterr().out

    RebuildHandler(site, debug=True).rebuild()
    assert " - building page: index.html" in capsys.readouterr().out
