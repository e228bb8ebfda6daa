import functools, pathlib, threading
from http.server import SimpleHTTPRequestHandler, ThreadingHTTPServer

from watchdog.events import FileSystemEventHandler
from watchdog.observers import Observer

from .errors import SiteError
from .log import log, log_start, quiet


class RebuildHandler(FileSystemEventHandler):
    """Rebuilds the site on change. One rebuild at a time, failures don't stop watching."""

    def __init__(self, site, debug=False):
        self.site = site
        self.debug = debug
        self.lock = threading.Lock()
        self.ignored = [
            pathlib.Path(site.local_output_directory),
            pathlib.Path(site.release_directory),
        ]

    def is_ignored(self, path) -> bool:
        path = pathlib.Path(path)
        return any(path.is_relative_to(d) for d in self.ignored)

    def on_any_event(self, event):
        if event.is_directory or event.event_type in ("opened", "closed", "closed_no_write"):
            return
        paths = [event.src_path, getattr(event, "dest_path", "") or event.src_path]
        if all(self.is_ignored(p) for p in paths):
            return
        log(f"Change detected: {event.event_type} {event.src_path}")
        self.rebuild()

    def rebuild(self):
        with self.lock:
            log_start("Found changes, rebuilding site ... ")
            try:
                if self.debug:
                    self.site.build()
                else:
                    with quiet():
                        self.site.build()
            except SiteError as err:
                log(f"\nError rebuilding site: {err}")
                return False
            log("done.")
            return True


class DevServer:
    def __init__(self, site, port=0, auto_build=True, debug=False):
        self.site = site
        directory = str(site.local_output_directory)
        handler = functools.partial(SimpleHTTPRequestHandler, directory=directory)
        self.httpd = ThreadingHTTPServer(("localhost", port), handler)
        self.observer = None
        if auto_build:
            self.observer = Observer()
            self.observer.schedule(RebuildHandler(site, debug), str(site.site_path), recursive=True)
        self._thread = None

    @property
    def port(self) -> int:
        return self.httpd.server_address[1]

    def start(self):
        self._thread = threading.Thread(target=self.httpd.serve_forever, daemon=True)
        self._thread.start()
        log(f"Server running on http://localhost:{self.port}")
        if self.observer:
            self.observer.start()
            log(f"Watching for changes in [{self.site.site_path}]")

    def stop(self):
        log("Shutting down http server.")
        self.httpd.shutdown()
        self.httpd.server_close()
        if self._thread:
            self._thread.join()
        if self.observer:
            log("Shutting down file watcher.")
            self.observer.stop()
            self.observer.join()
