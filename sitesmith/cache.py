import os


def cache_key(path) -> str:
    return os.path.abspath(os.fspath(path))


class FileCache:
    """
    Holds loaded file objects by absolute path until clear() is called.

    Two references that normalise to the same absolute path share an entry.
    """

    def __init__(self):
        self._entries = {}

    def get(self, path):
        return self._entries.get(cache_key(path))

    def put(self, path, entry):
        self._entries[cache_key(path)] = entry
        return entry

    def clear(self):
        self._entries = {}

    def __contains__(self, path):
        return cache_key(path) in self._entries

    def __len__(self):
        return len(self._entries)


def read_file(path, not_found, read_failure) -> str:
    """Read a source file, raising the caller's error kinds on failure."""
    if not os.path.exists(path):
        raise not_found(path)
    try:
        with open(path, encoding="utf-8", newline="") as fh:
            return fh.read()
    except (OSError, UnicodeDecodeError) as err:
        raise read_failure(err) from err
