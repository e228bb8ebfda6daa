import os, re

from .cache import FileCache, cache_key, read_file
from .errors import PartialNotFound, PartialReadFailure
from .log import log

# partials may hold partials, callers resolve until a pass finds none
PARTIAL_PATTERN = re.compile(r"<%= partial: (?P<path>.*?) %>")


class Partial:
    def __init__(self, path):
        self.path = cache_key(path)
        self.content = read_file(self.path, PartialNotFound, PartialReadFailure)
        log(f" - loading partial: {self.path}")


class PartialResolver:
    def __init__(self, cache=None):
        self.cache = FileCache() if cache is None else cache

    def load(self, path) -> Partial:
        partial = self.cache.get(path)
        if partial is not None:
            log(f" - using cached partial: {cache_key(path)}")
            return partial
        return self.cache.put(path, Partial(path))

    def resolve(self, base_path, text):
        """Replace every partial tag in text once. Returns (count, new_text)."""

        def _insert(match):
            ref = match.group("path").strip()
            return self.load(os.path.join(base_path, ref)).content

        new_text, count = PARTIAL_PATTERN.subn(_insert, text)
        return count, new_text

    def expire(self):
        self.cache.clear()
