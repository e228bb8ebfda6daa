import re

from .cache import FileCache, cache_key, read_file
from .errors import TemplateNotFound, TemplateReadFailure
from .log import log

# ========= TAGS =========

TEMPLATE_PATTERN = re.compile(r"<% template: (.*?) %>")
SECTION_PATTERN = re.compile(r"<% start: (.*?) %>(.*?)<% end: \1 %>", re.S)
INSERT_PATTERN = re.compile(r"<%= insert: (.*?) %>")


def declared_parent(text):
    """Path of the first template declaration in text, or None."""
    m = TEMPLATE_PATTERN.search(text)
    return m.group(1).strip() if m else None


def named_sections(text) -> dict:
    # a later section with the same name replaces an earlier one
    return {name.strip(): body.strip() for name, body in SECTION_PATTERN.findall(text)}


class Template:
    def __init__(self, path):
        self.path = cache_key(path)
        self.content = read_file(self.path, TemplateNotFound, TemplateReadFailure)
        log(f" - loading template: {self.path}")

    def expand(self, sections: dict) -> str:
        """Template content with insert tags filled; unknown names stay as they are."""

        def _fill(match):
            return sections.get(match.group(1).strip(), match.group(0))

        return INSERT_PATTERN.sub(_fill, self.content)


class TemplateResolver:
    def __init__(self, cache=None):
        self.cache = FileCache() if cache is None else cache

    def load(self, path) -> Template:
        template = self.cache.get(path)
        if template is not None:
            log(f" - using cached template: {cache_key(path)}")
            return template
        return self.cache.put(path, Template(path))

    def expire(self):
        self.cache.clear()
