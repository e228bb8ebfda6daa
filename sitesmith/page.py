import os, pathlib

from . import defaults
from .cache import cache_key, read_file
from .errors import (
    MissingTemplateDeclaration, PageNotFound, PageOutputFailure, PageReadFailure,
    PartialCycleDetected, SiteNotLoaded, TemplateCycleDetected,
)
from .log import log
from .template import declared_parent, named_sections


class Page:
    def __init__(self, site, path):
        if not site.loaded:
            raise SiteNotLoaded("Could not load a page.")
        self.site = site
        self.path = pathlib.Path(os.path.abspath(path))
        if not self.path.exists():
            raise PageNotFound(self.path)

        log("")
        log(f" - loading page: {self.name}")
        self.content = read_file(self.path, PageNotFound, PageReadFailure)
        self.parsed_content = None
        self.parse()

    @property
    def name(self) -> str:
        try:
            return self.path.relative_to(self.site.site_path).as_posix()
        except ValueError:
            return str(self.path)

    def parse(self):
        content = self.parse_for_templates(self.content)
        self.parsed_content = self.parse_for_partials(content)

    def parse_for_templates(self, content: str) -> str:
        """Expand template declarations until the content declares no parent."""
        seen = []
        while True:
            template_path = declared_parent(content)
            sections = named_sections(content)
            if sections and template_path is None:
                raise MissingTemplateDeclaration(self.name)
            if template_path is None:
                return content

            full_path = cache_key(os.path.join(self.site.site_path, template_path))
            if full_path in seen:
                chain = " -> ".join(seen + [full_path])
                raise TemplateCycleDetected(f"{self.name}: {chain}")
            seen.append(full_path)

            template = self.site.templates.load(full_path)
            content = template.expand(sections)

    def parse_for_partials(self, content: str) -> str:
        """Resolve partial tags pass after pass, partials can hold partials."""
        for _ in range(defaults.MAX_PARTIAL_PASSES):
            found, content = self.site.partials.resolve(self.site.site_path, content)
            if found == 0:
                return content
        raise PartialCycleDetected(self.name)

    def output_path(self, output_root) -> pathlib.Path:
        relative = self.path.relative_to(self.site.site_path)
        return pathlib.Path(output_root) / relative

    def build(self, output_root):
        log(f" - building page: {self.name}")
        self.parsed_content = self.parsed_content.strip()
        dest = self.output_path(output_root)
        try:
            dest.parent.mkdir(parents=True, exist_ok=True)
            with open(dest, "w", encoding="utf-8", newline="") as fh:
                fh.write(self.parsed_content)
        except OSError as err:
            raise PageOutputFailure(err) from err
        return dest
