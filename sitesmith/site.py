import os, re, shutil, tempfile, pathlib

import yaml
from jinja2 import Environment, FileSystemLoader, select_autoescape

from . import defaults
from .config import SiteConfig, has_config
from .errors import SiteDirectoryExists, SiteNotFound, SiteNotLoaded, SiteOutputFailure
from .log import log, log_start
from .page import Page
from .partial import PartialResolver
from .template import TemplateResolver


class Site:
    def __init__(self):
        self.site_path = None
        self.config = None
        self.loaded = False
        self.releasing = False
        # cleared at the start of every page build
        self.templates = TemplateResolver()
        self.partials = PartialResolver()

    # ========= LOADING =========

    def load(self, path):
        """Find the site config in path or the nearest parent and load it."""
        start = pathlib.Path(os.path.abspath(path))
        log_start(f"Loading site from path {start} ... ")
        for candidate in [start, *start.parents]:
            if has_config(candidate):
                self.site_path = candidate
                self.config = SiteConfig(candidate)
                self.loaded = True
                break
        else:
            raise SiteNotFound(f"{start} is not and is not in a site.")
        log("done.")
        log(f"Found site at path {self.site_path} as {self.site_name}.")
        return self

    def create(self, path, force=False):
        """Create a new site from the bundled scaffold and load it."""
        site_path = pathlib.Path(os.path.abspath(path))
        if site_path.exists() and not force:
            raise SiteDirectoryExists(site_path)

        log_start(f"Creating site folder: {site_path} ... ")
        site_path.mkdir(parents=True, exist_ok=True)
        log("done.")

        env = Environment(
            loader=FileSystemLoader(str(defaults.SCAFFOLD_DIR)),
            autoescape=select_autoescape(["html"]),
            keep_trailing_newline=True,
        )
        env.filters["yaml"] = yaml_scalar
        ctx = {"site_name": site_path.name}
        for name in env.list_templates():
            dest = site_path / name
            if dest.exists():
                log(f" - skipping existing file: {name}")
                continue
            log(f" - creating: {name}")
            dest.parent.mkdir(parents=True, exist_ok=True)
            dest.write_text(env.get_template(name).render(**ctx), encoding="utf-8")

        self.site_path = site_path
        self.config = SiteConfig(site_path)
        self.loaded = True

        log_start("Creating assets and output folders ... ")
        self.assets_directory.mkdir(parents=True, exist_ok=True)
        self.local_output_directory.mkdir(parents=True, exist_ok=True)
        self.release_directory.mkdir(parents=True, exist_ok=True)
        log("done.")
        return self

    def _require_loaded(self, action):
        if not self.loaded:
            raise SiteNotLoaded(f"Could not {action}.")

    # ========= PATHS =========

    @property
    def site_name(self) -> str:
        return self.config.site_name if self.config else os.path.basename(self.site_path or "")

    @property
    def local_output_directory(self) -> pathlib.Path:
        return self.site_path / self.config.output_dir / defaults.LOCAL_OUTPUT_DIR

    @property
    def release_directory(self) -> pathlib.Path:
        return self.site_path / self.config.output_dir / defaults.RELEASE_OUTPUT_DIR

    @property
    def output_directory(self) -> pathlib.Path:
        """Where the current build writes: release folder while releasing."""
        return self.release_directory if self.releasing else self.local_output_directory

    @property
    def assets_directory(self) -> pathlib.Path:
        return self.site_path / self.config.assets_dir

    # ========= BUILD =========

    def page_files(self) -> list:
        """Page files under the site root, minus templates, partials and output."""
        self._require_loaded("find pages")
        exts = set(self.config.page_extensions)
        ignore = re.compile(self.config.template_and_partial_identifier)
        skip_dirs = [self.local_output_directory, self.release_directory]

        files = []
        for path in self.site_path.rglob("*"):
            if not path.is_file() or path.suffix not in exts:
                continue
            if is_hidden(path.relative_to(self.site_path)):
                continue
            if ignore.search(path.name):
                continue
            if any(path.is_relative_to(d) for d in skip_dirs):
                continue
            files.append(path)
        return sorted(files)

    def build(self):
        """Build pages then assets; publishing pages empties the output folder."""
        self._require_loaded("build the site")
        self.build_pages()
        self.build_assets()

    def build_pages(self):
        self._require_loaded("build pages")

        self.templates.expire()
        self.partials.expire()

        page_files = self.page_files()
        where = "for release" if self.releasing else "locally"
        log(f"Building {len(page_files)} {self.site_name} pages {where}")

        with tempfile.TemporaryDirectory() as tmp_dir:
            for page_file in page_files:
                Page(self, page_file).build(tmp_dir)
            log(f"\nDone building {len(page_files)} pages for {self.site_name}")

            destination = self.output_directory
            try:
                log_start(f"Clearing site output folder {destination} ... ")
                clear_directory(destination)
                log("done.")

                log_start(f"Outputting site to {destination} ... ")
                shutil.copytree(tmp_dir, destination, dirs_exist_ok=True)
                log("done.")
            except OSError as err:
                raise SiteOutputFailure(err) from err

    def build_assets(self):
        self._require_loaded("build assets")

        assets_dir = self.assets_directory
        output_assets_dir = self.output_directory / assets_dir.relative_to(self.site_path)
        where = "for release" if self.releasing else "locally"
        log(f"Building {self.site_name} assets {where}\n")

        if not assets_dir.is_dir():
            log(f"No assets folder at {assets_dir}, nothing to copy.")
            return

        for asset in sorted(assets_dir.rglob("*")):
            relative = asset.relative_to(assets_dir)
            if asset.is_dir() or is_hidden(relative):
                continue
            dest = output_assets_dir / relative
            if dest.exists():
                log(f" - skipping asset: {relative.as_posix()}")
                continue
            log(f" - processing asset: {relative.as_posix()}")
            try:
                dest.parent.mkdir(parents=True, exist_ok=True)
                shutil.copy(asset, dest)
            except OSError as err:
                raise SiteOutputFailure(err) from err
        log(f"\nDone building assets for {self.site_name}")

    def release(self):
        """Full build into the release folder."""
        self._require_loaded("release the site")
        self.releasing = True
        try:
            self.build()
        finally:
            self.releasing = False


def yaml_scalar(value) -> str:
    return yaml.safe_dump(value, default_style='"', width=float("inf")).strip()


def is_hidden(relative) -> bool:
    return any(part.startswith(".") for part in relative.parts)


def clear_directory(path):
    """Remove everything inside path, creating it if missing."""
    path = pathlib.Path(path)
    path.mkdir(parents=True, exist_ok=True)
    for child in path.iterdir():
        if child.is_dir() and not child.is_symlink():
            shutil.rmtree(child)
        else:
            child.unlink()
