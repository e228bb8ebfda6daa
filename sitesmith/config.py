import pathlib

import yaml

from . import defaults
from .errors import ConfigFileInvalid, ConfigFileNotFound


def config_path(site_root) -> pathlib.Path:
    return pathlib.Path(site_root) / defaults.SITE_CONFIG_FILENAME


def has_config(site_root) -> bool:
    return config_path(site_root).is_file()


def load_config(site_root) -> dict:
    cfg = config_path(site_root)
    if not cfg.is_file():
        raise ConfigFileNotFound(f"Site path [{site_root}] has no configuration.")
    try:
        data = yaml.safe_load(cfg.read_text(encoding="utf-8"))
    except yaml.YAMLError as err:
        raise ConfigFileInvalid(str(err)) from err
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigFileInvalid(str(cfg))
    return data


class SiteConfig:
    def __init__(self, site_root):
        self.site_root = pathlib.Path(site_root)
        self._config = load_config(self.site_root)

    def get(self, key, default=None):
        value = self._config.get(key)
        return default if value is None else value

    @property
    def site_name(self) -> str:
        return str(self.get("site_name", self.site_root.name))

    @property
    def output_dir(self) -> str:
        return self.get("output_dir", defaults.OUTPUT_DIR)

    @property
    def assets_dir(self) -> str:
        return self.get("assets_dir", defaults.ASSETS_DIR)

    @property
    def page_extensions(self) -> list:
        exts = self.get("page_extensions", defaults.PAGE_EXTENSIONS)
        if isinstance(exts, str):
            exts = exts.split()
        # every extension starts with a dot
        return [e if e.startswith(".") else f".{e}" for e in exts]

    @property
    def template_and_partial_identifier(self) -> str:
        return self.get("template_and_partial_identifier", defaults.TEMPLATE_AND_PARTIAL_IDENTIFIER)

    @property
    def local_port(self):
        port = self.get("local_port")
        return int(port) if port is not None else None
