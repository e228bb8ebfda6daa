"""sitesmith: a small static site builder with templates and partials."""

__version__ = "0.1.0"

from .errors import SiteError
from .site import Site
from .page import Page

__all__ = ["__version__", "SiteError", "Site", "Page"]
