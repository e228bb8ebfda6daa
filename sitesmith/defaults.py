import pathlib

# ========= SITE FILES =========

SITE_CONFIG_FILENAME = "sitesmith.config.yml"
SCAFFOLD_DIR = pathlib.Path(__file__).parent / "scaffold"

# ========= OUTPUT (relative to site root) =========

OUTPUT_DIR = "output"
LOCAL_OUTPUT_DIR = "local"      # relative to OUTPUT_DIR
RELEASE_OUTPUT_DIR = "release"  # relative to OUTPUT_DIR
ASSETS_DIR = "assets"

# ========= PAGES =========

PAGE_EXTENSIONS = [".md", ".markdown", ".html", ".htm", ".txt"]
TEMPLATE_AND_PARTIAL_IDENTIFIER = r"^_"

# ========= RESOLUTION LIMITS =========

MAX_PARTIAL_PASSES = 100
