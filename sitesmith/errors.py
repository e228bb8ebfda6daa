class SiteError(Exception):
    message = "Site error."

    def __init__(self, detail=""):
        detail = str(detail)
        super().__init__(f"{detail} {self.message}" if detail else self.message)


# ========= CONFIG / SITE =========

class ConfigFileNotFound(SiteError):
    message = "Could not find site config file."


class ConfigFileInvalid(SiteError):
    message = "Site config file is not a valid YAML mapping."


class SiteNotFound(SiteError):
    message = "Could not find a site config file in this directory or any parent."


class SiteDirectoryExists(SiteError):
    message = "Site folder already exists, choose a different location or use --force."


class SiteNotLoaded(SiteError):
    message = "Site not loaded."


class SiteOutputFailure(SiteError):
    message = "Failed to output site."


# ========= TEMPLATES =========

class TemplateNotFound(SiteError):
    message = "Template file not found."


class TemplateReadFailure(SiteError):
    message = "Failed to read the template file."


class TemplateCycleDetected(SiteError):
    message = "Template appears twice in one page's template chain."


class MissingTemplateDeclaration(SiteError):
    message = "Content has template sections but no template declaration."


# ========= PARTIALS =========

class PartialNotFound(SiteError):
    message = "Partial file not found."


class PartialReadFailure(SiteError):
    message = "Failed to read the partial file."


class PartialCycleDetected(SiteError):
    message = "Partials did not settle, a partial probably includes itself."


# ========= PAGES =========

class PageNotFound(SiteError):
    message = "Page file not found."


class PageReadFailure(SiteError):
    message = "Failed to read the page file."


class PageOutputFailure(SiteError):
    message = "Failed to create output page."
