"""Typed exception hierarchy for the collaborators around the core.

The résumé extractor and the markup cloner never raise; these are for the
document reader, the fetcher, the template store and the pipeline flows.
"""


class FolioError(Exception):
    """Base exception for all resume2folio errors."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.details = details or {}


class DocumentReadError(FolioError):
    """Raised when an uploaded document cannot be turned into text."""

    def __init__(self, path: str, reason: str = ""):
        msg = f"Could not read document: {path}"
        if reason:
            msg += f" ({reason})"
        super().__init__(msg, {"path": path, "reason": reason})
        self.path = path


class FetchError(FolioError):
    """Raised when a remote page cannot be fetched."""

    def __init__(self, url: str, reason: str):
        super().__init__(f"Could not fetch the website: {reason}", {"url": url})
        self.url = url


class InvalidUrlError(FetchError):
    """Raised for URLs that are not absolute http(s) URLs."""

    def __init__(self, url: str):
        FolioError.__init__(
            self, "Please enter a valid URL (https://...)", {"url": url}
        )
        self.url = url


class InputTooLargeError(FolioError):
    """Raised when a résumé or page exceeds the configured size cap."""

    def __init__(self, size: int, limit: int):
        super().__init__(
            f"Input of {size} bytes exceeds the {limit} byte limit",
            {"size": size, "limit": limit},
        )


class TemplateNotFoundError(FolioError):
    """Raised when a named template has no directory on disk."""

    def __init__(self, name: str):
        super().__init__(f"Template not found: {name}", {"template": name})
        self.name = name


class TemplateRenderError(FolioError):
    """Raised when template markup cannot be compiled or rendered."""


class ValidationError(FolioError):
    """Raised when a generation payload is missing required fields."""
