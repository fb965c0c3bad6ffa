# ABOUTME: Exceptions raised by the wiki layer
# ABOUTME: Transport failures stay httpx errors; these cover unexpected payloads and missing pages


class WikiError(Exception):
    """Base class for wiki layer errors."""

    pass


class WikiResponseError(WikiError):
    """Raised when an API response does not have the expected shape."""

    def __init__(self, url: str, message: str):
        super().__init__(f"Unexpected response from {url}: {message}")
        self.url = url


class PageNotFoundError(WikiError):
    """Raised when a page query returns no revision for the requested title."""

    def __init__(self, page_name: str):
        super().__init__(f"Page not found: {page_name}")
        self.page_name = page_name
