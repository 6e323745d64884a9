"""
Exception types raised by the catalog pipeline.

``ExtractionError`` and ``PersistenceError`` are fatal and abort the run.
``DetailFetchError`` is raised for a single major and is handled by the
enricher without stopping the run.
"""


class CatalogError(Exception):
    """Base class for every error raised by :mod:`cpp_catalog`."""


class NavigationError(CatalogError):
    """A browser navigation failed or timed out.

    :param url: URL that could not be loaded.
    :type url: str
    :param reason: Underlying failure message.
    :type reason: str
    """

    def __init__(self, url, reason):
        self.url = url
        self.reason = reason
        super().__init__(f"Navigation to {url} failed: {reason}")


class ExtractionError(CatalogError):
    """The program listing could not be obtained from the catalog page."""


class DetailFetchError(CatalogError):
    """A major's detail page could not be fetched or parsed.

    :param major: Normalized name of the major.
    :type major: str
    :param reason: Underlying failure message.
    :type reason: str
    """

    def __init__(self, major, reason):
        self.major = major
        self.reason = reason
        super().__init__(f"Failed to fetch {major}: {reason}")


class PersistenceError(CatalogError):
    """Writing the catalog to the database failed."""
