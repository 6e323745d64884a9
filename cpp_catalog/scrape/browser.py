"""
Headless browser access for the catalog pages.

The program listing is rendered client-side, so pages are loaded through
Playwright's Chromium. A :class:`BrowserSession` lives for a whole run and
hands out one :class:`PageHandle` per visited URL; both are released by
their context managers whether or not the visit succeeds.
"""

# Import os for reading browser settings from the environment
import os

from contextlib import contextmanager

# Playwright sync API; its TimeoutError is a subclass of Error
from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError
from playwright.sync_api import sync_playwright

from ..errors import ExtractionError, NavigationError

# Browser window size used for every page
VIEWPORT = {"width": 1280, "height": 1080}

# Default navigation timeout in seconds
NAV_TIMEOUT = 30


def _env_flag(name, default):
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() not in {"0", "false", "no", "off", ""}


class PageHandle:
    """Thin wrapper around a loaded Playwright page.

    Playwright failures are re-raised as :class:`NavigationError` so callers
    only deal with project exceptions.

    :param page: Loaded Playwright page.
    :type page: playwright.sync_api.Page
    """

    def __init__(self, page):
        self._page = page

    @property
    def url(self):
        """URL of the currently loaded document."""
        return self._page.url

    def wait_for(self, selector, timeout=NAV_TIMEOUT):
        """Wait until ``selector`` matches an element.

        :param selector: CSS selector to wait for.
        :type selector: str
        :param timeout: Maximum wait in seconds.
        :type timeout: float
        :returns: ``True`` if the element appeared, ``False`` on timeout.
        :rtype: bool
        :raises NavigationError: If the page fails for any other reason.
        """
        try:
            self._page.wait_for_selector(selector, timeout=timeout * 1000)
        except PlaywrightTimeoutError:
            return False
        except PlaywrightError as e:
            raise NavigationError(self.url, f"cannot wait for {selector}: {e}") from e
        return True

    def click(self, selector):
        try:
            self._page.click(selector)
        except PlaywrightError as e:
            raise NavigationError(self.url, f"cannot click {selector}: {e}") from e

    def select(self, selector, value):
        try:
            self._page.select_option(selector, value)
        except PlaywrightError as e:
            raise NavigationError(self.url, f"cannot select {value} in {selector}: {e}") from e

    def content(self):
        """Return the rendered HTML of the page.

        :rtype: str
        """
        try:
            return self._page.content()
        except PlaywrightError as e:
            raise NavigationError(self.url, str(e)) from e


class BrowserSession:
    """An open browser that loads pages on demand.

    :param browser: Launched Playwright browser.
    :type browser: playwright.sync_api.Browser
    """

    def __init__(self, browser):
        self._browser = browser

    @contextmanager
    def open_page(self, url, timeout=NAV_TIMEOUT):
        """Load ``url`` in a fresh page and close the page on exit.

        :param url: Absolute URL to load.
        :type url: str
        :param timeout: Navigation timeout in seconds.
        :type timeout: float
        :returns: Context manager yielding a :class:`PageHandle`.
        :raises NavigationError: If the page cannot be loaded in time.
        """
        page = None
        try:
            try:
                page = self._browser.new_page(viewport=VIEWPORT)
                page.goto(url, wait_until="domcontentloaded", timeout=timeout * 1000)
            except PlaywrightError as e:
                raise NavigationError(url, str(e)) from e
            yield PageHandle(page)
        finally:
            if page is not None:
                page.close()


@contextmanager
def open_browser(headless=None):
    """Launch Chromium for the duration of a ``with`` block.

    :param headless: Run without a window. Defaults to the ``CPP_HEADLESS``
        environment variable, or ``True`` if unset.
    :type headless: bool or None
    :returns: Context manager yielding a :class:`BrowserSession`.
    :raises ExtractionError: If Chromium cannot be launched.
    """
    if headless is None:
        headless = _env_flag("CPP_HEADLESS", True)

    with sync_playwright() as pw:
        try:
            browser = pw.chromium.launch(headless=headless)
        except PlaywrightError as e:
            raise ExtractionError(f"Cannot launch browser: {e}") from e
        try:
            yield BrowserSession(browser)
        finally:
            browser.close()
