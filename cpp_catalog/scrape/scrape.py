"""
Cal Poly Pomona catalog scraping utilities.

Loads the program listing filtered to bachelor programs and grouped by
college, parses it into colleges, departments and majors, and reads the
description paragraph from an individual major's page.
"""

# Import os for environment-based settings
import os

# Import dataclasses for the typed catalog structure
from dataclasses import dataclass

# Import urljoin to turn relative program links into absolute URLs
from urllib.parse import urljoin

# Import BeautifulSoup for HTML parsing
from bs4 import BeautifulSoup

from ..errors import DetailFetchError, ExtractionError, NavigationError

# Program listing page
PROGRAMS_URL = os.environ.get("CPP_PROGRAMS_URL", "https://www.cpp.edu/programs/index.shtml")

# id of the program-level checkbox ("type0" is bachelor)
PROGRAM_LEVEL = os.environ.get("CPP_PROGRAM_LEVEL", "type0")

# Seconds to wait for the listing structure to render
LISTING_TIMEOUT = float(os.environ.get("CPP_LISTING_TIMEOUT", "30"))

# Seconds allowed for one detail page navigation
DETAIL_TIMEOUT = float(os.environ.get("CPP_DETAIL_TIMEOUT", "20"))

# Listing selectors
COLLEGE_SELECTOR = "div.college"
COLLEGE_HEADING_SELECTOR = "h2.college-heading"
DEPT_SELECTOR = "div.dept-programs"
DEPT_HEADING_SELECTOR = "h3.dept-heading"
MAJOR_LINK_SELECTOR = (
    'ul.program-list li span[ng-show="true"] span[ng-show="true"] a.program-link'
)
VIEW_TYPE_SELECTOR = "#viewType"
VIEW_BY_COLLEGE = "byCollege"

# Description paragraph on a major's page
DESCRIPTION_SELECTOR = "p.body1.eggshell-heading-stat-box__copy"


@dataclass(frozen=True)
class RawProgramEntry:
    """A program link as it appears in the listing."""

    name: str
    href: str


@dataclass(frozen=True)
class Department:
    name: str
    majors: tuple[RawProgramEntry, ...] = ()


@dataclass(frozen=True)
class College:
    name: str
    departments: tuple[Department, ...] = ()


def clean_text(element):
    """Clean and normalize visible text from an HTML element.

    :param element: A BeautifulSoup element, or ``None``.
    :returns: Text with whitespace runs collapsed, or ``""`` if element is ``None``.
    :rtype: str
    """
    if element is None:
        return ""
    return " ".join(element.get_text(" ", strip=True).split())


def parse_catalog(html, base_url=PROGRAMS_URL):
    """Parse the rendered program listing into colleges.

    Only links nested inside two visible (``ng-show="true"``) spans are
    taken, which is how the listing marks programs matching the active
    filter. Links without an href are skipped; relative hrefs are resolved
    against ``base_url``.

    :param html: Rendered HTML of the listing page.
    :type html: str
    :param base_url: URL the listing was loaded from.
    :type base_url: str
    :returns: Colleges in page order.
    :rtype: list[College]
    """
    soup = BeautifulSoup(html, "html.parser")
    colleges = []

    for college_el in soup.select(COLLEGE_SELECTOR):
        departments = []
        for dept_el in college_el.select(DEPT_SELECTOR):
            majors = tuple(
                RawProgramEntry(name=clean_text(link), href=urljoin(base_url, link["href"].strip()))
                for link in dept_el.select(MAJOR_LINK_SELECTOR)
                if link.get("href", "").strip()
            )
            departments.append(
                Department(
                    name=clean_text(dept_el.select_one(DEPT_HEADING_SELECTOR)),
                    majors=majors,
                )
            )
        colleges.append(
            College(
                name=clean_text(college_el.select_one(COLLEGE_HEADING_SELECTOR)),
                departments=tuple(departments),
            )
        )

    return colleges


def extract_catalog(session, url=PROGRAMS_URL, level=PROGRAM_LEVEL, timeout=LISTING_TIMEOUT):
    """Load the listing, apply the level filter and college grouping, and parse it.

    :param session: Open browser session.
    :type session: cpp_catalog.scrape.browser.BrowserSession
    :param url: Listing page URL.
    :type url: str
    :param level: id of the program-level checkbox to tick.
    :type level: str
    :param timeout: Seconds to wait for each expected element.
    :type timeout: float
    :returns: Colleges with their departments and raw program entries.
    :rtype: list[College]
    :raises ExtractionError: If the page, its filter controls or the
        grouped listing are unavailable, or no college is listed.
    """
    level_selector = f"input#{level}"
    try:
        with session.open_page(url, timeout=timeout) as page:
            if not page.wait_for(level_selector, timeout=timeout):
                raise ExtractionError(f"Program level filter {level_selector} not found on {url}")
            page.click(level_selector)
            page.select(VIEW_TYPE_SELECTOR, VIEW_BY_COLLEGE)
            if not page.wait_for(COLLEGE_SELECTOR, timeout=timeout):
                raise ExtractionError(f"No college listing appeared on {url}")
            html = page.content()
            base_url = page.url or url
    except NavigationError as e:
        raise ExtractionError(str(e)) from e

    colleges = parse_catalog(html, base_url=base_url)
    if not colleges:
        raise ExtractionError(f"No colleges parsed from {url}")
    return colleges


def parse_description(html):
    """Return the description paragraph from a major's page.

    :param html: Rendered HTML of the major's page.
    :type html: str
    :returns: Whitespace-collapsed description, or ``None`` if the block is
        missing or empty.
    :rtype: str or None
    """
    soup = BeautifulSoup(html, "html.parser")
    element = soup.select_one(DESCRIPTION_SELECTOR)
    if element is None:
        return None
    # textContent semantics: join raw strings, then collapse whitespace
    text = " ".join(element.get_text().split())
    return text or None


def fetch_description(session, major_name, url, timeout=DETAIL_TIMEOUT):
    """Visit a major's page and read its description.

    :param session: Open browser session.
    :type session: cpp_catalog.scrape.browser.BrowserSession
    :param major_name: Normalized major name, used in error messages.
    :type major_name: str
    :param url: Absolute URL of the major's page.
    :type url: str
    :param timeout: Navigation timeout in seconds.
    :type timeout: float
    :returns: Description text, or ``None`` if the page has none.
    :rtype: str or None
    :raises DetailFetchError: If the page cannot be loaded or read.
    """
    try:
        with session.open_page(url, timeout=timeout) as page:
            html = page.content()
    except NavigationError as e:
        raise DetailFetchError(major_name, e.reason) from e
    return parse_description(html)
