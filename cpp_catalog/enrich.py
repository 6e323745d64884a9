"""
Description enrichment for cleaned catalog majors.

Visits every major's page one at a time, reads its description, and falls
back to the curated table or the ``"N/A"`` sentinel when nothing usable is
found. A failed visit is logged and never stops the remaining majors.
"""

import logging

from dataclasses import asdict, dataclass

from .errors import DetailFetchError
from .fallback import get_fallback
from .scrape.scrape import fetch_description

logger = logging.getLogger(__name__)

# Stored when neither the page nor the fallback table has a description
MISSING_DESCRIPTION = "N/A"


@dataclass(frozen=True)
class MajorRecord:
    """One flattened, enriched row of the catalog."""

    college: str
    department: str
    major: str
    url: str
    description: str

    def as_dict(self):
        return asdict(self)


def resolve_description(major_name, url, description):
    """Apply the fallback table and sentinel to a scraped description.

    :param major_name: Normalized major name.
    :type major_name: str
    :param url: URL the major was scraped from.
    :type url: str
    :param description: Scraped description, or ``None`` if absent.
    :type description: str or None
    :returns: Final ``(url, description)`` pair; the description is never empty.
    :rtype: tuple[str, str]
    """
    if not description:
        fallback = get_fallback(major_name)
        if fallback is not None:
            description = fallback.description
            url = fallback.url or url

    return url, description or MISSING_DESCRIPTION


def enrich_catalog(session, colleges, fetch=fetch_description):
    """Produce one :class:`MajorRecord` per cleaned major.

    :param session: Open browser session passed through to ``fetch``.
    :type session: cpp_catalog.scrape.browser.BrowserSession
    :param colleges: Cleaned colleges from
        :func:`cpp_catalog.scrape.clean.clean_catalog`.
    :type colleges: list[cpp_catalog.scrape.scrape.College]
    :param fetch: Callable ``(session, major_name, url) -> str | None``
        that raises :class:`DetailFetchError` on failure.
    :returns: Records in college, department, major order.
    :rtype: list[MajorRecord]
    """
    results = []
    for college in colleges:
        for dept in college.departments:
            for major in dept.majors:
                description = None
                try:
                    description = fetch(session, major.name, major.href)
                except DetailFetchError as e:
                    logger.warning("Failed to fetch %s: %s", e.major, e.reason)

                url, description = resolve_description(major.name, major.href, description)
                results.append(
                    MajorRecord(
                        college=college.name,
                        department=dept.name,
                        major=major.name,
                        url=url,
                        description=description,
                    )
                )
    return results
