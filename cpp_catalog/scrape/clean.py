"""
Name cleaning utilities for scraped catalog entries.

Normalizes raw program labels such as ``"History, B.A. - Pre-Credential"``
into display names and collapses duplicate majors within a department.
"""

# Import regular expressions for the degree suffix pattern
import re

from .scrape import College, Department, RawProgramEntry

# Trailing degree abbreviation, e.g. ", B.S." or ", B.Arch."
DEGREE_SUFFIX_RE = re.compile(r",\s*B\.[A-Za-z]+\.?")

# Separator between a major and its specialization
SPECIALIZATION_SEP = " - "

PRE_CREDENTIAL = "Pre-Credential"


def _strip_degree(name):
    """Remove the first degree suffix from ``name`` and trim whitespace.

    :param name: Raw major label, e.g. ``"Biology, B.S."``.
    :type name: str
    :returns: Label without the degree abbreviation.
    :rtype: str
    """
    return DEGREE_SUFFIX_RE.sub("", name, count=1).strip()


def normalize_major_name(raw_name):
    """Map a raw catalog label to its canonical display name.

    The label is split on the first ``" - "`` only; everything after it is
    the specialization. Rules, in order:

    1. No specialization: strip the degree suffix.
       ``"Biology, B.S."`` -> ``"Biology"``
    2. Specialization is exactly ``"Pre-Credential"``: strip the degree
       suffix and keep the qualifier.
       ``"History, B.A. - Pre-Credential"`` -> ``"History - Pre-Credential"``
    3. Specialization starts with ``"General"``: keep only the major.
       ``"Sociology, B.A. - General Sociology"`` -> ``"Sociology"``
    4. Anything else: the specialization becomes the name.
       ``"Music, B.M. - Composition"`` -> ``"Composition"``

    Labels without a degree suffix are returned trimmed, never rejected.

    :param raw_name: Program label as scraped from the listing.
    :type raw_name: str
    :returns: Normalized major name.
    :rtype: str
    """
    major_part, sep, specialization = raw_name.partition(SPECIALIZATION_SEP)

    if not sep:
        return _strip_degree(raw_name)

    specialization = specialization.strip()

    if specialization == PRE_CREDENTIAL:
        return f"{_strip_degree(major_part)} - {PRE_CREDENTIAL}"

    if specialization.startswith("General"):
        return _strip_degree(major_part)

    return specialization


def dedup_majors(majors):
    """Collapse majors that share a name, keeping the last one seen.

    Each name keeps the position of its first occurrence while the href
    comes from its last occurrence.

    :param majors: Entries for a single department, in source order.
    :type majors: list[RawProgramEntry]
    :returns: One entry per distinct name.
    :rtype: list[RawProgramEntry]
    """
    by_name = {}
    for entry in majors:
        by_name[entry.name] = entry
    return list(by_name.values())


def clean_catalog(colleges):
    """Normalize every major name and dedup within each department.

    :param colleges: Colleges as returned by
        :func:`cpp_catalog.scrape.scrape.extract_catalog`.
    :type colleges: list[College]
    :returns: New college list with cleaned majors.
    :rtype: list[College]
    """
    cleaned = []
    for college in colleges:
        departments = []
        for dept in college.departments:
            majors = [
                RawProgramEntry(name=normalize_major_name(p.name), href=p.href)
                for p in dept.majors
            ]
            departments.append(Department(name=dept.name, majors=tuple(dedup_majors(majors))))
        cleaned.append(College(name=college.name, departments=tuple(departments)))
    return cleaned
