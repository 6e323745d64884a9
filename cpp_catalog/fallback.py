"""
Curated descriptions for majors whose catalog page has no scrapable
description block.

Entries are keyed by the normalized major name produced by
:func:`cpp_catalog.scrape.clean.normalize_major_name`.
"""

from dataclasses import dataclass

# Read-only view over the fallback dict so it cannot be mutated at runtime
from types import MappingProxyType


@dataclass(frozen=True)
class FallbackEntry:
    """Manually curated description and canonical URL for one major."""

    description: str
    url: str


FALLBACK_DESCRIPTIONS = MappingProxyType({
    "Materials Engineering": FallbackEntry(
        description=(
            "Deal with developing products and processes based on understanding "
            "the structure of materials. The goal of the materials engineer is to "
            "understand the structure of materials (at the micro- or the nano "
            "level) to improve their properties and ultimately their performance. "
            "Materials engineers apply this knowledge to the production, "
            "selection, and utilization of materials. Since engineers are called "
            "upon to work with new ideas and materials, the engineering graduate "
            "with a minor in Materials Engineering is very well prepared to "
            "respond to such a challenge and thus has a career advantage."
        ),
        url="https://www.cpp.edu/engineering/cme/index.shtml",
    ),
    "Aerospace Engineering": FallbackEntry(
        description=(
            "Expand your horizons with a theoretical and experimental study of "
            "aerodynamics, astrodynamics, propulsion, flight mechanics, systems "
            "engineering and aerospace vehicle design – literal rocket science "
            "and more!   Through hands-on projects and cutting-edge research that "
            "simulate the aerospace industry, as well as internships and job "
            "placements, you will graduate with both a conceptual understanding "
            "and a portfolio of real-world accomplishments. With program emphases "
            "in aeronautics and astronautics, you can chart your course and propel "
            "yourself toward your dream career in aerospace."
        ),
        url="https://www.cpp.edu/programs/eng/aerospace-engineering/aerospace-engineering.shtml",
    ),
    "Art History": FallbackEntry(
        description=(
            "Explore the artistic legacies of historical periods, regions and "
            "cultural traditions worldwide. In Art History, you will immerse "
            "yourself in the study of production, reception and experience of "
            "art, architecture, design, mass media and other artifacts. Our "
            "program provides the flexibility to choose electives in a series of "
            "disciplines to shape your degree to your career goals."
        ),
        url="https://www.cpp.edu/programs/env/art/art-history.shtml",
    ),
    "Artificial Intelligence Ethics and Society": FallbackEntry(
        description=(
            "Address problems raised by AI’s increasingly pervasive influence "
            "on society—problems such as algorithmic bias and the question of "
            "how to address it; moral and legal responsibility for AI decision "
            "making; displacement of a wide range of human jobs from computer "
            "coding to truck driving; and the environmental impacts of AI. "
            "Effectively addressing these problems requires skill in negotiating "
            "competing values and acute sensitivity to the social and cultural "
            "contexts in which AI’s harms and benefits arise."
        ),
        url="https://www.cpp.edu/class/science-technology-society/about-page.shtml#ai-ethics",
    ),
})


def get_fallback(major_name):
    """Return the fallback entry for ``major_name``, or ``None``.

    :param major_name: Normalized major name.
    :type major_name: str
    :rtype: FallbackEntry or None
    """
    return FALLBACK_DESCRIPTIONS.get(major_name)
