"""
Replacement of access-controlled sections in the live page.

Sections are matched by their ``i-amp-access-id`` attribute. The matching is
a pure function over ids; applying it swaps the children of each live section
for copies of its counterpart's children, keeping the live element itself.
"""

import copy
import logging
from typing import Dict, Iterable, List, Mapping

from bs4 import BeautifulSoup
from bs4.element import Tag

from ..core.types import SECTION_ID_ATTR, SectionId


logger = logging.getLogger(__name__)


def find_sections(document: BeautifulSoup) -> List[Tag]:
    """All elements carrying a section id, in document order."""
    return document.find_all(attrs={SECTION_ID_ATTR: True})


def collect_sections(document: BeautifulSoup) -> Dict[SectionId, Tag]:
    """Map each section id to its first element in the document."""
    sections: Dict[SectionId, Tag] = {}
    for element in find_sections(document):
        sections.setdefault(element[SECTION_ID_ATTR], element)
    return sections


def plan_replacements(live_ids: Iterable[SectionId],
                      response_sections: Mapping[SectionId, Tag]) -> Dict[SectionId, Tag]:
    """Restrict the response sections to ids present in the live page."""
    plan: Dict[SectionId, Tag] = {}
    for section_id in live_ids:
        if section_id in response_sections:
            plan[section_id] = response_sections[section_id]
    return plan


def swap_content(target: Tag, source: Tag) -> None:
    """Replace the children of ``target`` with copies of the children of ``source``."""
    target.clear()
    for child in source.contents:
        target.append(copy.copy(child))


async def replace_sections(live_document: BeautifulSoup,
                           response_document: BeautifulSoup) -> List[SectionId]:
    """
    Fill live sections with the matching sections of the response.

    Args:
        live_document: The page being updated in place
        response_document: Document returned by the authorization service

    Returns:
        Ids of the sections that were replaced, in live document order
    """
    live_sections = find_sections(live_document)
    plan = plan_replacements(
        (element[SECTION_ID_ATTR] for element in live_sections),
        collect_sections(response_document),
    )

    replaced: List[SectionId] = []
    for element in live_sections:
        section_id = element[SECTION_ID_ATTR]
        source = plan.get(section_id)
        if source is None:
            logger.debug(f"Section not found in response: {section_id}")
            continue
        swap_content(element, source)
        replaced.append(section_id)

    logger.info(f"Replaced {len(replaced)} of {len(live_sections)} access sections")
    return replaced
