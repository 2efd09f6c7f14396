"""
Response parsing and section replacement.
"""

from .parser import extract_result
from .replacer import (
    find_sections,
    collect_sections,
    plan_replacements,
    swap_content,
    replace_sections,
)

__all__ = [
    'extract_result',
    'find_sections',
    'collect_sections',
    'plan_replacements',
    'swap_content',
    'replace_sections',
]
