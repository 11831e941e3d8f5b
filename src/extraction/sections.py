"""
Positional mapping of numbered sections onto local-expert categories.

The local-expert prompt enumerates LOCAL_EXPERT_SECTIONS in this exact order
and the parser assigns the Nth numbered section of the reply to the Nth
category. Nothing matches on content, so any change to the prompt's list must
bump SECTIONS_VERSION and keep both sides in lockstep.
"""
import re
from typing import Dict, List, Tuple

from models.schemas import LocalRecommendations

SECTIONS_VERSION = 1

# (field name, heading used in the prompt)
LOCAL_EXPERT_SECTIONS: Tuple[Tuple[str, str], ...] = (
    ("hidden_gems", "Hidden gems and local favorites"),
    ("customs", "Cultural customs and etiquette"),
    ("transportation", "Local transportation tips"),
    ("dining", "Food and dining recommendations"),
    ("safety", "Safety considerations"),
    ("seasonal", "Seasonal considerations"),
    ("events", "Local festivals or events during the visit"),
    ("timing", "Best times for popular attractions"),
    ("language", "Local phrases and communication tips"),
    ("shopping", "Shopping and souvenirs"),
)

NUMBERED_MARKER = re.compile(r"\d+\.")


def split_numbered_sections(text: str) -> List[List[str]]:
    """Split on `N.` markers; each non-empty fragment becomes its trimmed lines."""
    sections: List[List[str]] = []
    for fragment in NUMBERED_MARKER.split(text or ""):
        lines = [line.strip() for line in fragment.splitlines() if line.strip()]
        if lines:
            sections.append(lines)
    return sections


def parse_recommendations(text: str) -> LocalRecommendations:
    """
    Assign sections to categories by position. Missing trailing sections stay
    empty and extra sections are dropped.
    """
    sections = split_numbered_sections(text)
    values: Dict[str, List[str]] = {}
    for (field, _heading), lines in zip(LOCAL_EXPERT_SECTIONS, sections):
        values[field] = lines
    return LocalRecommendations(**values)
