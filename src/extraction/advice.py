"""
Summary and recommendation recovery from free-form advice text.
"""
import re
from typing import Iterable, List, Sequence

LABELLED_SUMMARY = re.compile(r"SUMMARY:\s*([\s\S]*?)(?=\n\s*\n|\nRECOMMENDATIONS:|$)")
LABELLED_RECOMMENDATIONS = re.compile(r"RECOMMENDATIONS:\s*([\s\S]+)")
BULLETS = ("•", "-", "*")


def _non_empty_lines(text: str) -> List[str]:
    return [line.strip() for line in (text or "").splitlines() if line.strip()]


def leading_summary(text: str, default: str, line_count: int = 2) -> str:
    """Join the first non-empty lines into a one-paragraph summary."""
    summary = " ".join(_non_empty_lines(text)[:line_count]).strip()
    return summary or default


def keyword_recommendations(
    text: str,
    keywords: Iterable[str],
    limit: int,
    default: Sequence[str] = (),
) -> List[str]:
    """Lines mentioning any keyword, capped at `limit`; `default` when none do."""
    keywords = tuple(keywords)
    picked = [line for line in _non_empty_lines(text) if any(k in line for k in keywords)]
    return picked[:limit] or list(default)


def labelled_summary(text: str, default: str) -> str:
    match = LABELLED_SUMMARY.search(text or "")
    if match and match.group(1).strip():
        return match.group(1).strip()
    return default


def labelled_recommendations(text: str) -> List[str]:
    match = LABELLED_RECOMMENDATIONS.search(text or "")
    if not match:
        return []
    items: List[str] = []
    for line in _non_empty_lines(match.group(1)):
        if line.startswith(BULLETS):
            item = line[1:].strip()
            if item:
                items.append(item)
    return items
