"""
Keyword-driven amount extraction from free-form model output.

A rule set is an ordered list of categories. Each line of the text is
attributed to the first category whose keywords it mentions; the line only
counts if it also carries a dollar amount above that category's floor.
"""
import math
import re
from typing import Dict, Iterable, Optional, Tuple

from pydantic import BaseModel, ConfigDict

AMOUNT_PATTERN = re.compile(r"\$([\d,]+(?:\.\d{2})?)")


class AmountRule(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    keywords: Tuple[str, ...]
    # Values must exceed the floor to count; smaller figures are treated as noise.
    floor: float = 0.0

    def matches(self, lowered_line: str) -> bool:
        return any(keyword in lowered_line for keyword in self.keywords)


def round_half_up(value: float) -> int:
    """Round to the nearest whole unit, halves away from zero for positives."""
    return int(math.floor(value + 0.5))


def parse_amount(line: str) -> Optional[float]:
    """
    Return the first `$1,234.56`-style amount on the line, or None.
    """
    match = AMOUNT_PATTERN.search(line)
    if not match:
        return None
    digits = match.group(1).replace(",", "")
    if not digits:
        return None
    try:
        value = float(digits)
    except ValueError:
        return None
    return value if math.isfinite(value) else None


def match_rule(line: str, rules: Iterable[AmountRule]) -> Optional[AmountRule]:
    lowered = line.lower()
    for rule in rules:
        if rule.matches(lowered):
            return rule
    return None


def extract_amounts(text: str, rules: Iterable[AmountRule]) -> Dict[str, float]:
    """
    Scan `text` line by line and return the largest plausible amount per
    category. Categories that never matched are absent from the result.
    """
    rules = tuple(rules)
    found: Dict[str, float] = {}
    if not text:
        return found

    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line:
            continue
        rule = match_rule(line, rules)
        if rule is None:
            continue
        value = parse_amount(line)
        if value is None or value <= rule.floor:
            continue
        if value >= found.get(rule.name, 0.0):
            found[rule.name] = value
    return found
