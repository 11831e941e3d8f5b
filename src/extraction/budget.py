import logging
from typing import Dict, Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from extraction.text import AmountRule, extract_amounts, round_half_up
from models.schemas import BudgetBreakdown

logger = logging.getLogger(__name__)

CATEGORIES: Tuple[str, ...] = (
    "accommodation",
    "activities",
    "transportation",
    "food",
    "miscellaneous",
)
TOTAL = "total"


def default_amount_rules() -> Tuple[AmountRule, ...]:
    # First matching rule claims the line, so keep the total rule last.
    return (
        AmountRule(name="accommodation", keywords=("accommodation", "hotel", "lodging"), floor=50),
        AmountRule(name="activities", keywords=("activities", "attractions", "tours"), floor=20),
        AmountRule(name="transportation", keywords=("transportation", "transport"), floor=10),
        AmountRule(name="food", keywords=("food", "dining", "meals"), floor=20),
        AmountRule(name="miscellaneous", keywords=("miscellaneous", "other", "shopping"), floor=10),
        AmountRule(name=TOTAL, keywords=("total", "overall"), floor=100),
    )


class BudgetRules(BaseModel):
    """
    Tunable knobs for budget extraction and reconciliation.

    `proportions` is the split used when per-category figures are judged
    unreliable; whatever rounding leaves over goes to `remainder_category`.
    `fallback` is the fixed 7-night baseline used when nothing was extracted.
    With `scale_fallback_by_trip_length` enabled, the fallback is rebuilt from
    `fallback_per_day` times the trip length instead.
    """

    model_config = ConfigDict(frozen=True)

    amount_rules: Tuple[AmountRule, ...] = Field(default_factory=default_amount_rules)
    unreliable_ratio: float = 0.5
    proportions: Dict[str, float] = Field(
        default_factory=lambda: {
            "accommodation": 0.40,
            "food": 0.25,
            "activities": 0.20,
            "transportation": 0.10,
            "miscellaneous": 0.05,
        }
    )
    remainder_category: str = "accommodation"
    fallback: Dict[str, int] = Field(
        default_factory=lambda: {
            "accommodation": 420,  # $60/night x 7 nights
            "food": 280,  # $40/day x 7 days
            "activities": 210,  # $30/day x 7 days
            "transportation": 70,  # $10/day x 7 days
            "miscellaneous": 70,  # $10/day x 7 days
        }
    )
    scale_fallback_by_trip_length: bool = False
    fallback_per_day: Dict[str, int] = Field(
        default_factory=lambda: {
            "accommodation": 60,
            "food": 40,
            "activities": 30,
            "transportation": 10,
            "miscellaneous": 10,
        }
    )
    currency: str = "USD"


def _breakdown(parts: Mapping[str, int], currency: str) -> BudgetBreakdown:
    values = {name: int(parts.get(name, 0)) for name in CATEGORIES}
    return BudgetBreakdown(**values, total=sum(values.values()), currency=currency)


def redistribute_total(total: int, rules: BudgetRules) -> Dict[str, int]:
    parts = {name: round_half_up(total * rules.proportions.get(name, 0.0)) for name in CATEGORIES}
    parts[rules.remainder_category] += total - sum(parts.values())
    return parts


def fallback_budget(rules: BudgetRules, trip_days: Optional[int] = None) -> BudgetBreakdown:
    """
    Budget used when nothing usable was extracted. Fixed unless the rules ask
    for a per-day scaled version and the trip length is known.
    """
    if rules.scale_fallback_by_trip_length and trip_days and trip_days > 0:
        parts = {name: rules.fallback_per_day.get(name, 0) * trip_days for name in CATEGORIES}
    else:
        parts = dict(rules.fallback)
    return _breakdown(parts, rules.currency)


def reconcile_budget(
    amounts: Mapping[str, float],
    total: Optional[float] = None,
    rules: Optional[BudgetRules] = None,
    trip_days: Optional[int] = None,
) -> BudgetBreakdown:
    """
    Repair extracted category amounts so that `total` equals the sum of the
    categories, redistributing or falling back where the figures are unusable.
    """
    rules = rules or BudgetRules()
    present = {name: float(amounts[name]) for name in CATEGORIES if amounts.get(name)}
    calculated = sum(present.values())
    reported = round_half_up(total) if total and total > 0 else 0

    if reported > 0 and calculated < rules.unreliable_ratio * reported:
        logger.info(
            "Category amounts (%.2f) too small for total %s; redistributing", calculated, reported
        )
        return _breakdown(redistribute_total(reported, rules), rules.currency)

    if calculated > 0:
        # Either no total was reported, or the categories account for most of
        # it; the categories are authoritative and the total follows them.
        return _breakdown({name: round_half_up(v) for name, v in present.items()}, rules.currency)

    logger.info("No budget figures extracted; using fallback budget")
    return fallback_budget(rules, trip_days)


def extract_budget(
    text: str,
    rules: Optional[BudgetRules] = None,
    trip_days: Optional[int] = None,
) -> BudgetBreakdown:
    rules = rules or BudgetRules()
    amounts = extract_amounts(text, rules.amount_rules)
    total = amounts.pop(TOTAL, None)
    return reconcile_budget(amounts, total, rules, trip_days)
