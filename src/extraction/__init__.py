from .advice import keyword_recommendations, labelled_recommendations, labelled_summary, leading_summary
from .budget import BudgetRules, extract_budget, fallback_budget, reconcile_budget
from .itinerary import extract_activities, parse_itinerary
from .sections import LOCAL_EXPERT_SECTIONS, parse_recommendations
from .text import AmountRule, extract_amounts, parse_amount, round_half_up

__all__ = [
    "AmountRule",
    "BudgetRules",
    "LOCAL_EXPERT_SECTIONS",
    "extract_activities",
    "extract_amounts",
    "extract_budget",
    "fallback_budget",
    "keyword_recommendations",
    "labelled_recommendations",
    "labelled_summary",
    "leading_summary",
    "parse_amount",
    "parse_itinerary",
    "parse_recommendations",
    "reconcile_budget",
    "round_half_up",
]
