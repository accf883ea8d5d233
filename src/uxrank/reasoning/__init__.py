"""Rule-based reasoning: category → guidance, and priority-driven selection."""

from uxrank.reasoning.matcher import (
    DEFAULT_REASONING,
    apply_reasoning,
    find_rule,
    parse_decision_rules,
    split_style_priority,
)
from uxrank.reasoning.selection import priority_score, select_best

__all__ = [
    "DEFAULT_REASONING",
    "apply_reasoning",
    "find_rule",
    "parse_decision_rules",
    "priority_score",
    "select_best",
    "split_style_priority",
]
