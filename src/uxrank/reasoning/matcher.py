"""Category → reasoning rule matching.

Three tiers, case-insensitive, first hit wins:
  1. exact category match
  2. substring match in either direction
  3. any ``/``- or ``-``-separated fragment of the rule category found in the input

An unmatched category resolves to :data:`DEFAULT_REASONING`, never an error.
"""

from __future__ import annotations

import json
import logging
import re
from types import MappingProxyType
from typing import TYPE_CHECKING

from uxrank.types import Reasoning

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from uxrank.types import ReasoningRule

__all__ = [
    "DEFAULT_PATTERN",
    "DEFAULT_REASONING",
    "DEFAULT_SEVERITY",
    "apply_reasoning",
    "find_rule",
    "parse_decision_rules",
    "split_style_priority",
]

logger = logging.getLogger(__name__)

DEFAULT_PATTERN = "Hero + Features + CTA"
DEFAULT_SEVERITY = "MEDIUM"

DEFAULT_REASONING = Reasoning(
    pattern=DEFAULT_PATTERN,
    style_priority=("Minimalism", "Flat Design"),
    color_mood="Professional",
    typography_mood="Clean",
    key_effects="Subtle hover transitions",
    anti_patterns="",
    decision_rules=MappingProxyType({}),
    severity=DEFAULT_SEVERITY,
)

_FRAGMENT_SPLIT_RE = re.compile(r"[/\-\s]+")


def _keyword_fragments(category: str) -> list[str]:
    return [f for f in _FRAGMENT_SPLIT_RE.split(category) if f]


def find_rule(category: str, rules: Sequence[ReasoningRule]) -> ReasoningRule | None:
    """Find the reasoning rule for a product category.

    Args:
        category: Free-text category, e.g. ``"E-commerce / Retail"``.
        rules: Reasoning table in authored order.

    Returns:
        The first matching rule of the highest tier that matches, or ``None``.
    """
    cat = category.lower().strip()

    for rule in rules:
        if rule.category.lower().strip() == cat:
            logger.debug("Reasoning for %r: exact match %r", category, rule.category)
            return rule

    if not cat:
        return None

    for rule in rules:
        ui_cat = rule.category.lower().strip()
        if ui_cat and (ui_cat in cat or cat in ui_cat):
            logger.debug("Reasoning for %r: substring match %r", category, rule.category)
            return rule

    for rule in rules:
        fragments = _keyword_fragments(rule.category.lower())
        if any(fragment in cat for fragment in fragments):
            logger.debug("Reasoning for %r: keyword match %r", category, rule.category)
            return rule

    return None


def split_style_priority(raw: str) -> tuple[str, ...]:
    """Split a ``+``-delimited priority string into trimmed, non-empty terms."""
    return tuple(part.strip() for part in raw.split("+") if part.strip())


def parse_decision_rules(raw: str) -> Mapping[str, str]:
    """Parse a decision-rules JSON object into a read-only str → str mapping.

    Unparseable input or a non-object value yields an empty mapping.
    Non-string values are kept as their JSON text.
    """
    if not raw or not raw.strip():
        return MappingProxyType({})
    try:
        data = json.loads(raw)
    except ValueError as e:
        logger.warning("Ignoring malformed decision rules: %s", e)
        return MappingProxyType({})
    if not isinstance(data, dict):
        logger.warning("Ignoring decision rules that are not an object: %r", raw[:60])
        return MappingProxyType({})
    return MappingProxyType(
        {str(k): v if isinstance(v, str) else json.dumps(v) for k, v in data.items()}
    )


def apply_reasoning(category: str, rules: Sequence[ReasoningRule]) -> Reasoning:
    """Resolve design guidance for a category.

    Args:
        category: Product category, typically from a product-collection search.
        rules: Reasoning table.

    Returns:
        Reasoning from the matched rule, or :data:`DEFAULT_REASONING`.
    """
    rule = find_rule(category, rules)
    if rule is None:
        logger.debug("No reasoning rule for %r, using default", category)
        return DEFAULT_REASONING

    return Reasoning(
        pattern=rule.recommended_pattern,
        style_priority=split_style_priority(rule.style_priority),
        color_mood=rule.color_mood,
        typography_mood=rule.typography_mood,
        key_effects=rule.key_effects,
        anti_patterns=rule.anti_patterns,
        decision_rules=parse_decision_rules(rule.decision_rules),
        severity=rule.severity or DEFAULT_SEVERITY,
    )
