"""Data contracts for uxrank.

Frozen dataclasses that flow between the ranking stages:
  query → product category → Reasoning → ranked rows → DesignRecommendation
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import asdict, dataclass, field

__all__ = [
    "CollectionSpec",
    "ColorPalette",
    "DesignRecommendation",
    "Document",
    "PatternChoice",
    "Reasoning",
    "ReasoningRule",
    "ScoredDocument",
    "StyleChoice",
    "TypographyChoice",
]

# One row of a collection: field name → string value. Read-only once loaded.
Document = Mapping[str, str]

# (document index, BM25 score)
ScoredDocument = tuple[int, float]


@dataclass(frozen=True)
class CollectionSpec:
    """A named document collection and the fields it searches and projects."""

    name: str
    filename: str
    search_fields: tuple[str, ...]
    output_fields: tuple[str, ...]
    description: str = ""


@dataclass(frozen=True)
class ReasoningRule:
    """One row of the UI reasoning table, as authored."""

    category: str
    recommended_pattern: str = ""
    style_priority: str = ""
    color_mood: str = ""
    typography_mood: str = ""
    key_effects: str = ""
    anti_patterns: str = ""
    decision_rules: str = ""
    severity: str = ""


@dataclass(frozen=True)
class Reasoning:
    """Design guidance resolved for a product category."""

    pattern: str
    style_priority: tuple[str, ...] = ()
    color_mood: str = ""
    typography_mood: str = ""
    key_effects: str = ""
    anti_patterns: str = ""
    decision_rules: Mapping[str, str] = field(default_factory=dict)
    severity: str = "MEDIUM"


@dataclass(frozen=True)
class PatternChoice:
    """Landing page layout pattern."""

    name: str
    sections: str
    cta_placement: str
    color_strategy: str = ""
    conversion: str = ""


@dataclass(frozen=True)
class StyleChoice:
    """Visual style direction."""

    name: str
    type: str
    effects: str = ""
    keywords: str = ""
    best_for: str = ""
    performance: str = ""
    accessibility: str = ""


@dataclass(frozen=True)
class ColorPalette:
    """Five semantic color roles plus free-form notes."""

    primary: str
    secondary: str
    cta: str
    background: str
    text: str
    notes: str = ""


@dataclass(frozen=True)
class TypographyChoice:
    """Heading/body font pairing and loading metadata."""

    heading: str
    body: str
    mood: str = ""
    best_for: str = ""
    google_fonts_url: str = ""
    css_import: str = ""


@dataclass(frozen=True)
class DesignRecommendation:
    """The composed output of one design request."""

    project_name: str
    category: str
    pattern: PatternChoice
    style: StyleChoice
    colors: ColorPalette
    typography: TypographyChoice
    key_effects: str = ""
    anti_patterns: str = ""
    severity: str = "MEDIUM"

    def to_dict(self) -> dict[str, object]:
        """Return a plain nested dict, suitable for JSON serialization."""
        return asdict(self)
