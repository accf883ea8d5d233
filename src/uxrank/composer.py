"""Design composer: query → DesignRecommendation.

Flow:
  1. product search → category ("General" if nothing matches)
  2. category → Reasoning via the rule cascade
  3. style query = query + first two style priorities
  4. style / color / landing / typography searches
  5. style picked by priority heuristic, the rest by top BM25 rank
  6. merge with per-field defaults
"""

from __future__ import annotations

import functools
import logging
from typing import TYPE_CHECKING

from uxrank.config import UxrankConfig
from uxrank.reasoning.matcher import DEFAULT_PATTERN, apply_reasoning
from uxrank.reasoning.selection import select_best
from uxrank.store import CollectionStore
from uxrank.types import (
    ColorPalette,
    DesignRecommendation,
    PatternChoice,
    StyleChoice,
    TypographyChoice,
)

if TYPE_CHECKING:
    from uxrank.types import Reasoning

__all__ = [
    "DEFAULT_CATEGORY",
    "DEFAULT_COLORS",
    "DesignComposer",
    "build_style_query",
    "generate_design_recommendation",
]

logger = logging.getLogger(__name__)

DEFAULT_CATEGORY = "General"
DEFAULT_SECTIONS = "Hero > Features > CTA"
DEFAULT_CTA_PLACEMENT = "Above fold"
DEFAULT_STYLE_NAME = "Minimalism"
DEFAULT_STYLE_TYPE = "General"
DEFAULT_FONT = "Inter"

DEFAULT_COLORS = ColorPalette(
    primary="#2563EB",
    secondary="#3B82F6",
    cta="#F97316",
    background="#F8FAFC",
    text="#1E293B",
)

# Style priorities appended to the style query.
_STYLE_QUERY_PRIORITIES = 2


def build_style_query(query: str, style_priority: tuple[str, ...]) -> str:
    """Append the leading style priorities to the user query."""
    if not style_priority:
        return query
    return f"{query} {' '.join(style_priority[:_STYLE_QUERY_PRIORITIES])}"


def _first(rows: list[dict[str, str]]) -> dict[str, str]:
    return rows[0] if rows else {}


class DesignComposer:
    """Combines collection searches and reasoning into one recommendation.

    Args:
        store: Collection store to search.
        config: Result limits come from ``config.limits``.
    """

    def __init__(self, store: CollectionStore, config: UxrankConfig | None = None) -> None:
        self.store = store
        self.config = config or UxrankConfig()

    def resolve_category(self, query: str) -> str:
        """Map a query to a product category via the product collection."""
        products = self.store.search("product", query, self.config.limits.product)
        return _first(products).get("Product Type") or DEFAULT_CATEGORY

    def generate(self, query: str, project_name: str = "") -> DesignRecommendation:
        """Build a design recommendation for a niche query.

        Args:
            query: Free-text niche description, e.g. ``"fitness app"``.
            project_name: Display name; defaults to the upper-cased query.

        Returns:
            A fully populated recommendation. Missing data falls back to
            documented defaults rather than raising.
        """
        limits = self.config.limits
        category = self.resolve_category(query)
        reasoning = apply_reasoning(category, self.store.reasoning_rules())

        style_query = build_style_query(query, reasoning.style_priority)
        style_results = self.store.search("style", style_query, limits.style)
        color_results = self.store.search("color", query, limits.color)
        landing_results = self.store.search("landing", query, limits.landing)
        typography_results = self.store.search("typography", query, limits.typography)

        best_style = select_best(style_results, reasoning.style_priority)

        logger.info(
            "Design for %r: category=%r style=%r (%d/%d/%d/%d hits)",
            query,
            category,
            best_style.get("Style Category", DEFAULT_STYLE_NAME),
            len(style_results),
            len(color_results),
            len(landing_results),
            len(typography_results),
        )

        return _merge(
            query=query,
            project_name=project_name,
            category=category,
            reasoning=reasoning,
            style=best_style,
            color=_first(color_results),
            landing=_first(landing_results),
            typography=_first(typography_results),
        )


def _merge(
    *,
    query: str,
    project_name: str,
    category: str,
    reasoning: Reasoning,
    style: dict[str, str],
    color: dict[str, str],
    landing: dict[str, str],
    typography: dict[str, str],
) -> DesignRecommendation:
    style_effects = style.get("Effects & Animation", "")

    return DesignRecommendation(
        project_name=project_name or query.upper(),
        category=category,
        pattern=PatternChoice(
            name=landing.get("Pattern Name") or reasoning.pattern or DEFAULT_PATTERN,
            sections=landing.get("Section Order") or DEFAULT_SECTIONS,
            cta_placement=landing.get("Primary CTA Placement") or DEFAULT_CTA_PLACEMENT,
            color_strategy=landing.get("Color Strategy", ""),
            conversion=landing.get("Conversion Optimization", ""),
        ),
        style=StyleChoice(
            name=style.get("Style Category") or DEFAULT_STYLE_NAME,
            type=style.get("Type") or DEFAULT_STYLE_TYPE,
            effects=style_effects,
            keywords=style.get("Keywords", ""),
            best_for=style.get("Best For", ""),
            performance=style.get("Performance", ""),
            accessibility=style.get("Accessibility", ""),
        ),
        colors=ColorPalette(
            primary=color.get("Primary (Hex)") or DEFAULT_COLORS.primary,
            secondary=color.get("Secondary (Hex)") or DEFAULT_COLORS.secondary,
            cta=color.get("CTA (Hex)") or DEFAULT_COLORS.cta,
            background=color.get("Background (Hex)") or DEFAULT_COLORS.background,
            text=color.get("Text (Hex)") or DEFAULT_COLORS.text,
            notes=color.get("Notes", ""),
        ),
        typography=TypographyChoice(
            heading=typography.get("Heading Font") or DEFAULT_FONT,
            body=typography.get("Body Font") or DEFAULT_FONT,
            mood=typography.get("Mood/Style Keywords") or reasoning.typography_mood,
            best_for=typography.get("Best For", ""),
            google_fonts_url=typography.get("Google Fonts URL", ""),
            css_import=typography.get("CSS Import", ""),
        ),
        key_effects=style_effects or reasoning.key_effects,
        anti_patterns=reasoning.anti_patterns,
        severity=reasoning.severity,
    )


@functools.cache
def _default_store() -> CollectionStore:
    """Process-wide lenient store over the bundled data, created on first use."""
    return CollectionStore.from_config(UxrankConfig(), strict=False)


def generate_design_recommendation(
    query: str,
    project_name: str = "",
    store: CollectionStore | None = None,
) -> DesignRecommendation:
    """Convenience wrapper: compose a recommendation with a default store.

    Without an explicit store, one shared store over the bundled sample
    data is used in lenient mode, so missing files count as empty
    collections and each file is read once per process.
    """
    if store is None:
        store = _default_store()
    return DesignComposer(store).generate(query, project_name)
