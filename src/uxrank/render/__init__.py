"""Rendering of design recommendations as prompt blocks or JSON."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

from uxrank.render.templates import (
    DEFAULT_TEMPLATE,
    TemplateEngine,
    build_context,
    split_anti_patterns,
)

if TYPE_CHECKING:
    from uxrank.types import DesignRecommendation

__all__ = [
    "DEFAULT_TEMPLATE",
    "TemplateEngine",
    "build_context",
    "format_recommendation",
    "recommendation_to_json",
    "split_anti_patterns",
]


def format_recommendation(
    recommendation: DesignRecommendation,
    engine: TemplateEngine | None = None,
    template_name: str = DEFAULT_TEMPLATE,
) -> str:
    """Render a recommendation into a prompt-insertable text block.

    Populated fields always appear; empty optional fields are left out.
    """
    engine = engine or TemplateEngine()
    return engine.render(recommendation, template_name)


def recommendation_to_json(recommendation: DesignRecommendation) -> str:
    """Serialize a recommendation as indented JSON."""
    return json.dumps(recommendation.to_dict(), indent=2, ensure_ascii=False)
