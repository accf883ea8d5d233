"""Jinja2 template engine for rendering design recommendations.

Loads templates from an optional user directory and the built-in
``uxrank/templates/`` directory. User templates take precedence.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

import jinja2

from uxrank.exceptions import RenderError

if TYPE_CHECKING:
    from uxrank.types import DesignRecommendation

__all__ = [
    "DEFAULT_TEMPLATE",
    "TemplateEngine",
    "build_context",
    "split_anti_patterns",
]

logger = logging.getLogger(__name__)

DEFAULT_TEMPLATE = "design_system.md.j2"


def split_anti_patterns(raw: str) -> list[str]:
    """Split a ``+``-delimited anti-pattern string into trimmed lines."""
    return [part.strip() for part in raw.split("+") if part.strip()]


def build_context(recommendation: DesignRecommendation) -> dict[str, object]:
    """Flatten a recommendation into template variables.

    Adds ``anti_pattern_lines`` on top of the dataclass fields.
    """
    context = recommendation.to_dict()
    context["anti_pattern_lines"] = split_anti_patterns(recommendation.anti_patterns)
    return context


class TemplateEngine:
    """Jinja2 engine with built-in and user-override templates.

    Template search order:
      1. ``template_dir`` (user overrides, optional)
      2. ``uxrank/templates/`` (built-in, always present)

    Args:
        template_dir: Optional directory of user templates.
    """

    def __init__(self, template_dir: Path | None = None) -> None:
        from importlib.resources import files

        search_paths: list[str] = []

        if template_dir is not None:
            if template_dir.is_dir():
                search_paths.append(str(template_dir))
                logger.info("User template overrides enabled: %s", template_dir)
            else:
                logger.warning("Template directory not found, ignoring: %s", template_dir)

        builtin_dir = Path(str(files("uxrank") / "templates"))
        if not builtin_dir.is_dir():
            logger.debug("Expected template dir at: %s", builtin_dir)
            raise RenderError("Built-in template directory not found, installation may be corrupted")
        search_paths.append(str(builtin_dir))

        loader = jinja2.FileSystemLoader(search_paths)
        self._env = jinja2.Environment(
            loader=loader,
            autoescape=False,
            undefined=jinja2.StrictUndefined,
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )

    def render(
        self,
        recommendation: DesignRecommendation,
        template_name: str = DEFAULT_TEMPLATE,
    ) -> str:
        """Render a recommendation with the named template.

        Raises:
            RenderError: If the template is missing or rendering fails.
        """
        try:
            template = self._env.get_template(template_name)
        except jinja2.TemplateNotFound as e:
            raise RenderError(f"Template not found: {template_name}") from e

        try:
            return template.render(**build_context(recommendation))
        except jinja2.TemplateError as e:
            raise RenderError(f"Failed to render template {template_name}: {e}") from e
