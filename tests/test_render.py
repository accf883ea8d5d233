"""Tests for uxrank.render: prompt block and JSON output."""

from __future__ import annotations

import json
from dataclasses import replace
from typing import TYPE_CHECKING

import pytest

from uxrank.composer import DesignComposer
from uxrank.exceptions import RenderError
from uxrank.render import (
    TemplateEngine,
    build_context,
    format_recommendation,
    recommendation_to_json,
    split_anti_patterns,
)
from uxrank.types import (
    ColorPalette,
    DesignRecommendation,
    PatternChoice,
    StyleChoice,
    TypographyChoice,
)

if TYPE_CHECKING:
    from pathlib import Path

    from uxrank.store import CollectionStore


@pytest.fixture
def minimal() -> DesignRecommendation:
    """Recommendation with every optional field empty."""
    return DesignRecommendation(
        project_name="FitCo",
        category="General",
        pattern=PatternChoice(
            name="Hero + Features + CTA",
            sections="Hero > Features > CTA",
            cta_placement="Above fold",
        ),
        style=StyleChoice(name="Minimalism", type="General"),
        colors=ColorPalette(
            primary="#2563EB",
            secondary="#3B82F6",
            cta="#F97316",
            background="#F8FAFC",
            text="#1E293B",
        ),
        typography=TypographyChoice(heading="Inter", body="Inter"),
    )


@pytest.fixture
def full(bundled_store: CollectionStore) -> DesignRecommendation:
    return DesignComposer(bundled_store).generate("fitness app", "FitCo")


class TestSplitAntiPatterns:
    def test_split(self):
        assert split_anti_patterns("Static design + No gamification") == [
            "Static design",
            "No gamification",
        ]

    def test_empty(self):
        assert split_anti_patterns("") == []
        assert split_anti_patterns(" + ") == []


class TestBuildContext:
    def test_flattens_and_adds_lines(self, minimal):
        ctx = build_context(replace(minimal, anti_patterns="A + B"))
        assert ctx["colors"]["primary"] == "#2563EB"
        assert ctx["anti_pattern_lines"] == ["A", "B"]


class TestFormatRecommendation:
    def test_required_fields_present(self, minimal):
        text = format_recommendation(minimal)
        for expected in (
            "FitCo",
            "General",
            "Minimalism",
            "#2563EB",
            "#3B82F6",
            "#F97316",
            "#F8FAFC",
            "#1E293B",
            "Heading: Inter",
            "Body: Inter",
            "PAGE PATTERN: Hero + Features + CTA",
            "Sections: Hero > Features > CTA",
            "CTA: Above fold",
            "SEVERITY: MEDIUM",
        ):
            assert expected in text

    def test_empty_optional_fields_omitted(self, minimal):
        text = format_recommendation(minimal)
        for label in (
            "Keywords:",
            "Best For:",
            "Performance:",
            "Accessibility:",
            "Mood:",
            "Google Fonts:",
            "CSS Import:",
            "Notes:",
            "Conversion:",
            "Color Strategy:",
            "MOTION AND EFFECTS",
            "ANTI-PATTERNS",
        ):
            assert label not in text

    def test_no_blank_values(self, minimal):
        text = format_recommendation(minimal)
        assert "None" not in text
        bullets = [line for line in text.splitlines() if line.startswith("-") and not line.startswith("---")]
        assert all(not line.rstrip().endswith((":", "-")) for line in bullets)

    def test_style_name_and_type(self, minimal):
        text = format_recommendation(minimal)
        assert "AESTHETIC DIRECTION: Minimalism" in text
        assert "Type: General" in text

    def test_populated_fields_present(self, full):
        text = format_recommendation(full)
        assert f"Type: {full.style.type}" in text
        assert f"Keywords: {full.style.keywords}" in text
        assert f"Best For: {full.style.best_for}" in text
        assert f"CSS Import: {full.typography.css_import}" in text
        assert f"Notes: {full.colors.notes}" in text
        assert f"Conversion: {full.pattern.conversion}" in text
        assert f"- {full.key_effects}" in text

    def test_anti_patterns_as_bullets(self, full):
        text = format_recommendation(full)
        assert "ANTI-PATTERNS:" in text
        assert "- Static design" in text
        assert "- No gamification" in text

    def test_custom_engine(self, minimal, tmp_path: Path):
        (tmp_path / "design_system.md.j2").write_text("custom {{ project_name }}", encoding="utf-8")
        engine = TemplateEngine(tmp_path)
        assert format_recommendation(minimal, engine) == "custom FitCo"


class TestTemplateEngine:
    def test_user_template_overrides_builtin(self, minimal, tmp_path: Path):
        (tmp_path / "design_system.md.j2").write_text("override", encoding="utf-8")
        assert TemplateEngine(tmp_path).render(minimal) == "override"

    def test_missing_override_dir_ignored(self, minimal, tmp_path: Path):
        engine = TemplateEngine(tmp_path / "nope")
        assert "FitCo" in engine.render(minimal)

    def test_unknown_template(self, minimal):
        with pytest.raises(RenderError, match="not found"):
            TemplateEngine().render(minimal, "missing.j2")

    def test_undefined_variable(self, minimal, tmp_path: Path):
        (tmp_path / "bad.j2").write_text("{{ no_such_field }}", encoding="utf-8")
        with pytest.raises(RenderError, match="Failed to render"):
            TemplateEngine(tmp_path).render(minimal, "bad.j2")


class TestJson:
    def test_round_trips_to_dict(self, full):
        data = json.loads(recommendation_to_json(full))
        assert data == full.to_dict()
        assert data["colors"]["primary"] == "#F97316"
        assert data["typography"]["heading"] == "Bebas Neue"
