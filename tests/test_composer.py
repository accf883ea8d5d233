"""Tests for uxrank.composer: end-to-end design recommendations."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from uxrank import store as store_module
from uxrank.composer import (
    DEFAULT_CATEGORY,
    DEFAULT_COLORS,
    DesignComposer,
    _default_store,
    build_style_query,
    generate_design_recommendation,
)
from uxrank.config import UxrankConfig
from uxrank.store import CollectionStore

if TYPE_CHECKING:
    from pathlib import Path


class TestBuildStyleQuery:
    def test_appends_first_two_priorities(self):
        assert (
            build_style_query("fitness app", ("Vibrant", "Dark Mode", "Minimalism"))
            == "fitness app Vibrant Dark Mode"
        )

    def test_single_priority(self):
        assert build_style_query("blog", ("Minimalism",)) == "blog Minimalism"

    def test_no_priorities(self):
        assert build_style_query("blog", ()) == "blog"


class TestEmptyCollections:
    """With nothing to search, every field falls back to its default."""

    def test_never_raises_and_uses_defaults(self, empty_store: CollectionStore):
        rec = generate_design_recommendation("fitness app", "FitCo", store=empty_store)
        assert rec.project_name == "FitCo"
        assert rec.category == DEFAULT_CATEGORY
        assert rec.colors.primary == "#2563EB"
        assert rec.colors == DEFAULT_COLORS

    def test_leaf_defaults(self, empty_store: CollectionStore):
        rec = DesignComposer(empty_store).generate("fitness app")
        assert rec.pattern.name == "Hero + Features + CTA"
        assert rec.pattern.sections == "Hero > Features > CTA"
        assert rec.pattern.cta_placement == "Above fold"
        assert rec.pattern.color_strategy == ""
        assert rec.style.name == "Minimalism"
        assert rec.style.type == "General"
        assert rec.typography.heading == "Inter"
        assert rec.typography.body == "Inter"
        assert rec.severity == "MEDIUM"

    def test_effects_fall_back_to_reasoning(self, empty_store: CollectionStore):
        rec = DesignComposer(empty_store).generate("fitness app")
        assert rec.style.effects == ""
        assert rec.key_effects == "Subtle hover transitions"

    def test_typography_mood_falls_back_to_reasoning(self, empty_store: CollectionStore):
        rec = DesignComposer(empty_store).generate("fitness app")
        assert rec.typography.mood == "Clean"

    def test_project_name_defaults_to_upper_query(self, empty_store: CollectionStore):
        assert DesignComposer(empty_store).generate("fitness app").project_name == "FITNESS APP"


class TestBundledData:
    @pytest.fixture
    def fitness(self, bundled_store: CollectionStore):
        return DesignComposer(bundled_store).generate("fitness app", "FitCo")

    def test_category_from_product_search(self, fitness):
        assert fitness.category == "Fitness/Gym App"

    def test_style_follows_reasoning_priority(self, fitness):
        assert fitness.style.name == "Vibrant & Block-based"
        assert fitness.key_effects == fitness.style.effects

    def test_color_top_rank(self, fitness):
        assert fitness.colors.primary == "#F97316"
        assert fitness.colors.notes == "Energy orange + success green"

    def test_typography_top_rank(self, fitness):
        assert fitness.typography.heading == "Bebas Neue"
        assert fitness.typography.css_import.startswith("@import")

    def test_landing_top_rank(self, fitness):
        assert fitness.pattern.name == "Feature-Rich Showcase"

    def test_reasoning_fields(self, fitness):
        assert "No gamification" in fitness.anti_patterns
        assert fitness.severity == "MEDIUM"

    def test_unknown_niche_still_composes(self, bundled_store: CollectionStore):
        rec = DesignComposer(bundled_store).generate("zzqx")
        assert rec.category == DEFAULT_CATEGORY
        assert rec.colors == DEFAULT_COLORS

    def test_repeated_calls_are_independent(self, bundled_store: CollectionStore):
        composer = DesignComposer(bundled_store)
        first = composer.generate("fitness app")
        composer.generate("crypto trading wallet")
        assert composer.generate("fitness app") == first


class TestLimits:
    def test_style_limit_respected(self, tmp_path: Path, write_collection):
        write_collection(
            tmp_path,
            "styles.json",
            [
                {"Style Category": "Aurora", "Keywords": "blog"},
                {"Style Category": "Minimalism", "Keywords": "blog clean"},
            ],
        )
        store = CollectionStore(tmp_path, strict=False)
        config = UxrankConfig()
        config.limits.style = 1

        # Only the top BM25 row is seen, so the priority cannot pull in Minimalism.
        rec = DesignComposer(store, config).generate("blog aurora")
        assert rec.style.name == "Aurora"

        config.limits.style = 3
        rec = DesignComposer(store, config).generate("blog aurora")
        assert rec.style.name == "Minimalism"


class TestDefaultStore:
    def test_bundled_files_read_once_per_process(self, monkeypatch: pytest.MonkeyPatch):
        loaded: list[Path] = []
        real_load = store_module.load_documents

        def counting_load(path: Path):
            loaded.append(path)
            return real_load(path)

        monkeypatch.setattr(store_module, "load_documents", counting_load)
        _default_store.cache_clear()

        first = generate_design_recommendation("fitness app", "FitCo")
        reads_after_first = len(loaded)
        second = generate_design_recommendation("fitness app", "FitCo")

        assert reads_after_first == 6
        assert len(loaded) == reads_after_first
        assert first == second

    def test_same_store_reused(self):
        assert _default_store() is _default_store()
