"""Shared fixtures for uxrank tests."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import pytest

from uxrank.config import bundled_data_dir
from uxrank.store import CollectionStore
from uxrank.types import ReasoningRule

if TYPE_CHECKING:
    from pathlib import Path


def _write_collection(directory: Path, filename: str, rows: list[dict[str, object]]) -> Path:
    path = directory / filename
    path.write_text(json.dumps(rows), encoding="utf-8")
    return path


@pytest.fixture
def write_collection():
    """Helper that writes rows as a JSON collection file."""
    return _write_collection


@pytest.fixture
def empty_data_dir(tmp_path: Path) -> Path:
    """A data directory with no collection files."""
    d = tmp_path / "empty"
    d.mkdir()
    return d


@pytest.fixture
def bundled_store() -> CollectionStore:
    """Strict store over the sample data shipped with the package."""
    return CollectionStore(bundled_data_dir())


@pytest.fixture
def empty_store(empty_data_dir: Path) -> CollectionStore:
    """Lenient store whose collections are all missing."""
    return CollectionStore(empty_data_dir, strict=False)


@pytest.fixture
def style_rows() -> list[dict[str, str]]:
    return [
        {
            "Style Category": "Glassmorphism",
            "Type": "General",
            "Keywords": "frosted glass, transparent, blur",
            "Best For": "SaaS dashboards",
            "Effects & Animation": "Backdrop blur",
            "Performance": "",
        },
        {
            "Style Category": "Brutalism",
            "Type": "General",
            "Keywords": "raw, stark, bold typography",
            "Best For": "Portfolios",
        },
        {
            "Style Category": "Claymorphism",
            "Type": "General",
            "Keywords": "soft, rounded, playful",
            "Best For": "Kids apps, education",
        },
    ]


@pytest.fixture
def rules() -> list[ReasoningRule]:
    return [
        ReasoningRule(
            category="SaaS (General)",
            recommended_pattern="Hero + Features + CTA",
            style_priority="Glassmorphism + Flat Design",
            severity="HIGH",
        ),
        ReasoningRule(category="retail", recommended_pattern="Feature-Rich Showcase"),
        ReasoningRule(category="Healthcare-Medical", recommended_pattern="Social Proof-Focused"),
    ]
