"""Named design collections and BM25 search over them.

Each collection declares which fields are concatenated into searchable text
and which fields are projected into result rows.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from uxrank.search.bm25 import DEFAULT_B, DEFAULT_K1, BM25
from uxrank.types import CollectionSpec

if TYPE_CHECKING:
    from collections.abc import Sequence

    from uxrank.types import Document

__all__ = [
    "COLLECTIONS",
    "build_search_text",
    "get_collection",
    "project_fields",
    "search_documents",
]

logger = logging.getLogger(__name__)

COLLECTIONS: dict[str, CollectionSpec] = {
    "style": CollectionSpec(
        name="style",
        filename="styles.json",
        search_fields=("Style Category", "Keywords", "Best For", "Type"),
        output_fields=(
            "Style Category",
            "Type",
            "Keywords",
            "Primary Colors",
            "Effects & Animation",
            "Best For",
            "Performance",
            "Accessibility",
        ),
        description="Visual styles (glassmorphism, brutalism, ...)",
    ),
    "color": CollectionSpec(
        name="color",
        filename="colors.json",
        search_fields=("Product Type", "Keywords", "Notes"),
        output_fields=(
            "Product Type",
            "Keywords",
            "Primary (Hex)",
            "Secondary (Hex)",
            "CTA (Hex)",
            "Background (Hex)",
            "Text (Hex)",
            "Notes",
        ),
        description="Color palettes per product type",
    ),
    "landing": CollectionSpec(
        name="landing",
        filename="landing.json",
        search_fields=("Pattern Name", "Keywords", "Conversion Optimization", "Section Order"),
        output_fields=(
            "Pattern Name",
            "Keywords",
            "Section Order",
            "Primary CTA Placement",
            "Color Strategy",
            "Conversion Optimization",
        ),
        description="Landing page layout patterns",
    ),
    "product": CollectionSpec(
        name="product",
        filename="products.json",
        search_fields=(
            "Product Type",
            "Keywords",
            "Primary Style Recommendation",
            "Key Considerations",
        ),
        output_fields=(
            "Product Type",
            "Keywords",
            "Primary Style Recommendation",
            "Color Palette Focus",
        ),
        description="Product categories",
    ),
    "typography": CollectionSpec(
        name="typography",
        filename="typography.json",
        search_fields=(
            "Font Pairing Name",
            "Category",
            "Mood/Style Keywords",
            "Best For",
            "Heading Font",
            "Body Font",
        ),
        output_fields=(
            "Font Pairing Name",
            "Heading Font",
            "Body Font",
            "Mood/Style Keywords",
            "Best For",
            "Google Fonts URL",
            "CSS Import",
        ),
        description="Heading/body font pairings",
    ),
}


def get_collection(name: str) -> CollectionSpec | None:
    """Return the spec for a collection name, or ``None`` if unknown."""
    return COLLECTIONS.get(name)


def build_search_text(document: Document, fields: Sequence[str]) -> str:
    """Join the configured fields of a document with single spaces.

    Missing fields contribute an empty string.
    """
    return " ".join(str(document.get(f) or "") for f in fields)


def project_fields(document: Document, fields: Sequence[str]) -> dict[str, str]:
    """Copy the configured fields of a document, omitting missing or empty ones."""
    return {f: document[f] for f in fields if document.get(f)}


def search_documents(
    spec: CollectionSpec,
    documents: Sequence[Document],
    query: str,
    max_results: int = 3,
    k1: float = DEFAULT_K1,
    b: float = DEFAULT_B,
) -> list[dict[str, str]]:
    """Rank a collection's documents against a query.

    Builds a fresh BM25 index on every call, takes the top ``max_results``
    by score, then drops anything scoring zero or less.

    Args:
        spec: Collection declaring search and output fields.
        documents: Loaded rows of the collection.
        query: Free-text query.
        max_results: Upper bound on returned rows.
        k1: BM25 term frequency saturation.
        b: BM25 length normalization.

    Returns:
        Projected result rows, best first. May be shorter than
        ``max_results``, including empty.
    """
    if max_results <= 0 or not documents:
        return []

    bm25 = BM25(k1=k1, b=b)
    bm25.fit([build_search_text(doc, spec.search_fields) for doc in documents])
    ranked = bm25.score(query)

    top = [(idx, score) for idx, score in ranked[:max_results] if score > 0]
    logger.debug(
        "Search %s for %r: %d/%d positive in top %d",
        spec.name,
        query,
        len(top),
        len(documents),
        max_results,
    )
    return [project_fields(documents[idx], spec.output_fields) for idx, _ in top]
