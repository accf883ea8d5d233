"""BM25 search over the design collections.

Components:
- tokenizer: text → index terms
- bm25: corpus statistics and Okapi BM25 scoring
- collections: named collections, field projection, top-K filtering
"""

from uxrank.search.bm25 import BM25
from uxrank.search.collections import (
    COLLECTIONS,
    build_search_text,
    get_collection,
    project_fields,
    search_documents,
)
from uxrank.search.tokenizer import tokenize

__all__ = [
    "BM25",
    "COLLECTIONS",
    "build_search_text",
    "get_collection",
    "project_fields",
    "search_documents",
    "tokenize",
]
