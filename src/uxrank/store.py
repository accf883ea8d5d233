"""Collection store for uxrank.

Owns the design collections and the reasoning table. Each file is loaded on
first use and cached for the lifetime of the store; the data is static per
deployment so the cache is never invalidated.
"""

from __future__ import annotations

import json
import logging
import threading
from pathlib import Path
from types import MappingProxyType
from typing import TYPE_CHECKING

from uxrank.exceptions import DataError
from uxrank.search.bm25 import DEFAULT_B, DEFAULT_K1
from uxrank.search.collections import COLLECTIONS, search_documents
from uxrank.types import ReasoningRule

if TYPE_CHECKING:
    from uxrank.config import UxrankConfig
    from uxrank.types import Document

__all__ = [
    "REASONING_FIELDS",
    "CollectionStore",
    "load_documents",
    "load_rules",
]

logger = logging.getLogger(__name__)

# ReasoningRule attribute → column name in ui-reasoning.json
REASONING_FIELDS: dict[str, str] = {
    "category": "UI_Category",
    "recommended_pattern": "Recommended_Pattern",
    "style_priority": "Style_Priority",
    "color_mood": "Color_Mood",
    "typography_mood": "Typography_Mood",
    "key_effects": "Key_Effects",
    "anti_patterns": "Anti_Patterns",
    "decision_rules": "Decision_Rules",
    "severity": "Severity",
}


def _as_text(value: object) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, (dict, list)):
        return json.dumps(value, ensure_ascii=False)
    return str(value)


def load_documents(path: Path) -> tuple[Document, ...]:
    """Load a collection file: a JSON array of flat objects.

    Values are coerced to strings (``null`` → ``""``) and each row is
    returned as a read-only mapping.

    Raises:
        DataError: If the file is unreadable or not an array of objects.
    """
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        logger.error("Failed to load collection %s: %s", path, e)
        raise DataError(f"Failed to load collection {path}: {e}") from e

    if not isinstance(data, list):
        raise DataError(f"Collection {path} must be a JSON array, got {type(data).__name__}")

    rows: list[Document] = []
    for i, row in enumerate(data):
        if not isinstance(row, dict):
            raise DataError(f"Collection {path} row {i} is not an object")
        rows.append(MappingProxyType({str(k): _as_text(v) for k, v in row.items()}))

    logger.info("Loaded %d rows from %s", len(rows), path)
    return tuple(rows)


def load_rules(path: Path) -> tuple[ReasoningRule, ...]:
    """Load the reasoning table.

    Raises:
        DataError: If the file is malformed or a row has no ``UI_Category``.
    """
    rules: list[ReasoningRule] = []
    for i, row in enumerate(load_documents(path)):
        if "UI_Category" not in row:
            raise DataError(f"Reasoning table {path} row {i} has no UI_Category")
        rules.append(
            ReasoningRule(**{attr: row.get(col, "") for attr, col in REASONING_FIELDS.items()})
        )
    return tuple(rules)


class CollectionStore:
    """Load-once access to the design collections and reasoning table.

    Args:
        data_dir: Directory holding ``styles.json``, ``colors.json``, etc.
        reasoning_file: Reasoning table filename inside ``data_dir``.
        k1: BM25 term frequency saturation for searches.
        b: BM25 length normalization for searches.
        strict: When ``True`` a missing file raises :class:`DataError`;
            otherwise it is treated as an empty collection.

    Usage::

        store = CollectionStore(Path("data"))
        rows = store.search("style", "glass dark dashboard", max_results=3)
    """

    def __init__(
        self,
        data_dir: Path,
        reasoning_file: str = "ui-reasoning.json",
        k1: float = DEFAULT_K1,
        b: float = DEFAULT_B,
        *,
        strict: bool = True,
    ) -> None:
        self.data_dir = Path(data_dir)
        self.reasoning_file = reasoning_file
        self.k1 = k1
        self.b = b
        self.strict = strict
        self._documents: dict[str, tuple[Document, ...]] = {}
        self._rules: tuple[ReasoningRule, ...] | None = None
        self._lock = threading.Lock()

    @classmethod
    def from_config(cls, config: UxrankConfig, *, strict: bool = True) -> CollectionStore:
        """Create a store from project configuration."""
        return cls(
            config.data.resolve_directory(),
            reasoning_file=config.data.reasoning_file,
            k1=config.bm25.k1,
            b=config.bm25.b,
            strict=strict,
        )

    def _missing(self, path: Path) -> bool:
        if path.exists():
            return False
        if self.strict:
            raise DataError(f"Data file not found: {path}")
        logger.warning("Data file not found, treating as empty: %s", path)
        return True

    def _load_file(self, filename: str) -> tuple[Document, ...]:
        cached = self._documents.get(filename)
        if cached is not None:
            return cached
        with self._lock:
            if filename not in self._documents:
                path = self.data_dir / filename
                self._documents[filename] = () if self._missing(path) else load_documents(path)
            return self._documents[filename]

    def documents(self, domain: str) -> tuple[Document, ...]:
        """Return all rows of a collection, loading it on first use.

        Unknown collection names yield an empty tuple.
        """
        spec = COLLECTIONS.get(domain)
        if spec is None:
            return ()
        return self._load_file(spec.filename)

    def reasoning_rules(self) -> tuple[ReasoningRule, ...]:
        """Return the reasoning table, loading it on first use."""
        if self._rules is not None:
            return self._rules
        with self._lock:
            if self._rules is None:
                path = self.data_dir / self.reasoning_file
                self._rules = () if self._missing(path) else load_rules(path)
            return self._rules

    def search(self, domain: str, query: str, max_results: int = 3) -> list[dict[str, str]]:
        """BM25-search one collection.

        Args:
            domain: Collection name (``"style"``, ``"color"``, ...).
            query: Free-text query.
            max_results: Upper bound on returned rows.

        Returns:
            Projected rows with positive score, best first. Empty for an
            unknown collection.
        """
        spec = COLLECTIONS.get(domain)
        if spec is None:
            logger.debug("Unknown collection %r", domain)
            return []
        return search_documents(
            spec, self.documents(domain), query, max_results, k1=self.k1, b=self.b
        )

    def validate(self) -> dict[str, int]:
        """Load every collection and the reasoning table up front.

        Returns:
            Row count per collection name, plus ``"reasoning"``.

        Raises:
            DataError: On the first missing (in strict mode) or malformed file.
        """
        counts = {name: len(self.documents(name)) for name in COLLECTIONS}
        counts["reasoning"] = len(self.reasoning_rules())
        return counts
