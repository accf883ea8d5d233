"""Pick one style row from BM25 results using reasoning priorities.

BM25 orders rows by lexical overlap with the query; the reasoning table
orders styles by fit for the category. A direct name hit on an earlier
priority wins outright; otherwise rows are re-scored by where each priority
keyword appears.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence

__all__ = [
    "ANYWHERE_WEIGHT",
    "KEYWORD_WEIGHT",
    "NAME_WEIGHT",
    "priority_score",
    "select_best",
]

logger = logging.getLogger(__name__)

NAME_WEIGHT = 10
KEYWORD_WEIGHT = 3
ANYWHERE_WEIGHT = 1

_NAME_FIELD = "Style Category"
_KEYWORD_FIELD = "Keywords"


def priority_score(
    result: dict[str, str],
    priority_keywords: Sequence[str],
    name_field: str = _NAME_FIELD,
    keyword_field: str = _KEYWORD_FIELD,
) -> int:
    """Weighted priority score of one result row.

    Per keyword, only the strongest location counts: name, then keyword
    tags, then anywhere in the serialized row.
    """
    name = result.get(name_field, "").lower()
    tags = result.get(keyword_field, "").lower()
    serialized = json.dumps(result, ensure_ascii=False).lower()

    score = 0
    for kw in priority_keywords:
        kw_lower = kw.lower().strip()
        if kw_lower in name:
            score += NAME_WEIGHT
        elif kw_lower in tags:
            score += KEYWORD_WEIGHT
        elif kw_lower in serialized:
            score += ANYWHERE_WEIGHT
    return score


def select_best(
    results: Sequence[dict[str, str]],
    priority_keywords: Sequence[str],
    name_field: str = _NAME_FIELD,
    keyword_field: str = _KEYWORD_FIELD,
) -> dict[str, str]:
    """Choose the best result for the given priorities.

    Args:
        results: Rows in BM25 rank order.
        priority_keywords: Style priorities, most important first.
        name_field: Field holding the row's name.
        keyword_field: Field holding the row's keyword tags.

    Returns:
        The chosen row, or an empty dict when ``results`` is empty.
    """
    if not results:
        return {}
    if not priority_keywords:
        return results[0]

    for priority in priority_keywords:
        p_lower = priority.lower().strip()
        for result in results:
            name = result.get(name_field, "").lower()
            # An unnamed row would match every priority.
            if name and (p_lower in name or name in p_lower):
                logger.debug("Selected %r by priority %r", result.get(name_field), priority)
                return result

    best = results[0]
    best_score = 0
    for result in results:
        score = priority_score(result, priority_keywords, name_field, keyword_field)
        if score > best_score:
            best, best_score = result, score

    logger.debug("Selected %r with priority score %d", best.get(name_field), best_score)
    return best
