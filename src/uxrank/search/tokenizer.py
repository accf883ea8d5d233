"""Tokenizer shared by BM25 fitting and querying.

Pipeline:
1. Lowercase
2. Replace every character that is not a word character or whitespace with a space
3. Split on whitespace runs
4. Drop tokens of length <= 2

No stemming and no stopword list: the design corpora are short, keyword-dense
rows where "app", "saas" or "dark" carry as much signal as longer words.
"""

from __future__ import annotations

import re

__all__ = ["MIN_TOKEN_LENGTH", "tokenize"]

# Tokens must be strictly longer than this.
MIN_TOKEN_LENGTH = 2

_NON_WORD_RE = re.compile(r"[^\w\s]")


def tokenize(text: str) -> list[str]:
    """Normalize free text into index terms.

    Args:
        text: Input text. Non-string values are converted with ``str()``.

    Returns:
        Lowercase tokens longer than two characters, in input order.

    Examples:
        >>> tokenize("E-commerce / Retail!")
        ['commerce', 'retail']

        >>> tokenize("Web3 & 2024 NFT")
        ['web3', '2024', 'nft']

        >>> tokenize("   ")
        []
    """
    if not text:
        return []
    cleaned = _NON_WORD_RE.sub(" ", str(text).lower())
    return [t for t in cleaned.split() if len(t) > MIN_TOKEN_LENGTH]
