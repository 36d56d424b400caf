"""Word tokenization for mail bodies.

A word is a maximal run of alphabetic characters (``str.isalpha``, i.e.
Unicode letter categories). Everything else, including digits, punctuation,
whitespace, combining marks and undecodable bytes, separates words.
No case folding, stemming or stopword removal is applied.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable
from itertools import groupby


def decode(data: bytes | str) -> str:
    """Decode raw mail bytes as UTF-8, replacing invalid sequences."""
    if isinstance(data, bytes):
        return data.decode("utf-8", errors="replace")
    return data


def tokenize(data: bytes | str) -> list[str]:
    """Split raw bytes or text into case-preserved alphabetic words.

    Args:
        data: Raw file bytes or already-decoded text.

    Returns:
        Words in document order. Empty for empty or non-alphabetic input.
    """
    text = decode(data)
    return [
        "".join(chars)
        for is_letter, chars in groupby(text, key=str.isalpha)
        if is_letter
    ]


def word_counts(words: Iterable[str]) -> Counter[str]:
    """Bag-of-words for a single document."""
    return Counter(words)


def document_word_counts(data: bytes | str) -> Counter[str]:
    """Tokenize a document and count its words."""
    return word_counts(tokenize(data))
