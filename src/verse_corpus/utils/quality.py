"""
Data quality filtering utilities.

Provides consistent length and uniqueness checks for sentence data across
processing stages.
"""

from typing import Iterable, List

from .io import Sentence


def word_count(text: str) -> int:
    """Number of whitespace-delimited tokens."""
    return len(text.split())


def is_valid_length(
    text: str,
    min_words: int = 3,
    max_words: int = 10
) -> bool:
    """
    Check if text has valid length for the corpus.

    Args:
        text: Text to check
        min_words: Minimum word count (inclusive)
        max_words: Maximum word count (inclusive)

    Returns:
        True if text length is valid
    """
    return min_words <= word_count(text) <= max_words


def unique_sentences(sentences: Iterable[Sentence]) -> List[Sentence]:
    """Drop repeated (reference, text) pairs, keeping the first occurrence."""
    seen = set()
    result = []
    for sentence in sentences:
        key = (sentence.reference, sentence.text)
        if key in seen:
            continue
        seen.add(key)
        result.append(sentence)
    return result
