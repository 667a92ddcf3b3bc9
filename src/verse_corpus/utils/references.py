"""
Verse reference parsing and canonical ordering.

References are written "Book C:V" (e.g. "馬可福音 1:3"). Canonical order is
(book index in BOOKS, chapter, verse); books missing from the table sort after
every known book.
"""

import re
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple, Union

from verse_corpus.config import BOOK_ORDER, BOOKS


REFERENCE_PATTERN = re.compile(r"^(.+?)\s*(\d+):(\d+)$")
CHAPTER_PATTERN = re.compile(r"^(.+?)\s*(\d+)$")

UNKNOWN_BOOK_INDEX = len(BOOKS)


@dataclass(frozen=True)
class VerseReference:
    """A (book, chapter, verse) triple. chapter/verse are 0 when unparseable."""
    book: str
    chapter: int
    verse: int

    @property
    def verse_key(self) -> str:
        """Chapter:verse key as printed in chapter pages."""
        return f"{self.chapter}:{self.verse}"

    @property
    def is_degenerate(self) -> bool:
        return self.chapter == 0 and self.verse == 0

    def __str__(self) -> str:
        return format_reference(self)


@dataclass(frozen=True)
class ChapterTarget:
    """A chapter to assemble; verses=None selects every verse on the page."""
    book: str
    chapter: int
    verses: Optional[Tuple[int, ...]] = None


def parse_reference(reference: str) -> VerseReference:
    """
    Parse "Book C:V" into a VerseReference.

    Strings without a trailing chapter:verse become a degenerate reference
    holding the whole string as the book. It sorts after every known book.
    """
    match = REFERENCE_PATTERN.match(reference)
    if not match:
        return VerseReference(book=reference, chapter=0, verse=0)
    book, chapter, verse = match.groups()
    return VerseReference(book=book.strip(), chapter=int(chapter), verse=int(verse))


def format_reference(ref: VerseReference) -> str:
    return f"{ref.book} {ref.chapter}:{ref.verse}"


def book_index(book: str) -> int:
    return BOOK_ORDER.get(book, UNKNOWN_BOOK_INDEX)


def sort_key(reference: Union[str, VerseReference]) -> Tuple[int, int, int]:
    """Canonical sort key for a reference string or VerseReference."""
    if isinstance(reference, str):
        reference = parse_reference(reference)
    if reference.is_degenerate:
        return (UNKNOWN_BOOK_INDEX, 0, 0)
    return (book_index(reference.book), reference.chapter, reference.verse)


def compare_references(
    a: Union[str, VerseReference],
    b: Union[str, VerseReference],
) -> int:
    """Three-way comparison in canonical order: -1, 0 or 1."""
    key_a, key_b = sort_key(a), sort_key(b)
    if key_a < key_b:
        return -1
    if key_a > key_b:
        return 1
    return 0


def sort_sentences(sentences: Iterable) -> List:
    """Stable sort of objects with a `reference` attribute into canonical order."""
    return sorted(sentences, key=lambda s: sort_key(s.reference))


def parse_target(target: str) -> ChapterTarget:
    """
    Parse an assembly target.

    "Book C:V" selects one verse, "Book C" the whole chapter.

    Raises:
        ValueError: if the target has neither form
    """
    target = target.strip()
    ref = parse_reference(target)
    if not ref.is_degenerate:
        return ChapterTarget(book=ref.book, chapter=ref.chapter, verses=(ref.verse,))

    match = CHAPTER_PATTERN.match(target)
    if not match:
        raise ValueError(f"Invalid target: {target!r}")
    book, chapter = match.groups()
    return ChapterTarget(book=book.strip(), chapter=int(chapter))
