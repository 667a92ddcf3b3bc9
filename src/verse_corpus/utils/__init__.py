"""
Shared utilities for the corpus pipeline.

Provides shared functionality across all stages:
- io: verse record JSON and tabular sentence files
- references: reference parsing and canonical ordering
- quality: length and uniqueness filters
- parallel: thread pool helper for retrieval
- validation: record schema checks
"""

from .io import (
    Sentence,
    VerseRecord,
    derive_output_path,
    iter_sentences,
    load_verse_records,
    read_sentences,
    save_verse_records,
    write_sentences,
)
from .quality import is_valid_length, unique_sentences, word_count
from .references import (
    VerseReference,
    compare_references,
    format_reference,
    parse_reference,
    sort_key,
    sort_sentences,
)

__all__ = [
    # io
    "Sentence",
    "VerseRecord",
    "derive_output_path",
    "iter_sentences",
    "load_verse_records",
    "read_sentences",
    "save_verse_records",
    "write_sentences",
    # quality
    "is_valid_length",
    "unique_sentences",
    "word_count",
    # references
    "VerseReference",
    "compare_references",
    "format_reference",
    "parse_reference",
    "sort_key",
    "sort_sentences",
]
