"""
Data Ingestion: chapter page retrieval and verse extraction

Components:
- cache: write-once page cache keyed by (language, book, chapter)
- fetcher: cache-first, rate-limited page retrieval
- verse_parser: marker/content node flattening and verse state machines
- assembler: verse records across all languages for a target list
"""

from .assembler import CorpusAssembler, load_targets
from .cache import CacheKey, CacheStore
from .fetcher import PageFetcher, PageRequest
from .verse_parser import (
    DocumentNode,
    NodeKind,
    extract_chapter_verses,
    extract_target_verse,
    iter_document_nodes,
)

__all__ = [
    "CorpusAssembler",
    "load_targets",
    "CacheKey",
    "CacheStore",
    "PageFetcher",
    "PageRequest",
    "DocumentNode",
    "NodeKind",
    "extract_chapter_verses",
    "extract_target_verse",
    "iter_document_nodes",
]
