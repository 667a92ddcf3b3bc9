"""
verse_corpus: Multi-language sentence corpus from parallel bible translations

Builds training-sized sentence corpora, one per language, from per-chapter
translated pages.

Key modules:
- data_ingestion: page cache, rate-limited fetcher, verse extraction, assembly
- data_processing: normalization, quote extraction, segmentation, combining
- utils: references, tabular I/O, quality filters, parallel helpers
"""

__version__ = "1.0.0"

from .config import Paths, ScraperConfig, SegmentConfig, Suffixes, BOOKS

__all__ = [
    "__version__",
    "Paths",
    "ScraperConfig",
    "SegmentConfig",
    "Suffixes",
    "BOOKS",
]
