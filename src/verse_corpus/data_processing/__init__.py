"""
Data Processing: sentence corpus stages.

Components:
- verse_export: verse records -> per-language sentence files
- normalizer: trailing punctuation cleanup, Plain/Marked split
- quotes: << >> and “ ” quote span extraction
- segmenter: short/split routing and recursive midpoint splitting
- combiner: short pools + sampled split pools -> final corpus
- consolidator: final corpora -> one Parquet file
"""

from .combiner import combine_pools, combine_prefix, sample_pool
from .normalizer import SentenceClass, classify_sentence, clean_sentence, split_by_class
from .quotes import extract_quote_sentences, extract_quotes
from .segmenter import find_split_position, segment_sentences, split_long_sentence, split_sentence

__all__ = [
    "combine_pools",
    "combine_prefix",
    "sample_pool",
    "SentenceClass",
    "classify_sentence",
    "clean_sentence",
    "split_by_class",
    "extract_quote_sentences",
    "extract_quotes",
    "find_split_position",
    "segment_sentences",
    "split_long_sentence",
    "split_sentence",
]
