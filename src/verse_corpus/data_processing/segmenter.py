"""
Recursive sentence segmentation.

Sentences are routed by word count:
- 2 words or fewer: dropped
- 3-10 words: kept whole in the short pool
- more than 10 words: split into segments, kept when 3-10 words long

Splitting first cuts at hard separators (? ! ; :), then halves each part at
the interior ". " (or, failing that, ", ") nearest its midpoint until every
piece has at most 10 words or has no split point left.

Usage:
    python -m verse_corpus.data_processing.segmenter data/output/布農語聖經_normal.tsv
"""

import argparse
import re
import sys
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence, Union

from verse_corpus.config import SegmentConfig, Suffixes
from verse_corpus.utils.io import Sentence, derive_output_path, read_sentences, write_sentences
from verse_corpus.utils.quality import is_valid_length, word_count


TRAILING_SEGMENT_PUNCTUATION = re.compile(r"[,;.，。；]+$")


class Route(Enum):
    DROP = "drop"
    SHORT = "short"
    SPLIT = "split"


@dataclass
class SegmentResult:
    short: List[Sentence] = field(default_factory=list)
    split: List[Sentence] = field(default_factory=list)
    stats: Dict[str, int] = field(default_factory=dict)


def clean_segment(text: str) -> str:
    """Trim and strip a trailing run of , ; . (and full-width forms)."""
    return TRAILING_SEGMENT_PUNCTUATION.sub("", text.strip()).strip()


def _punctuation_positions(text: str, mark: str) -> List[int]:
    # Interior marks only: the mark must be followed by a space
    return [
        i for i in range(len(text) - 1)
        if text[i] == mark and text[i + 1] == " "
    ]


def find_split_position(text: str) -> Optional[int]:
    """
    Index of the split punctuation nearest the midpoint.

    Periods are preferred; commas are the fallback. Ties go to the earlier
    position.

    Returns:
        Character index of the punctuation mark, or None if there is none
    """
    positions = _punctuation_positions(text, ".") or _punctuation_positions(text, ",")
    if not positions:
        return None

    middle = len(text) / 2
    nearest = positions[0]
    for position in positions[1:]:
        if abs(position - middle) < abs(nearest - middle):
            nearest = position
    return nearest


def split_long_sentence(text: str, max_words: int = SegmentConfig.MAX_WORDS) -> List[str]:
    """
    Halve a sentence at punctuation until each piece is short enough.

    Each split yields text[:pos + 1] (keeping the mark) and text[pos + 2:]
    (skipping mark and space), so every step strictly shrinks the input.
    The midpoint of the input itself is measured untrimmed; halves are
    trimmed before they are split again.
    Runs on an explicit stack; results are in left-to-right order.

    Args:
        text: Sentence (one hard-separator part)
        max_words: Pieces at or below this length are not split further

    Returns:
        Cleaned, non-empty segments
    """
    segments = []
    stack = [text]

    while stack:
        part = stack.pop()
        if not part.strip():
            continue

        position = None
        if word_count(part) > max_words:
            position = find_split_position(part)

        if position is None:
            segment = clean_segment(part)
            if segment:
                segments.append(segment)
            continue

        # Push right half first so the left half is processed first
        stack.append(part[position + 2:].strip())
        stack.append(part[:position + 1].strip())

    return segments


def split_sentence(
    text: str,
    separators: Sequence[str] = SegmentConfig.HARD_SEPARATORS,
    min_words: int = SegmentConfig.MIN_WORDS,
    max_words: int = SegmentConfig.MAX_WORDS,
) -> List[str]:
    """
    Split a long sentence into segments of min_words..max_words words.

    Args:
        text: Plain sentence
        separators: Hard separators cut before midpoint splitting
        min_words: Shortest segment kept
        max_words: Longest segment kept

    Returns:
        Segments in left-to-right order
    """
    parts = [text]
    for separator in separators:
        parts = [piece for part in parts for piece in part.split(separator)]

    segments = []
    for part in parts:
        segments.extend(split_long_sentence(part, max_words=max_words))

    return [s for s in segments if is_valid_length(s, min_words, max_words)]


def route_sentence(
    text: str,
    drop_max_words: int = SegmentConfig.DROP_MAX_WORDS,
    max_words: int = SegmentConfig.MAX_WORDS,
) -> Route:
    count = word_count(text)
    if count <= drop_max_words:
        return Route.DROP
    if count <= max_words:
        return Route.SHORT
    return Route.SPLIT


def segment_sentences(
    sentences: Iterable[Sentence],
    min_words: int = SegmentConfig.MIN_WORDS,
    max_words: int = SegmentConfig.MAX_WORDS,
) -> SegmentResult:
    """
    Route each sentence to the short pool or split it into segments.

    Input order is preserved in both pools.
    """
    result = SegmentResult(stats={
        "original_count": 0,
        "dropped_count": 0,
        "short_count": 0,
        "split_count": 0,
        "discarded_count": 0,
    })
    stats = result.stats

    for sentence in sentences:
        stats["original_count"] += 1
        route = route_sentence(sentence.text, drop_max_words=min_words - 1, max_words=max_words)

        if route is Route.DROP:
            stats["dropped_count"] += 1
        elif route is Route.SHORT:
            text = clean_segment(sentence.text)
            if text:
                result.short.append(Sentence(sentence.reference, text))
                stats["short_count"] += 1
            else:
                stats["dropped_count"] += 1
        else:
            parts = split_sentence(sentence.text, min_words=min_words, max_words=max_words)
            if not parts:
                # Nothing within the length band survived
                stats["discarded_count"] += 1
            for part in parts:
                result.split.append(Sentence(sentence.reference, part))
            stats["split_count"] += len(parts)

    return result


def segment_file(input_path: Union[str, Path], verbose: bool = True) -> Dict:
    """
    Write the `_short` and `_split` pools of a tabular sentence file.

    Args:
        input_path: Path to <name>.tsv (typically _normal or _quotes)
        verbose: Print statistics

    Returns:
        Statistics dict
    """
    input_path = Path(input_path)
    result = segment_sentences(read_sentences(input_path))

    short_path = derive_output_path(input_path, "", Suffixes.SHORT)
    split_path = derive_output_path(input_path, "", Suffixes.SPLIT)
    write_sentences(short_path, result.short)
    write_sentences(split_path, result.split)

    stats = dict(result.stats)
    stats["short_file"] = str(short_path)
    stats["split_file"] = str(split_path)

    if verbose:
        print(f"\nSentence Segmentation ({input_path.name}):")
        print(f"  Original sentences:   {stats['original_count']:,}")
        print(f"  Dropped (too short):  {stats['dropped_count']:,}")
        print(f"  Short sentences:      {stats['short_count']:,} -> {short_path.name}")
        print(f"  Split segments:       {stats['split_count']:,} -> {split_path.name}")
        print(f"  Discarded long:       {stats['discarded_count']:,}")

    return stats


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Split long sentences into 3-10 word segments"
    )
    parser.add_argument("input", type=Path, help="Tabular sentence file (.tsv)")
    parser.add_argument("-q", "--quiet", action="store_true", help="Suppress output")
    args = parser.parse_args(argv)

    if not args.input.is_file():
        print(f"Error: file not found: {args.input}", file=sys.stderr)
        sys.exit(1)

    try:
        segment_file(args.input, verbose=not args.quiet)
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
