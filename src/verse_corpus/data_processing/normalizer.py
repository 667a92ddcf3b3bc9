"""
Sentence normalization and Plain/Marked classification.

A sentence is Marked when it contains any character outside letters,
digits, whitespace and the punctuation allow-list  , . ; - ? : ʼ
(quotation delimiters such as << >> “ ” are the usual culprits). Marked
sentences go to quote extraction, Plain ones straight to segmentation.

Usage:
    python -m verse_corpus.data_processing.normalizer data/output/布農語聖經.tsv
"""

import argparse
import re
import sys
from enum import Enum
from pathlib import Path
from typing import Dict, Iterable, List, Tuple, Union

from verse_corpus.config import Suffixes
from verse_corpus.utils.io import Sentence, derive_output_path, read_sentences, write_sentences


# Trailing sentence-final punctuation removed by clean_sentence()
TRAILING_PUNCTUATION = re.compile(r"[。，,.]+$")

# Any character outside the unmarked set makes a sentence Marked
MARKED_PATTERN = re.compile(r"[^\w\s,.;\-?:ʼ]")


class SentenceClass(Enum):
    PLAIN = "plain"
    MARKED = "marked"


def clean_sentence(text: str) -> str:
    """Trim and strip a trailing run of periods/commas (ASCII and full-width)."""
    return TRAILING_PUNCTUATION.sub("", text.strip()).strip()


def classify_sentence(text: str) -> SentenceClass:
    if MARKED_PATTERN.search(text):
        return SentenceClass.MARKED
    return SentenceClass.PLAIN


def split_by_class(sentences: Iterable[Sentence]) -> Tuple[List[Sentence], List[Sentence]]:
    """
    Partition sentences into (plain, marked), preserving input order.
    """
    plain, marked = [], []
    for sentence in sentences:
        if classify_sentence(sentence.text) is SentenceClass.MARKED:
            marked.append(sentence)
        else:
            plain.append(sentence)
    return plain, marked


def classify_file(input_path: Union[str, Path], verbose: bool = True) -> Dict:
    """
    Split a tabular sentence file into `_normal` and `_special` files.

    Args:
        input_path: Path to <name>.tsv
        verbose: Print statistics

    Returns:
        Statistics dict
    """
    input_path = Path(input_path)
    sentences = read_sentences(input_path)
    plain, marked = split_by_class(sentences)

    normal_path = derive_output_path(input_path, "", Suffixes.NORMAL)
    special_path = derive_output_path(input_path, "", Suffixes.SPECIAL)
    write_sentences(normal_path, plain)
    write_sentences(special_path, marked)

    stats = {
        "total_sentences": len(sentences),
        "normal_count": len(plain),
        "special_count": len(marked),
        "normal_file": str(normal_path),
        "special_file": str(special_path),
    }

    if verbose:
        print(f"\nSentence Classification ({input_path.name}):")
        print(f"  Total sentences:   {stats['total_sentences']:,}")
        print(f"  Plain sentences:   {stats['normal_count']:,} -> {normal_path.name}")
        print(f"  Marked sentences:  {stats['special_count']:,} -> {special_path.name}")
        if stats["total_sentences"] > 0:
            ratio = stats["special_count"] / stats["total_sentences"] * 100
            print(f"  Marked ratio: {ratio:.2f}%")

    return stats


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Split a sentence file into plain and marked (quoted) sentences"
    )
    parser.add_argument("input", type=Path, help="Tabular sentence file (.tsv)")
    parser.add_argument("-q", "--quiet", action="store_true", help="Suppress output")
    args = parser.parse_args(argv)

    if not args.input.is_file():
        print(f"Error: file not found: {args.input}", file=sys.stderr)
        sys.exit(1)

    try:
        classify_file(args.input, verbose=not args.quiet)
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
