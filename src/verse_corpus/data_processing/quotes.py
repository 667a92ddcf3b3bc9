"""
Quote span extraction from Marked sentences.

Two independent delimiter grammars are scanned:
- angle brackets:  <<quoted text>>
- curly quotes:    “quoted text”

Usage:
    python -m verse_corpus.data_processing.quotes data/output/布農語聖經_special.tsv
"""

import argparse
import sys
from pathlib import Path
from typing import Dict, Iterable, List, Union

from verse_corpus.config import Suffixes
from verse_corpus.utils.io import Sentence, derive_output_path, read_sentences, write_sentences


ANGLE_OPEN = "<<"
ANGLE_CLOSE = ">>"
CURLY_OPEN = "“"
CURLY_CLOSE = "”"


def extract_angle_quotes(sentence: str) -> List[str]:
    """
    Collect <<...>> spans.

    A span still holding a single '<' or '>' is malformed and dropped.
    An opening marker inside an open span is skipped; the span continues.
    """
    quotes = []
    current = []
    in_quote = False
    i = 0

    while i < len(sentence):
        pair = sentence[i:i + 2]
        if pair == ANGLE_OPEN:
            in_quote = True
            i += 2
            continue
        if pair == ANGLE_CLOSE and in_quote:
            in_quote = False
            quote = "".join(current).strip()
            if quote and "<" not in quote and ">" not in quote:
                quotes.append(quote)
            current = []
            i += 2
            continue
        if in_quote:
            current.append(sentence[i])
        i += 1

    return quotes


def extract_curly_quotes(sentence: str) -> List[str]:
    """Collect “...” spans. A repeated “ inside an open span is skipped."""
    quotes = []
    current = []
    in_quote = False

    for char in sentence:
        if char == CURLY_OPEN:
            in_quote = True
            continue
        if char == CURLY_CLOSE and in_quote:
            in_quote = False
            quote = "".join(current).strip()
            if quote:
                quotes.append(quote)
            current = []
            continue
        if in_quote:
            current.append(char)

    return quotes


def extract_quotes(sentence: str) -> List[str]:
    """Angle spans then curly spans, without repeats, in first-seen order."""
    return list(dict.fromkeys(extract_angle_quotes(sentence) + extract_curly_quotes(sentence)))


def extract_quote_sentences(sentences: Iterable[Sentence]) -> List[Sentence]:
    """
    Extract quotes from every sentence, unique by quote text.

    The first reference a quote appears under is the one kept.
    """
    seen = set()
    result = []
    for sentence in sentences:
        for quote in extract_quotes(sentence.text):
            if quote in seen:
                continue
            seen.add(quote)
            result.append(Sentence(reference=sentence.reference, text=quote))
    return result


def extract_quotes_file(input_path: Union[str, Path], verbose: bool = True) -> Dict:
    """
    Write the quotes of a `_special` file to the matching `_quotes` file.

    Args:
        input_path: Path to <name>_special.tsv
        verbose: Print statistics

    Returns:
        Statistics dict
    """
    input_path = Path(input_path)
    sentences = read_sentences(input_path)

    stats = {
        "original_count": len(sentences),
        "angle_quote_sentences": 0,
        "curly_quote_sentences": 0,
        "quotes_count": 0,
        "unique_quotes_count": 0,
    }

    for sentence in sentences:
        if ANGLE_OPEN in sentence.text:
            stats["angle_quote_sentences"] += 1
        if CURLY_OPEN in sentence.text or CURLY_CLOSE in sentence.text:
            stats["curly_quote_sentences"] += 1
        stats["quotes_count"] += len(extract_quotes(sentence.text))

    quotes = extract_quote_sentences(sentences)
    stats["unique_quotes_count"] = len(quotes)

    output_path = derive_output_path(input_path, Suffixes.SPECIAL, Suffixes.QUOTES)
    write_sentences(output_path, quotes)
    stats["output_file"] = str(output_path)

    if verbose:
        print(f"\nQuote Extraction ({input_path.name}):")
        print(f"  Sentences:              {stats['original_count']:,}")
        print(f"  With << >> quotes:      {stats['angle_quote_sentences']:,}")
        print(f"  With “ ” quotes:        {stats['curly_quote_sentences']:,}")
        print(f"  Quotes extracted:       {stats['quotes_count']:,}")
        print(f"  Unique quotes:          {stats['unique_quotes_count']:,}")
        print(f"  Output: {output_path.name}")

    return stats


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Extract quoted spans from marked sentences"
    )
    parser.add_argument("input", type=Path, help="Marked sentence file (<name>_special.tsv)")
    parser.add_argument("-q", "--quiet", action="store_true", help="Suppress output")
    args = parser.parse_args(argv)

    if not args.input.is_file():
        print(f"Error: file not found: {args.input}", file=sys.stderr)
        sys.exit(1)

    try:
        extract_quotes_file(args.input, verbose=not args.quiet)
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
