"""
Verse records -> per-language sentence files.

Reads the assembled verse records JSON and writes one <language>.tsv per
language, text cleaned of trailing periods/commas and lines in canonical
verse order.

Usage:
    python -m verse_corpus.data_processing.verse_export data/output/bible-verses.json -o data/output
"""

import argparse
import re
import sys
from pathlib import Path
from typing import Dict, Iterable, List, Union

from verse_corpus.config import Paths, Suffixes
from verse_corpus.utils.io import Sentence, VerseRecord, load_verse_records, write_sentences
from verse_corpus.utils.references import sort_sentences

from .normalizer import clean_sentence


UNSAFE_FILENAME_CHARS = re.compile(r'[/\\?%*:|"<>]')


def language_filename(language: str) -> str:
    """Language name -> file name, unsafe characters replaced by '_'."""
    return UNSAFE_FILENAME_CHARS.sub("_", language) + Suffixes.TSV


def group_by_language(records: Iterable[VerseRecord]) -> Dict[str, List[Sentence]]:
    """
    Collect cleaned sentences per language, sorted into canonical order.

    Languages appear in first-seen order.
    """
    by_language: Dict[str, List[Sentence]] = {}
    for record in records:
        for language, text in record.translations.items():
            text = clean_sentence(text)
            if not text:
                continue
            by_language.setdefault(language, []).append(Sentence(record.reference, text))
    return {language: sort_sentences(sentences) for language, sentences in by_language.items()}


def export_languages(
    records_path: Union[str, Path],
    output_dir: Union[str, Path],
    verbose: bool = True,
) -> Dict:
    """
    Write one tabular sentence file per language.

    Args:
        records_path: Verse records JSON
        output_dir: Directory for <language>.tsv files
        verbose: Print statistics

    Returns:
        Statistics dict: language -> sentence count
    """
    output_dir = Path(output_dir)
    by_language = group_by_language(load_verse_records(records_path))

    stats = {}
    for language, sentences in by_language.items():
        path = output_dir / language_filename(language)
        stats[language] = write_sentences(path, sentences)
        if verbose:
            print(f"  Created {path.name} ({stats[language]:,} sentences)")

    return stats


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Export verse records to one sentence file per language"
    )
    parser.add_argument("input", type=Path, help="Verse records JSON")
    parser.add_argument(
        "-o", "--output-dir",
        type=Path,
        default=Paths.OUTPUT,
        help="Output directory for per-language files"
    )
    parser.add_argument("-q", "--quiet", action="store_true", help="Suppress output")
    args = parser.parse_args(argv)
    verbose = not args.quiet

    if not args.input.is_file():
        print(f"Error: file not found: {args.input}", file=sys.stderr)
        sys.exit(1)

    try:
        stats = export_languages(args.input, args.output_dir, verbose=verbose)
    except (ValueError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    if verbose:
        print(f"\nExported {len(stats)} languages to {args.output_dir}")


if __name__ == "__main__":
    main()
