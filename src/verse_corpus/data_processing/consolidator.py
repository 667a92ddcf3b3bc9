"""
Consolidate per-language final corpora to a single Parquet file.

Reads every <language>_final.tsv in a directory and writes one table with an
explicit PyArrow schema, so downstream training code can load all languages
at once.

Usage:
    python -m verse_corpus.data_processing.consolidator data/output -o data/output/final_corpus.parquet
"""

import argparse
import sys
from pathlib import Path
from typing import Any, Dict, Union

import pandas as pd
import pyarrow as pa
import pyarrow.parquet as pq

from verse_corpus.config import Paths, Suffixes
from verse_corpus.utils.io import read_sentences
from verse_corpus.utils.quality import word_count
from verse_corpus.utils.references import parse_reference


# ============================================================================
# PyArrow Schema Definition (Explicit for type safety)
# ============================================================================

FINAL_CORPUS_SCHEMA = pa.schema([
    ("language", pa.string()),
    ("reference", pa.string()),
    ("book", pa.string()),
    ("chapter", pa.int16()),
    ("verse", pa.int16()),
    ("text", pa.string()),
    ("word_count", pa.int16()),
])


def consolidate_final_corpora(
    input_dir: Union[str, Path],
    output_path: Union[str, Path],
    compression: str = "snappy",
    verbose: bool = True,
) -> Dict[str, Any]:
    """
    Gather all *_final.tsv files of a directory into one Parquet file.

    Args:
        input_dir: Directory with <language>_final.tsv files
        output_path: Output parquet file path
        compression: Parquet compression (snappy, gzip, zstd)
        verbose: Print progress

    Returns:
        Statistics dict

    Raises:
        FileNotFoundError: if the directory holds no final corpus files
    """
    input_dir = Path(input_dir)
    output_path = Path(output_path)
    suffix = f"{Suffixes.FINAL}{Suffixes.TSV}"

    files = sorted(input_dir.glob(f"*{suffix}"))
    if not files:
        raise FileNotFoundError(f"No *{suffix} files in {input_dir}")

    rows = []
    per_language = {}
    for path in files:
        language = path.name[: -len(suffix)]
        count = 0
        for sentence in read_sentences(path):
            ref = parse_reference(sentence.reference)
            rows.append({
                "language": language,
                "reference": sentence.reference,
                "book": ref.book,
                "chapter": ref.chapter,
                "verse": ref.verse,
                "text": sentence.text,
                "word_count": word_count(sentence.text),
            })
            count += 1
        per_language[language] = count
        if verbose:
            print(f"  {path.name}: {count:,} sentences")

    table = pa.Table.from_pylist(rows, schema=FINAL_CORPUS_SCHEMA)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    pq.write_table(table, output_path, compression=compression)

    stats = {
        "files": len(files),
        "rows": table.num_rows,
        "languages": per_language,
        "output_file": str(output_path),
    }

    if verbose:
        size = output_path.stat().st_size
        print(f"\nWritten {table.num_rows:,} rows from {len(files)} files")
        print(f"  Size: {size / 1024:.1f}KB")
        print(f"  Output: {output_path}")

    return stats


def load_consolidated(path: Union[str, Path]) -> pd.DataFrame:
    """Load a consolidated corpus Parquet file as a DataFrame."""
    return pd.read_parquet(path)


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Consolidate per-language final corpora to Parquet"
    )
    parser.add_argument("input_dir", type=Path, help="Directory with *_final.tsv files")
    parser.add_argument(
        "-o", "--output",
        type=Path,
        default=Paths.CONSOLIDATED,
        help="Output parquet path"
    )
    parser.add_argument("-q", "--quiet", action="store_true", help="Suppress output")
    args = parser.parse_args(argv)

    if not args.input_dir.is_dir():
        print(f"Error: directory not found: {args.input_dir}", file=sys.stderr)
        sys.exit(1)

    try:
        consolidate_final_corpora(args.input_dir, args.output, verbose=not args.quiet)
    except (FileNotFoundError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
