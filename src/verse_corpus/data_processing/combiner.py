"""
Final corpus assembly for one language.

Merges the four pools produced upstream:
- <prefix>_normal_short.tsv, <prefix>_quotes_short.tsv: kept in full
- <prefix>_normal_split.tsv, <prefix>_quotes_split.tsv: concatenated and
  capped by a uniform random sample without replacement

The union is deduplicated by (reference, text), sorted into canonical verse
order and written to <prefix>_final.tsv.

Usage:
    python -m verse_corpus.data_processing.combiner 布農語聖經 --dir data/output --seed 42
"""

import argparse
import logging
import random
import sys
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Union

from verse_corpus.config import SegmentConfig, Suffixes
from verse_corpus.utils.io import Sentence, read_sentences, write_sentences
from verse_corpus.utils.logging_utils import setup_logging
from verse_corpus.utils.quality import unique_sentences
from verse_corpus.utils.references import sort_sentences

logger = logging.getLogger(__name__)


POOL_SUFFIXES = {
    "short_plain": Suffixes.NORMAL + Suffixes.SHORT,
    "short_quoted": Suffixes.QUOTES + Suffixes.SHORT,
    "split_plain": Suffixes.NORMAL + Suffixes.SPLIT,
    "split_quoted": Suffixes.QUOTES + Suffixes.SPLIT,
}


def sample_pool(
    pool: Sequence[Sentence],
    cap: int = SegmentConfig.SAMPLE_SIZE,
    rng: Optional[random.Random] = None,
) -> List[Sentence]:
    """
    Uniform random sample of at most `cap` sentences, without replacement.

    Pools no larger than the cap are returned whole.
    """
    if len(pool) <= cap:
        return list(pool)
    rng = rng or random.Random()
    return rng.sample(list(pool), cap)


def combine_pools(
    short_plain: Sequence[Sentence],
    short_quoted: Sequence[Sentence],
    split_plain: Sequence[Sentence],
    split_quoted: Sequence[Sentence],
    cap: int = SegmentConfig.SAMPLE_SIZE,
    rng: Optional[random.Random] = None,
) -> List[Sentence]:
    """
    Short pools in full plus a capped sample of the split pools.

    Returns:
        Sentences unique by (reference, text), in canonical verse order
    """
    short = list(short_plain) + list(short_quoted)
    sampled = sample_pool(list(split_plain) + list(split_quoted), cap=cap, rng=rng)
    return sort_sentences(unique_sentences(short + sampled))


def pool_paths(prefix: str, directory: Union[str, Path] = ".") -> Dict[str, Path]:
    directory = Path(directory)
    return {
        name: directory / f"{prefix}{suffix}{Suffixes.TSV}"
        for name, suffix in POOL_SUFFIXES.items()
    }


def combine_prefix(
    prefix: str,
    directory: Union[str, Path] = ".",
    cap: int = SegmentConfig.SAMPLE_SIZE,
    seed: Optional[int] = SegmentConfig.DEFAULT_SEED,
    verbose: bool = True,
) -> Dict:
    """
    Build <prefix>_final.tsv from the four pool files of a language.

    A missing pool file counts as an empty pool.

    Args:
        prefix: Language file prefix, e.g. "布農語聖經"
        directory: Directory holding the pool files
        cap: Split pool sample size
        seed: Seed for reproducible sampling (None = system entropy)
        verbose: Print statistics

    Returns:
        Statistics dict

    Raises:
        FileNotFoundError: if none of the pool files exist
    """
    paths = pool_paths(prefix, directory)
    if not any(path.exists() for path in paths.values()):
        raise FileNotFoundError(f"No pool files found for prefix {prefix!r} in {directory}")

    pools = {}
    for name, path in paths.items():
        if path.exists():
            pools[name] = read_sentences(path)
        else:
            logger.warning("Pool file missing, treating as empty: %s", path)
            pools[name] = []

    if not pools["split_plain"] and not pools["split_quoted"]:
        logger.warning("Split pools are empty for %s", prefix)

    rng = random.Random(seed)
    final = combine_pools(
        pools["short_plain"],
        pools["short_quoted"],
        pools["split_plain"],
        pools["split_quoted"],
        cap=cap,
        rng=rng,
    )

    output_path = Path(directory) / f"{prefix}{Suffixes.FINAL}{Suffixes.TSV}"
    write_sentences(output_path, final)

    split_total = len(pools["split_plain"]) + len(pools["split_quoted"])
    stats = {
        "short_count": len(pools["short_plain"]) + len(pools["short_quoted"]),
        "split_pool_count": split_total,
        "split_sampled_count": min(split_total, cap),
        "total_count": len(final),
        "output_file": str(output_path),
    }

    if verbose:
        print(f"\nCorpus Combination ({prefix}):")
        print(f"  Short sentences:     {stats['short_count']:,}")
        print(f"  Split pool:          {stats['split_pool_count']:,}")
        print(f"  Sampled split:       {stats['split_sampled_count']:,}")
        print(f"  Final sentences:     {stats['total_count']:,}")
        print(f"  Output: {output_path.name}")

    return stats


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Combine short and sampled split sentences into the final corpus"
    )
    parser.add_argument("prefix", help="Language file prefix, e.g. 布農語聖經")
    parser.add_argument(
        "--dir",
        type=Path,
        default=Path("."),
        help="Directory holding the pool files (default: current directory)"
    )
    parser.add_argument(
        "--sample-size",
        type=int,
        default=SegmentConfig.SAMPLE_SIZE,
        help=f"Split sentences sampled (default: {SegmentConfig.SAMPLE_SIZE})"
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=SegmentConfig.DEFAULT_SEED,
        help="Random seed for reproducible sampling"
    )
    parser.add_argument("-q", "--quiet", action="store_true", help="Suppress output")
    args = parser.parse_args(argv)
    setup_logging(not args.quiet)

    if not args.dir.is_dir():
        print(f"Error: directory not found: {args.dir}", file=sys.stderr)
        sys.exit(1)

    try:
        combine_prefix(
            args.prefix,
            directory=args.dir,
            cap=args.sample_size,
            seed=args.seed,
            verbose=not args.quiet,
        )
    except (FileNotFoundError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
