"""
Corpus assembly: chapter pages -> verse records.

Drives the PageFetcher and the verse extractors across the requested
(book, chapter, verse) space and every configured language, producing one
VerseRecord per verse with whatever translations were retrieved.

Usage:
    python -m verse_corpus.data_ingestion.assembler targets.txt -o data/output/bible-verses.json
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Optional, Tuple, Union

from lxml import etree
from tqdm import tqdm

from verse_corpus.config import BOOK_CODES, Paths, ScraperConfig
from verse_corpus.utils.io import VerseRecord, save_verse_records
from verse_corpus.utils.logging_utils import setup_logging
from verse_corpus.utils.parallel import thread_map
from verse_corpus.utils.references import (
    ChapterTarget,
    VerseReference,
    format_reference,
    parse_reference,
    parse_target,
)

from .cache import CacheStore
from .fetcher import PageFetcher, PageRequest
from .verse_parser import (
    DocumentNode,
    extract_chapter_verses,
    extract_target_verse,
    iter_document_nodes,
)

logger = logging.getLogger(__name__)


def load_targets(path: Union[str, Path]) -> List[ChapterTarget]:
    """
    Load assembly targets, one per line ("Book C:V" or "Book C").

    Blank lines and lines starting with '#' are ignored.
    """
    targets = []
    with open(path, encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            targets.append(parse_target(line))
    return targets


def group_targets(
    targets: Iterable[ChapterTarget],
) -> Dict[Tuple[str, int], Optional[List[int]]]:
    """
    Merge targets per (book, chapter), keeping first-seen order.

    A chapter maps to None when any target asked for the whole chapter,
    otherwise to its requested verses without repeats.
    """
    grouped: Dict[Tuple[str, int], Optional[List[int]]] = {}
    for target in targets:
        key = (target.book, target.chapter)
        if target.verses is None:
            grouped[key] = None
            continue
        if key in grouped and grouped[key] is None:
            continue
        verses = grouped.setdefault(key, [])
        for verse in target.verses:
            if verse not in verses:
                verses.append(verse)
    return grouped


class CorpusAssembler:
    """
    Build verse records for a set of targets across all languages.

    Args:
        fetcher: PageFetcher (cache-backed)
        languages: Language parameter -> language name
        restrictions: Language parameter -> allowed book names
        book_codes: Book name -> site book code
        max_workers: Languages fetched in parallel per chapter (1 = sequential)
    """

    def __init__(
        self,
        fetcher: PageFetcher,
        languages: Optional[Mapping[str, str]] = None,
        restrictions: Optional[Mapping[str, Iterable[str]]] = None,
        book_codes: Optional[Mapping[str, str]] = None,
        max_workers: int = ScraperConfig.MAX_WORKERS,
    ):
        self.fetcher = fetcher
        self.languages = dict(languages if languages is not None else ScraperConfig.LANGUAGES)
        self.restrictions = {
            lang: frozenset(books)
            for lang, books in (
                restrictions if restrictions is not None else ScraperConfig.BOOK_RESTRICTIONS
            ).items()
        }
        self.book_codes = dict(book_codes if book_codes is not None else BOOK_CODES)
        self.max_workers = max_workers

    def languages_for(self, book: str) -> List[Tuple[str, str]]:
        """(parameter, name) pairs of the languages published for a book."""
        selected = []
        for param, name in self.languages.items():
            allowed = self.restrictions.get(param)
            if allowed is not None and book not in allowed:
                logger.info("Skipping %s for %s: not published for this book", name, book)
                continue
            selected.append((param, name))
        return selected

    def fetch_chapter_nodes(self, book: str, chapter: int) -> Dict[str, List[DocumentNode]]:
        """
        Fetch and flatten one chapter page per language.

        Returns:
            Language name -> page nodes. Languages whose page could not be
            retrieved or parsed are absent.
        """
        book_code = self.book_codes[book]
        languages = self.languages_for(book)

        def fetch_language(language: Tuple[str, str]) -> Optional[List[DocumentNode]]:
            param, name = language
            content = self.fetcher.fetch(PageRequest(param, book_code, chapter))
            if content is None:
                logger.error("No page for %s %s %s", book, chapter, name)
                return None
            try:
                return list(iter_document_nodes(content))
            except (etree.ParserError, etree.XMLSyntaxError) as e:
                logger.error("Unparseable page for %s %s %s: %s", book, chapter, name, e)
                return None

        pages = thread_map(fetch_language, languages, num_workers=self.max_workers)
        return {
            name: nodes
            for (_, name), nodes in zip(languages, pages)
            if nodes is not None
        }

    def fetch_chapter(self, book: str, chapter: int) -> Dict[str, Dict[str, str]]:
        """Language name -> {verse key: text} for every verse on the chapter pages."""
        return {
            name: extract_chapter_verses(nodes)
            for name, nodes in self.fetch_chapter_nodes(book, chapter).items()
        }

    def assemble_chapter(
        self,
        book: str,
        chapter: int,
        verses: Optional[List[int]] = None,
    ) -> List[VerseRecord]:
        """
        Build the records of one chapter.

        Args:
            book: Book name
            chapter: Chapter number
            verses: Verses to build, or None for every verse on the pages

        Returns:
            Records with at least one translation
        """
        if verses is None:
            texts = self.fetch_chapter(book, chapter)
            found = set()
            for verse_map in texts.values():
                for key in verse_map:
                    ref = parse_reference(f"{book} {key}")
                    if not ref.is_degenerate and ref.chapter == chapter:
                        found.add(ref.verse)
            verses = sorted(found)
        else:
            pages = self.fetch_chapter_nodes(book, chapter)
            texts = {
                name: {
                    f"{chapter}:{verse}": extract_target_verse(nodes, f"{chapter}:{verse}")
                    for verse in verses
                }
                for name, nodes in pages.items()
            }

        records = []
        for verse in verses:
            ref = VerseReference(book=book, chapter=chapter, verse=verse)
            record = VerseRecord(reference=format_reference(ref))
            for name, verse_texts in texts.items():
                text = verse_texts.get(ref.verse_key, "")
                if text:
                    record.translations[name] = text
            if record.translations:
                records.append(record)
        return records

    def assemble(
        self,
        targets: Iterable[ChapterTarget],
        show_progress: bool = False,
    ) -> List[VerseRecord]:
        """
        Build verse records for all targets, in target order.

        Unknown book names are logged and skipped.
        """
        grouped = group_targets(targets)
        items = list(grouped.items())
        if show_progress:
            items = tqdm(items, desc="Chapters")

        records = []
        for (book, chapter), verses in items:
            if book not in self.book_codes:
                logger.warning("Unknown book %r, skipping chapter %s", book, chapter)
                continue
            records.extend(self.assemble_chapter(book, chapter, verses))
        return records


def main(argv=None):
    """Assemble verse records from chapter pages."""
    parser = argparse.ArgumentParser(
        description="Fetch chapter pages for every language and assemble verse records"
    )
    parser.add_argument(
        "targets",
        type=Path,
        help="Target file: one 'Book C:V' or 'Book C' per line"
    )
    parser.add_argument(
        "-o", "--output",
        type=Path,
        default=Paths.VERSE_RECORDS,
        help="Output JSON path"
    )
    parser.add_argument(
        "--cache-dir",
        type=Path,
        default=Paths.CACHE_DIR,
        help="Page cache directory"
    )
    parser.add_argument(
        "--delay",
        type=float,
        default=ScraperConfig.DELAY_SECONDS,
        help=f"Seconds to wait before each network request (default: {ScraperConfig.DELAY_SECONDS})"
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=ScraperConfig.MAX_WORKERS,
        help="Languages fetched in parallel per chapter (default: 1)"
    )
    parser.add_argument(
        "-q", "--quiet",
        action="store_true",
        help="Suppress progress output"
    )

    args = parser.parse_args(argv)
    verbose = not args.quiet
    setup_logging(verbose)

    if not args.targets.exists():
        print(f"Error: target file not found: {args.targets}", file=sys.stderr)
        sys.exit(1)

    try:
        targets = load_targets(args.targets)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    cache = CacheStore(args.cache_dir).initialize()
    fetcher = PageFetcher(cache, delay_seconds=args.delay)
    assembler = CorpusAssembler(fetcher, max_workers=args.workers)

    records = assembler.assemble(targets, show_progress=verbose)
    count = save_verse_records(args.output, records)

    if verbose:
        stats = fetcher.stats()
        print("\n" + "=" * 60)
        print("Assembly complete")
        print("=" * 60)
        print(f"  Targets:         {len(targets)}")
        print(f"  Verse records:   {count}")
        print(f"  Cache hits:      {stats['cache_hits']}")
        print(f"  Network fetches: {stats['network_fetches']}")
        print(f"  Failures:        {stats['failures']}")
        print(f"\nOutput: {args.output}")


if __name__ == "__main__":
    main()
