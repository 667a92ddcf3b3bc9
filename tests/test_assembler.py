"""
Tests for corpus assembly across languages.
"""
import logging

from helpers import FakeFetcher
from verse_corpus.data_ingestion.assembler import CorpusAssembler, group_targets, load_targets
from verse_corpus.utils.references import ChapterTarget


LANGUAGES = {
    "VERSION1=a": "LangA",
    "VERSION2=b": "LangB",
    "VERSION3=mark": "MarkOnly",
}
RESTRICTIONS = {"VERSION3=mark": {"馬可福音"}}


def page(*verses):
    body = "".join(f'<b>{key}</b> <span class="nor">{text}</span><br/>' for key, text in verses)
    return f"<html><body>{body}</body></html>"


def make_assembler(pages, workers=1):
    fetcher = FakeFetcher(pages)
    assembler = CorpusAssembler(
        fetcher,
        languages=LANGUAGES,
        restrictions=RESTRICTIONS,
        max_workers=workers,
    )
    return assembler, fetcher


GENESIS_PAGES = {
    ("VERSION1=a", "創", 1): page(("1:1", "a one"), ("1:2", "a two")),
    ("VERSION2=b", "創", 1): page(("1:1", "b one"), ("1:2", "b two"), ("1:3", "b three")),
}


def test_single_verse_target():
    assembler, _ = make_assembler(GENESIS_PAGES)
    records = assembler.assemble([ChapterTarget("創世記", 1, (2,))])
    assert len(records) == 1
    assert records[0].reference == "創世記 1:2"
    assert records[0].translations == {"LangA": "a two", "LangB": "b two"}


def test_whole_chapter_target_collects_all_verses():
    assembler, _ = make_assembler(GENESIS_PAGES)
    records = assembler.assemble([ChapterTarget("創世記", 1)])
    assert [r.reference for r in records] == ["創世記 1:1", "創世記 1:2", "創世記 1:3"]
    assert records[2].translations == {"LangB": "b three"}


def test_restricted_language_is_not_requested():
    assembler, fetcher = make_assembler(GENESIS_PAGES)
    assembler.assemble([ChapterTarget("創世記", 1, (1,))])
    assert {r.language for r in fetcher.requests} == {"VERSION1=a", "VERSION2=b"}


def test_restricted_language_is_used_for_allowed_book():
    pages = {("VERSION3=mark", "可", 1): page(("1:1", "mark one"))}
    assembler, fetcher = make_assembler(pages)
    records = assembler.assemble([ChapterTarget("馬可福音", 1, (1,))])
    assert len(fetcher.requests) == 3
    assert records[0].translations == {"MarkOnly": "mark one"}


def test_missing_page_leaves_language_absent(caplog):
    pages = {("VERSION1=a", "創", 1): page(("1:1", "a one"))}
    assembler, _ = make_assembler(pages)
    with caplog.at_level(logging.ERROR):
        records = assembler.assemble([ChapterTarget("創世記", 1, (1,))])
    assert records[0].translations == {"LangA": "a one"}
    assert "LangB" in caplog.text


def test_verse_without_any_translation_is_dropped():
    assembler, _ = make_assembler(GENESIS_PAGES)
    assert assembler.assemble([ChapterTarget("創世記", 1, (9,))]) == []


def test_unknown_book_is_skipped():
    assembler, fetcher = make_assembler(GENESIS_PAGES)
    assert assembler.assemble([ChapterTarget("Nowhere", 1)]) == []
    assert fetcher.requests == []


def test_one_page_fetch_per_language_per_chapter():
    assembler, fetcher = make_assembler(GENESIS_PAGES)
    assembler.assemble([ChapterTarget("創世記", 1, (1,)), ChapterTarget("創世記", 1, (2,))])
    assert len(fetcher.requests) == 2


def test_parallel_workers_give_same_records():
    sequential, _ = make_assembler(GENESIS_PAGES)
    parallel, _ = make_assembler(GENESIS_PAGES, workers=4)
    targets = [ChapterTarget("創世記", 1)]
    assert sequential.assemble(targets) == parallel.assemble(targets)


class TestTargets:

    def test_group_targets_merges_verses(self):
        grouped = group_targets([
            ChapterTarget("創世記", 1, (2,)),
            ChapterTarget("創世記", 1, (1,)),
            ChapterTarget("創世記", 1, (2,)),
            ChapterTarget("出埃及記", 3, (4,)),
        ])
        assert grouped == {("創世記", 1): [2, 1], ("出埃及記", 3): [4]}

    def test_whole_chapter_wins(self):
        grouped = group_targets([
            ChapterTarget("創世記", 1, (2,)),
            ChapterTarget("創世記", 1),
            ChapterTarget("創世記", 1, (3,)),
        ])
        assert grouped == {("創世記", 1): None}

    def test_load_targets_skips_comments_and_blanks(self, tmp_path):
        path = tmp_path / "targets.txt"
        path.write_text("# header\n\n馬可福音 1:1\n馬可福音 2\n", encoding="utf-8")
        assert load_targets(path) == [
            ChapterTarget("馬可福音", 1, (1,)),
            ChapterTarget("馬可福音", 2),
        ]


def test_fetch_chapter_maps_languages_to_verses():
    assembler, _ = make_assembler(GENESIS_PAGES)
    chapter = assembler.fetch_chapter("創世記", 1)
    assert chapter["LangA"] == {"1:1": "a one", "1:2": "a two"}
    assert set(chapter) == {"LangA", "LangB"}


def test_unparseable_page_leaves_language_absent(caplog):
    pages = {
        ("VERSION1=a", "可", 1): page(("1:1", "a one")),
        ("VERSION2=b", "可", 1): "<!-- blocked -->",
    }
    assembler, _ = make_assembler(pages)
    with caplog.at_level(logging.ERROR):
        records = assembler.assemble([ChapterTarget("馬可福音", 1)])
    assert [r.translations for r in records] == [{"LangA": "a one"}]
    assert "Unparseable page" in caplog.text
