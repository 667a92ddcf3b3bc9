"""
Tests for exporting verse records to per-language sentence files.
"""
from verse_corpus.data_processing.verse_export import (
    export_languages,
    group_by_language,
    language_filename,
)
from verse_corpus.utils.io import VerseRecord, read_sentences, save_verse_records


RECORDS = [
    VerseRecord("出埃及記 1:1", {"和合本2010": "以色列的眾子。", "布農语": "Maqa tu"}),
    VerseRecord("創世記 1:2", {"和合本2010": "地是空虛混沌，"}),
    VerseRecord("創世記 1:1", {"和合本2010": "起初，神創造天地。", "布農语": "."}),
]


def test_language_filename():
    assert language_filename("布農語聖經") == "布農語聖經.tsv"
    assert language_filename('a/b\\c?d%e*f:g|h"i<j>k') == "a_b_c_d_e_f_g_h_i_j_k.tsv"


def test_group_by_language_sorts_and_cleans():
    grouped = group_by_language(RECORDS)
    assert list(grouped) == ["和合本2010", "布農语"]
    assert [(s.reference, s.text) for s in grouped["和合本2010"]] == [
        ("創世記 1:1", "起初，神創造天地"),
        ("創世記 1:2", "地是空虛混沌"),
        ("出埃及記 1:1", "以色列的眾子"),
    ]
    # Text reduced to nothing by cleaning is not exported
    assert [s.reference for s in grouped["布農语"]] == ["出埃及記 1:1"]


def test_export_languages(tmp_path):
    records_path = tmp_path / "bible-verses.json"
    save_verse_records(records_path, RECORDS)

    stats = export_languages(records_path, tmp_path / "out", verbose=False)

    assert stats == {"和合本2010": 3, "布農语": 1}
    assert len(read_sentences(tmp_path / "out" / "和合本2010.tsv")) == 3
