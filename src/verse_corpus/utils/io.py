"""
Data I/O utilities for the corpus pipeline.

Provides consistent interface for:
- Verse record JSON documents (assembly output)
- Tabular sentence files (reference<TAB>text, one per line)
- Stage output naming (suffix replace/append)
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, List, Union

from .validation import validate_verse_record


@dataclass(frozen=True)
class Sentence:
    """One corpus line: a verse reference and a piece of its text."""
    reference: str
    text: str

    def to_line(self) -> str:
        return f"{self.reference}\t{self.text}"


@dataclass
class VerseRecord:
    """All translations collected for one verse."""
    reference: str
    translations: Dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "reference": self.reference,
            "translations": dict(self.translations),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "VerseRecord":
        return cls(
            reference=data["reference"],
            translations=dict(data.get("translations", {})),
        )


# =============================================================================
# VERSE RECORD JSON
# =============================================================================

def save_verse_records(
    path: Union[str, Path],
    records: Iterable[VerseRecord],
    ensure_ascii: bool = False
) -> int:
    """
    Save verse records as a JSON array (assembly order is kept).

    Args:
        path: Output file path
        records: Records to serialize
        ensure_ascii: If True, escape non-ASCII characters

    Returns:
        Number of records written
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    payload = [record.to_dict() for record in records]
    with open(path, "w", encoding="utf-8") as f:
        json.dump(payload, f, ensure_ascii=ensure_ascii, indent=2)

    return len(payload)


def load_verse_records(path: Union[str, Path]) -> List[VerseRecord]:
    """
    Load a JSON array of verse records.

    Raises:
        ValueError: if the document is not an array of valid records
    """
    path = Path(path)
    with open(path, encoding="utf-8") as f:
        data = json.load(f)

    if not isinstance(data, list):
        raise ValueError(f"{path}: expected a JSON array of verse records")

    records = []
    for index, item in enumerate(data):
        errors = validate_verse_record(item)
        if errors:
            raise ValueError(f"{path}: record {index}: {'; '.join(errors)}")
        records.append(VerseRecord.from_dict(item))
    return records


# =============================================================================
# TABULAR SENTENCE FILES
# =============================================================================

def iter_sentences(path: Union[str, Path]) -> Iterator[Sentence]:
    """
    Iterate over a tabular sentence file.

    Lines with fewer than two tab-separated fields, or with empty text,
    are skipped silently.

    Args:
        path: Path to .tsv file

    Yields:
        Sentence objects in file order
    """
    path = Path(path)
    with open(path, encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if not line:
                continue
            columns = line.split("\t")
            if len(columns) < 2:
                continue
            text = columns[1].strip()
            if not text:
                continue
            yield Sentence(reference=columns[0].strip(), text=text)


def read_sentences(path: Union[str, Path]) -> List[Sentence]:
    """Load all sentences of a tabular file into memory."""
    return list(iter_sentences(path))


def write_sentences(path: Union[str, Path], sentences: Iterable[Sentence]) -> int:
    """
    Write sentences as reference<TAB>text lines (UTF-8, newline-joined).

    Returns:
        Number of sentences written
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    lines = [sentence.to_line() for sentence in sentences]
    with open(path, "w", encoding="utf-8") as f:
        f.write("\n".join(lines))

    return len(lines)


# =============================================================================
# STAGE FILE NAMING
# =============================================================================

def derive_output_path(
    input_path: Union[str, Path],
    input_suffix: str,
    output_suffix: str,
) -> Path:
    """
    Derive a stage output path from its input path.

    The stem's trailing `input_suffix` is replaced by `output_suffix`;
    when the stem does not end with it, `output_suffix` is appended.
    The extension is kept.

    Example:
        >>> derive_output_path("out/bunun_special.tsv", "_special", "_quotes")
        PosixPath('out/bunun_quotes.tsv')
    """
    input_path = Path(input_path)
    stem = input_path.stem
    if input_suffix and stem.endswith(input_suffix):
        stem = stem[: -len(input_suffix)]
    return input_path.with_name(f"{stem}{output_suffix}{input_path.suffix}")
