"""Test doubles and file helpers shared by the test modules."""
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple

import requests

from verse_corpus.data_ingestion.fetcher import PageRequest
from verse_corpus.utils.io import Sentence


SAMPLE_PAGE = """<html><head><meta charset="utf-8"></head><body>
<table><tr><td>
<b>3:1</b> <span class="nor">Now the serpent was more subtil
than any beast of the field.</span><br/>
<b>3:2</b> <span class="nor">And the woman said unto the serpent.</span><br/>
<b>3:3</b> <span class="bstwre">But of the fruit   of the tree.</span><br/>
</td></tr></table>
</body></html>
"""


class FakeResponse:
    """Stands in for requests.Response."""

    def __init__(self, text: str, status_code: int = 200, encoding: Optional[str] = "utf-8"):
        self.text = text
        self.status_code = status_code
        self.encoding = encoding
        self.apparent_encoding = "utf-8"

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error")


class FakeSession:
    """Records GET calls and replays queued responses or exceptions."""

    def __init__(self, responses: Iterable = ()):
        self.responses = list(responses)
        self.calls: List[Tuple[str, Dict, float]] = []

    def get(self, url, params=None, timeout=None):
        self.calls.append((url, params, timeout))
        result = self.responses.pop(0)
        if isinstance(result, Exception):
            raise result
        return result


class FakeFetcher:
    """Serves pages from a dict keyed by (language, book_code, chapter)."""

    def __init__(self, pages: Dict[Tuple[str, str, int], str]):
        self.pages = pages
        self.requests: List[PageRequest] = []

    def fetch(self, request: PageRequest) -> Optional[str]:
        self.requests.append(request)
        return self.pages.get((request.language, request.book_code, request.chapter))


def write_tsv(path: Path, rows: Iterable[Tuple[str, str]]) -> Path:
    path.write_text("\n".join(f"{ref}\t{text}" for ref, text in rows), encoding="utf-8")
    return path


def sentences(*rows: Tuple[str, str]) -> List[Sentence]:
    return [Sentence(reference=ref, text=text) for ref, text in rows]
