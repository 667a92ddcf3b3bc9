"""
Write-once page cache.

One file per (language, book, chapter) holding the raw page verbatim.
A present entry is authoritative: it is never refreshed or overwritten.
"""

import logging
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CacheKey:
    language: str
    book: str
    chapter: int

    @property
    def filename(self) -> str:
        return f"{self.language}_{self.book}_{self.chapter}.html"


class CacheStore:
    """
    Append-only store of raw chapter pages.

    Construct once, call initialize(), and inject into the fetcher.
    Concurrent first writes of the same key are tolerated: each writer
    renames a complete temp file into place, so readers never see a torn
    file and the content for a key is expected to be identical anyway.
    """

    def __init__(self, cache_dir: Union[str, Path]):
        self.cache_dir = Path(cache_dir)

    def initialize(self) -> "CacheStore":
        self.cache_dir.mkdir(parents=True, exist_ok=True)
        return self

    def path_for(self, key: CacheKey) -> Path:
        return self.cache_dir / key.filename

    def contains(self, key: CacheKey) -> bool:
        return self.path_for(key).exists()

    def get(self, key: CacheKey) -> Optional[str]:
        path = self.path_for(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def put(self, key: CacheKey, content: str) -> bool:
        """
        Store content under key unless the key is already present.

        Returns:
            True if the content was written, False if the key existed
        """
        path = self.path_for(key)
        if path.exists():
            return False

        fd, tmp_name = tempfile.mkstemp(dir=self.cache_dir, suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(content)
            if path.exists():
                return False
            os.replace(tmp_name, path)
        finally:
            if os.path.exists(tmp_name):
                os.remove(tmp_name)

        logger.debug("Cached %s", path.name)
        return True
