"""
Rate-limited chapter page fetcher.

Every request checks the CacheStore first. Only cache misses go to the
network, each one preceded by the configured courtesy delay. Network
errors are logged and reported as a missing page, never raised.
"""

import logging
import time
from dataclasses import dataclass
from typing import Callable, Dict, Optional

import requests

from verse_corpus.config import ScraperConfig

from .cache import CacheKey, CacheStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PageRequest:
    """One chapter page of one language version."""
    language: str  # "VERSIONn=code"
    book_code: str
    chapter: int
    # Verse the caller is after, for log messages. A chapter page holds every
    # verse, so it is not part of the query or the cache key.
    verse_selector: Optional[str] = None

    @property
    def cache_key(self) -> CacheKey:
        return CacheKey(language=self.language, book=self.book_code, chapter=self.chapter)

    def params(self, submit_label: str = ScraperConfig.SUBMIT_LABEL) -> Dict[str, str]:
        """Query parameters for the chapter page."""
        lang_key, _, lang_value = self.language.partition("=")
        params = {
            "chineses": self.book_code,
            "chap": str(self.chapter),
            lang_key: lang_value,
            "sub1": submit_label,
        }
        return params


class PageFetcher:
    """
    Fetch raw chapter pages through the cache.

    Args:
        cache: Initialized CacheStore
        base_url: Page endpoint
        delay_seconds: Sleep before every network request
        timeout: Per-request timeout in seconds
        session: Optional requests.Session (one is created if None)
        sleep: Sleep function (injectable for tests)
    """

    def __init__(
        self,
        cache: CacheStore,
        base_url: str = ScraperConfig.BASE_URL,
        delay_seconds: float = ScraperConfig.DELAY_SECONDS,
        timeout: float = ScraperConfig.TIMEOUT_SECONDS,
        session: Optional[requests.Session] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.cache = cache
        self.base_url = base_url
        self.delay_seconds = delay_seconds
        self.timeout = timeout
        self.session = session or requests.Session()
        self.sleep = sleep

        self.cache_hits = 0
        self.network_fetches = 0
        self.failures = 0

    def fetch(self, request: PageRequest) -> Optional[str]:
        """
        Return the raw page for a request, or None if retrieval failed.
        """
        key = request.cache_key
        cached = self.cache.get(key)
        if cached is not None:
            logger.debug("Cache hit: %s %s %s", key.language, key.book, key.chapter)
            self.cache_hits += 1
            return cached

        self.sleep(self.delay_seconds)
        logger.info(
            "Fetching page: %s %s %s%s", key.language, key.book, key.chapter,
            f" (for {request.verse_selector})" if request.verse_selector else "",
        )

        try:
            response = self.session.get(
                self.base_url,
                params=request.params(),
                timeout=self.timeout,
            )
            response.raise_for_status()
        except requests.RequestException as e:
            self.failures += 1
            logger.error(
                "Failed to fetch %s %s %s: %s", key.language, key.book, key.chapter, e
            )
            return None

        if not response.encoding or response.encoding.lower() == "iso-8859-1":
            response.encoding = response.apparent_encoding
        content = response.text

        self.network_fetches += 1
        self.cache.put(key, content)
        return content

    def stats(self) -> Dict[str, int]:
        return {
            "cache_hits": self.cache_hits,
            "network_fetches": self.network_fetches,
            "failures": self.failures,
        }
