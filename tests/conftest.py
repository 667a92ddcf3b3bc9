"""
verse_corpus - Test Configuration

Pytest fixtures shared by all tests. Nothing here touches the network.
"""
from typing import List

import pytest

from helpers import SAMPLE_PAGE
from verse_corpus.data_ingestion.cache import CacheStore


@pytest.fixture
def sample_page() -> str:
    """Chapter page with three verses (Genesis 3)."""
    return SAMPLE_PAGE


@pytest.fixture
def cache(tmp_path) -> CacheStore:
    return CacheStore(tmp_path / "cache").initialize()


@pytest.fixture
def sleep_calls() -> List[float]:
    return []


@pytest.fixture
def record_sleep(sleep_calls):
    """Sleep replacement that records requested delays."""
    return sleep_calls.append
