"""
Tests for the cache-first, rate-limited page fetcher.
"""
import requests

from helpers import FakeResponse, FakeSession
from verse_corpus.data_ingestion.fetcher import PageFetcher, PageRequest


REQUEST = PageRequest("VERSION24=bunun", "可", 3, verse_selector="3:2")


def make_fetcher(cache, session, sleep):
    return PageFetcher(
        cache,
        base_url="https://example.test/read1.php",
        delay_seconds=0.5,
        timeout=7,
        session=session,
        sleep=sleep,
    )


def test_params():
    assert PageRequest("VERSION24=bunun", "可", 3).params() == {
        "chineses": "可",
        "chap": "3",
        "VERSION24": "bunun",
        "sub1": "閱讀",
    }


def test_verse_selector_not_part_of_cache_key():
    assert REQUEST.cache_key == PageRequest("VERSION24=bunun", "可", 3).cache_key


def test_miss_sleeps_fetches_and_caches(cache, record_sleep, sleep_calls):
    session = FakeSession([FakeResponse("<html>page</html>")])
    fetcher = make_fetcher(cache, session, record_sleep)

    assert fetcher.fetch(REQUEST) == "<html>page</html>"
    assert sleep_calls == [0.5]
    assert len(session.calls) == 1
    url, params, timeout = session.calls[0]
    assert url == "https://example.test/read1.php"
    assert params["chap"] == "3"
    assert timeout == 7
    assert cache.get(REQUEST.cache_key) == "<html>page</html>"
    assert fetcher.stats() == {"cache_hits": 0, "network_fetches": 1, "failures": 0}


def test_hit_skips_network_and_delay(cache, record_sleep, sleep_calls):
    cache.put(REQUEST.cache_key, "cached page")
    session = FakeSession()
    fetcher = make_fetcher(cache, session, record_sleep)

    assert fetcher.fetch(REQUEST) == "cached page"
    assert session.calls == []
    assert sleep_calls == []
    assert fetcher.stats()["cache_hits"] == 1


def test_second_fetch_is_served_from_cache(cache, record_sleep, sleep_calls):
    session = FakeSession([FakeResponse("page")])
    fetcher = make_fetcher(cache, session, record_sleep)

    fetcher.fetch(REQUEST)
    fetcher.fetch(REQUEST)
    assert len(session.calls) == 1
    assert len(sleep_calls) == 1


def test_connection_error_returns_none(cache, record_sleep):
    session = FakeSession([requests.ConnectionError("down")])
    fetcher = make_fetcher(cache, session, record_sleep)

    assert fetcher.fetch(REQUEST) is None
    assert not cache.contains(REQUEST.cache_key)
    assert fetcher.stats()["failures"] == 1


def test_http_error_returns_none(cache, record_sleep):
    session = FakeSession([FakeResponse("gone", status_code=500)])
    fetcher = make_fetcher(cache, session, record_sleep)

    assert fetcher.fetch(REQUEST) is None
    assert not cache.contains(REQUEST.cache_key)


def test_failure_is_retried_on_next_fetch(cache, record_sleep):
    session = FakeSession([requests.Timeout("slow"), FakeResponse("page")])
    fetcher = make_fetcher(cache, session, record_sleep)

    assert fetcher.fetch(REQUEST) is None
    assert fetcher.fetch(REQUEST) == "page"


def test_latin1_default_is_replaced_by_detected_encoding(cache, record_sleep):
    response = FakeResponse("page", encoding="ISO-8859-1")
    fetcher = make_fetcher(cache, FakeSession([response]), record_sleep)

    fetcher.fetch(REQUEST)
    assert response.encoding == "utf-8"
