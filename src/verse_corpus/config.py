"""
Centralized configuration for the verse corpus pipeline.

All paths, scraper settings, segmentation limits and the canonical book
table used across the assemble/export/classify/quotes/segment/combine stages.
"""

from pathlib import Path


# =============================================================================
# BASE PATHS
# =============================================================================

class Paths:
    """Centralized path configuration."""

    # Root directory (repository root when installed in editable mode)
    ROOT = Path(__file__).resolve().parent.parent.parent

    DATA = ROOT / "data"

    # Raw chapter pages, one file per (language, book, chapter)
    CACHE_DIR = DATA / "cache"

    # Assembled records and per-language sentence files
    OUTPUT = DATA / "output"
    VERSE_RECORDS = OUTPUT / "bible-verses.json"
    CONSOLIDATED = OUTPUT / "final_corpus.parquet"

    @classmethod
    def ensure_dirs(cls):
        """Create all output directories if they don't exist."""
        cls.CACHE_DIR.mkdir(parents=True, exist_ok=True)
        cls.OUTPUT.mkdir(parents=True, exist_ok=True)


# =============================================================================
# SCRAPER CONFIGURATION
# =============================================================================

class ScraperConfig:
    """Configuration for chapter page retrieval."""

    BASE_URL = "https://cb.fhl.net/read1.php"

    # Courtesy delay before every network request (never before cache hits)
    DELAY_SECONDS = 1.0
    TIMEOUT_SECONDS = 30

    # 1 = sequential; >1 fetches the languages of one chapter in parallel
    MAX_WORKERS = 1

    # Value of the site's submit button parameter
    SUBMIT_LABEL = "閱讀"

    # Language parameter ("VERSIONn=code") -> language name
    LANGUAGES = {
        "VERSION13=rcuv": "和合本2010",
        "VERSION24=bunun": "布農語聖經",
        "VERSION16=amis2": "阿美語聖經",
        "VERSION4=ams": "阿美語1997",
        "VERSION15=sed": "賽德克語聖經",
        "VERSION3=rukai": "魯凱語聖經",
        "VERSION14=tru": "太魯閣語聖經",
        "VERSION23=tay": "泰雅語聖經",
        "VERSION28=wanshandia": "萬山魯凱語馬可福音",
        "VERSION29=maolindia": "茂林魯凱語馬可福音",
        "VERSION30=tonadia": "多納魯凱語馬可福音",
    }

    # Languages published for a subset of books only.
    # Languages missing from this mapping are fetched for every book.
    BOOK_RESTRICTIONS = {
        "VERSION28=wanshandia": frozenset({"馬可福音"}),
        "VERSION29=maolindia": frozenset({"馬可福音"}),
        "VERSION30=tonadia": frozenset({"馬可福音"}),
    }


# =============================================================================
# SEGMENTATION / SAMPLING
# =============================================================================

class SegmentConfig:
    """Sentence length band, split separators and sampling cap."""

    MIN_WORDS = 3
    MAX_WORDS = 10

    # Sentences at or below this length are dropped before segmentation
    DROP_MAX_WORDS = 2

    # Hard separators split a sentence into independent parts before the
    # midpoint splitter runs. ":" is included.
    HARD_SEPARATORS = ("?", "!", ";", ":")

    # Size cap of the random sample drawn from the split pools
    SAMPLE_SIZE = 100
    DEFAULT_SEED = None


# =============================================================================
# FILE NAMING
# =============================================================================

class Suffixes:
    """Stem suffix tokens each stage replaces or appends."""

    TSV = ".tsv"
    NORMAL = "_normal"
    SPECIAL = "_special"
    QUOTES = "_quotes"
    SHORT = "_short"
    SPLIT = "_split"
    FINAL = "_final"


# =============================================================================
# CANONICAL BOOK TABLE
# =============================================================================

# (book name, site book code). Order defines canonical book order.
BOOKS = [
    ("創世記", "創"),
    ("出埃及記", "出"),
    ("利未記", "利"),
    ("民數記", "民"),
    ("申命記", "申"),
    ("約書亞記", "書"),
    ("士師記", "士"),
    ("路得記", "得"),
    ("撒母耳記上", "撒上"),
    ("撒母耳記下", "撒下"),
    ("列王紀上", "王上"),
    ("列王紀下", "王下"),
    ("歷代志上", "代上"),
    ("歷代志下", "代下"),
    ("以斯拉記", "拉"),
    ("尼希米記", "尼"),
    ("以斯帖記", "斯"),
    ("約伯記", "伯"),
    ("詩篇", "詩"),
    ("箴言", "箴"),
    ("傳道書", "傳"),
    ("雅歌", "歌"),
    ("以賽亞書", "賽"),
    ("耶利米書", "耶"),
    ("耶利米哀歌", "哀"),
    ("以西結書", "結"),
    ("但以理書", "但"),
    ("何西阿書", "何"),
    ("約珥書", "珥"),
    ("阿摩司書", "摩"),
    ("俄巴底亞書", "俄"),
    ("約拿書", "拿"),
    ("彌迦書", "彌"),
    ("那鴻書", "鴻"),
    ("哈巴谷書", "哈"),
    ("西番雅書", "番"),
    ("哈該書", "該"),
    ("撒迦利亞書", "亞"),
    ("瑪拉基書", "瑪"),
    ("馬太福音", "太"),
    ("馬可福音", "可"),
    ("路加福音", "路"),
    ("約翰福音", "約"),
    ("使徒行傳", "徒"),
    ("羅馬書", "羅"),
    ("哥林多前書", "林前"),
    ("哥林多後書", "林後"),
    ("加拉太書", "加"),
    ("以弗所書", "弗"),
    ("腓立比書", "腓"),
    ("歌羅西書", "西"),
    ("帖撒羅尼迦前書", "帖前"),
    ("帖撒羅尼迦後書", "帖後"),
    ("提摩太前書", "提前"),
    ("提摩太後書", "提後"),
    ("提多書", "多"),
    ("腓利門書", "門"),
    ("希伯來書", "來"),
    ("雅各書", "雅"),
    ("彼得前書", "彼前"),
    ("彼得後書", "彼後"),
    ("約翰一書", "約一"),
    ("約翰二書", "約二"),
    ("約翰三書", "約三"),
    ("猶大書", "猶"),
    ("啟示錄", "啟"),
]

BOOK_CODES = dict(BOOKS)
BOOK_ORDER = {name: index for index, (name, _) in enumerate(BOOKS)}
