"""
Verse extraction from chapter pages.

A chapter page interleaves verse markers and verse text:

    <b>3:2</b> <span class="nor"> ...text... <br/>...text... </span><br/>
    <b>3:3</b> <span class="nor"> ...text... </span><br/>

The page is flattened into an ordered sequence of classified nodes (marker
or content) and a small state machine rebuilds the verse texts from it.
Any parser producing DocumentNode sequences can feed the extractors.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, Iterator

from lxml import etree
from lxml import html as lxml_html


class NodeKind(Enum):
    MARKER = "marker"    # Opens a verse; text is the verse key ("3:2")
    CONTENT = "content"  # Text belonging to the most recently opened verse


@dataclass(frozen=True)
class DocumentNode:
    kind: NodeKind
    text: str


# <b> markers and verse text spans, in document order
NODE_XPATH = (
    "//b"
    " | //span[contains(concat(' ', normalize-space(@class), ' '), ' nor ')]"
    " | //span[contains(concat(' ', normalize-space(@class), ' '), ' bstwre ')]"
)


def normalize_whitespace(text: str) -> str:
    """Collapse whitespace runs to single spaces and trim."""
    return " ".join(text.split())


def parse_html_string(content: str) -> etree._Element:
    """
    Parse a page into an lxml element tree.

    Args:
        content: Raw page text

    Returns:
        Root element of the parsed document
    """
    parser = lxml_html.HTMLParser(encoding="utf-8")
    # Encode to bytes so pages carrying an encoding declaration still parse
    return lxml_html.fromstring(content.encode("utf-8"), parser=parser)


def iter_document_nodes(content: str) -> Iterator[DocumentNode]:
    """
    Flatten a chapter page into classified nodes.

    Args:
        content: Raw page text

    Yields:
        DocumentNode objects in document order
    """
    if not content or not content.strip():
        return

    root = parse_html_string(content)
    for element in root.xpath(NODE_XPATH):
        text = "".join(element.itertext())
        if element.tag == "b":
            yield DocumentNode(NodeKind.MARKER, text.strip())
        else:
            yield DocumentNode(NodeKind.CONTENT, text)


def extract_chapter_verses(nodes: Iterable[DocumentNode]) -> Dict[str, str]:
    """
    Rebuild every verse of a page (whole-page mode).

    Args:
        nodes: Classified nodes in document order

    Returns:
        Mapping of verse key ("C:V") to assembled verse text
    """
    verses = {}
    current_key = None
    buffer = ""

    for node in nodes:
        if node.kind is NodeKind.MARKER:
            # Marker - flush the open verse and start the next one
            if current_key is not None:
                verses[current_key] = buffer.strip()
            current_key = node.text
            buffer = ""
        elif current_key is not None:
            buffer += normalize_whitespace(node.text) + " "

    # Don't forget the last verse
    if current_key is not None:
        verses[current_key] = buffer.strip()

    return verses


def extract_target_verse(nodes: Iterable[DocumentNode], verse_key: str) -> str:
    """
    Collect the text of a single verse (single-target mode).

    Scanning stops at the first marker after the target marker.

    Args:
        nodes: Classified nodes in document order
        verse_key: Target key, e.g. "3:2"

    Returns:
        Verse text, or "" if the target marker never appears
    """
    found = False
    collected = ""

    for node in nodes:
        if node.kind is NodeKind.MARKER:
            if node.text == verse_key:
                found = True
            elif found:
                break
        elif found:
            collected += normalize_whitespace(node.text)

    return collected
