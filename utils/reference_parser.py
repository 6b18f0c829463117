# utils/reference_parser.py
"""Parse reader queries like "jn 3:16-18" and render them back as labels."""
import logging
import re

from models.bible import ParsedReference
from utils.books import find_book

logger = logging.getLogger(__name__)

# <book><optional whitespace><chapter>[:<verse>[-<verse>]], book like "gen", "1co", "2jn"
QUERY_PATTERN = re.compile(
    r'^(?P<book>[0-9]*[a-z]+)\s*(?P<chapter>\d+)(?::(?P<start>\d+)(?:-(?P<end>\d+))?)?$',
    re.IGNORECASE,
)


def normalize_book(token):
    """Return the API book code for a known alias, or the token uppercased"""
    book = find_book(token)
    return book.code if book else token.upper()


def parse_query(query):
    """
    Parse a reference query into a ParsedReference.

    Returns None when the query does not match the book/chapter[:verse[-verse]]
    grammar. Unknown books are not rejected here; the content API does that.
    """
    if not query:
        return None

    match = QUERY_PATTERN.match(query.strip())
    if not match:
        return None

    chapter = int(match.group('chapter'))
    verse_start = int(match.group('start')) if match.group('start') else None
    verse_end = int(match.group('end')) if match.group('end') else None
    if chapter == 0 or verse_start == 0 or verse_end == 0:
        return None

    return ParsedReference(
        book=normalize_book(match.group('book')),
        chapter=chapter,
        verse_start=verse_start,
        verse_end=verse_end,
    )


def build_passage_id(parsed):
    """Passage identifier for the content API; a range with equal ends collapses to one verse"""
    if parsed.is_range:
        return (f"{parsed.book}.{parsed.chapter}.{parsed.verse_start}-"
                f"{parsed.book}.{parsed.chapter}.{parsed.verse_end}")
    if parsed.verse_start is not None:
        return f"{parsed.book}.{parsed.chapter}.{parsed.verse_start}"
    return f"{parsed.book}.{parsed.chapter}"


def format_reference(reference, original_query):
    """Human readable label for the query, falling back to the raw reference"""
    parsed = parse_query(original_query)
    if not parsed:
        logger.debug(f"Keeping raw reference '{reference}' for unparsable query '{original_query}'")
        return reference

    label = f"{parsed.book_name} {parsed.chapter}"
    if parsed.verse_start is None:
        return label
    if parsed.is_range:
        return f"{label}:{parsed.verse_start}-{parsed.verse_end}"
    return f"{label}:{parsed.verse_start}"
