# utils/verse_segmenter.py
"""
Split pasted chapter text into numbered verses.

A verse marker is a run of digits (optionally in square brackets) at the start of
the text or after whitespace/punctuation, followed by verse content that does not
start with a digit. The marker numbers must form exactly 1..max; anything else
rejects the whole chapter.
"""
import logging
import re

from pydantic import ValidationError

from models.bible import Verse
from schemas.import_schemas import VerseInput
from utils.errors import InvalidVerse, NoVersesFound, SequenceGap

logger = logging.getLogger(__name__)

WHITESPACE_PATTERN = re.compile(r'\s+')

VERSE_MARKER_PATTERN = re.compile(
    r'(?:^|(?<=[\s.;!?"\'“”‘’)]))'
    r'(?:\[(?P<bracketed>\d+)\]\s*|(?P<plain>\d+)\s+)'
    r'(?=[^\d\s])'
)


def normalize_text(text):
    """Collapse newlines and runs of spaces into single spaces"""
    return WHITESPACE_PATTERN.sub(' ', text or '').strip()


def find_verses(text):
    """Return (number, text) pairs in source order, without any validation"""
    markers = list(VERSE_MARKER_PATTERN.finditer(text))
    if markers and markers[0].start() > 0:
        logger.debug(f"Ignoring text before first verse marker: '{text[:markers[0].start()].strip()}'")

    found = []
    for index, marker in enumerate(markers):
        end = markers[index + 1].start() if index + 1 < len(markers) else len(text)
        number = int(marker.group('bracketed') or marker.group('plain'))
        found.append((number, text[marker.end():end].strip()))
    return found


def check_sequence(numbers):
    """Raise SequenceGap unless the sorted numbers are exactly 1..max"""
    for expected, number in enumerate(sorted(numbers), start=1):
        if number != expected:
            raise SequenceGap(expected=expected, found=number)


def segment_chapter(text, book=None, chapter=None):
    """
    Convert raw chapter text into an ordered list of Verse objects.

    ``book`` and ``chapter`` are only used to label errors.

    Raises NoVersesFound when no verse marker is present, SequenceGap when the
    verse numbers are not a complete 1..max run, and InvalidVerse when a verse
    fails schema validation (empty text, non-positive number).
    """
    cleaned = normalize_text(text)
    found = find_verses(cleaned)
    if not found:
        raise NoVersesFound()

    found.sort(key=lambda pair: pair[0])
    check_sequence([number for number, _ in found])

    verses = []
    for number, verse_text in found:
        try:
            checked = VerseInput(number=number, text=verse_text)
        except ValidationError as e:
            reason = '; '.join(err['msg'] for err in e.errors())
            raise InvalidVerse(book, chapter, number, reason) from e
        verses.append(Verse(number=checked.number, text=checked.text))

    logger.info(f"Detected {len(verses)} verses" + (f" in {book} {chapter}" if book else ''))
    return verses
