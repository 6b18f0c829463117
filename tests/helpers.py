"""Shared fixtures for the test suite."""
from services.import_accumulator import ImportAccumulator
from utils.books import BIBLE_BOOKS


def chapter_text(verse_count, prefix='Verse'):
    return '\n'.join(f"{n} {prefix} text for this verse." for n in range(1, verse_count + 1))


def complete_accumulator(name='Test Version', abbreviation='TST'):
    """Accumulator holding every canonical chapter with two short verses"""
    accumulator = ImportAccumulator(name=name, abbreviation=abbreviation)
    for book in BIBLE_BOOKS:
        for chapter in range(1, book.chapters + 1):
            accumulator.add_chapter(book.abbreviation, chapter, '1 Alpha verse. 2 Beta verse.')
    return accumulator
