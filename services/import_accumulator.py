# services/import_accumulator.py
"""
Accumulates imported chapters into a custom Bible version.

The accumulator owns all book/chapter/verse data until export. Progress is
always recomputed from the current books, never tracked incrementally, and a
version can only be exported once all 66 books hold exactly their canonical
number of chapters.
"""
import copy
import logging
import time
from datetime import datetime, timezone

from models.bible import Chapter, ImportBook, ImportProgress, Verse, Version
from utils.books import TOTAL_BOOKS, TOTAL_CHAPTERS, find_book
from utils.errors import BibleAppError, IncompleteVersion, InvalidChapter, UnknownBook
from utils.verse_segmenter import check_sequence, segment_chapter

logger = logging.getLogger(__name__)

DEFAULT_VERSION_NAME = 'Custom Version'
DEFAULT_VERSION_ABBREVIATION = 'CUSTOM'


def generate_version_id(abbreviation):
    return f"custom-{abbreviation}-{int(time.time() * 1000)}"


def _utc_now():
    return datetime.now(timezone.utc).isoformat()


class ImportAccumulator:
    def __init__(self, name=DEFAULT_VERSION_NAME, abbreviation=DEFAULT_VERSION_ABBREVIATION,
                 language='en', version_id=None):
        self.version = Version(
            id=version_id or generate_version_id(abbreviation),
            name=name,
            abbreviation=abbreviation,
            language=language or 'en',
        )
        self.last_updated = None

    # --- mutations -------------------------------------------------------

    @staticmethod
    def _locate(book_abbr, chapter_number):
        info = find_book(book_abbr)
        if info is None:
            raise UnknownBook(book_abbr)
        if not 1 <= chapter_number <= info.chapters:
            raise InvalidChapter(info.name, chapter_number, info.chapters)
        return info

    def _store(self, info, chapter):
        book = self.version.books.get(info.abbreviation)
        if book is None:
            book = ImportBook(abbreviation=info.abbreviation, name=info.name)
            self.version.books[info.abbreviation] = book
        book.chapters[chapter.chapter] = chapter

    def add_chapter(self, book_abbr, chapter_number, text):
        """Segment ``text`` and store it as the given chapter, replacing any earlier import"""
        info = self._locate(book_abbr, chapter_number)
        verses = segment_chapter(text, book=info.abbreviation, chapter=chapter_number)

        existing = self.version.books.get(info.abbreviation)
        if existing is not None and chapter_number in existing.chapters:
            logger.info(f"Replacing existing import of {info.abbreviation} {chapter_number}")
        chapter = Chapter(chapter=chapter_number, verses=tuple(verses), text=text)
        self._store(info, chapter)
        self.last_updated = _utc_now()
        return chapter

    def delete_chapter(self, book_abbr, chapter_number):
        """Remove a chapter; a book left without chapters is removed too. Returns False if absent."""
        info = find_book(book_abbr)
        if info is None:
            raise UnknownBook(book_abbr)

        book = self.version.books.get(info.abbreviation)
        if book is None or chapter_number not in book.chapters:
            return False

        del book.chapters[chapter_number]
        if not book.chapters:
            del self.version.books[info.abbreviation]
        self.last_updated = _utc_now()
        return True

    # --- reads -----------------------------------------------------------

    def _book_is_complete(self, book):
        info = find_book(book.abbreviation)
        return info is not None and len(book.chapters) == info.chapters

    def get_progress(self):
        books = list(self.version.books.values())
        completed_books = sum(1 for book in books if self._book_is_complete(book))
        completed_chapters = sum(len(book.chapters) for book in books)
        total_verses = sum(
            chapter.verse_count for book in books for chapter in book.chapters.values()
        )
        return ImportProgress(
            completed_books=completed_books,
            completed_chapters=completed_chapters,
            total_chapters=TOTAL_CHAPTERS,
            total_books=TOTAL_BOOKS,
            total_verses=total_verses,
            current_book=books[-1].name if books else None,
        )

    @property
    def state(self):
        """'empty', 'partial' or 'complete'"""
        if not self.version.books:
            return 'empty'
        return 'complete' if self.is_complete() else 'partial'

    def is_complete(self):
        if len(self.version.books) != TOTAL_BOOKS:
            return False
        return all(self._book_is_complete(book) for book in self.version.books.values())

    def export(self):
        """Immutable copy of the finished version; raises IncompleteVersion otherwise"""
        if not self.is_complete():
            progress = self.get_progress()
            raise IncompleteVersion(progress.completed_chapters, progress.total_chapters)
        return copy.deepcopy(self.version)

    # --- snapshots -------------------------------------------------------

    def to_snapshot(self):
        """On-disk progress document"""
        progress = self.get_progress()
        books = {}
        for abbr, book in self.version.books.items():
            books[abbr] = {
                'name': book.name,
                'chapters': {
                    str(number): {
                        'completed': True,
                        'verseCount': chapter.verse_count,
                        'text': chapter.text,
                        'verses': [verse.to_dict() for verse in chapter.verses],
                    }
                    for number, chapter in book.chapters.items()
                },
            }
        return {
            'version': {
                'id': self.version.id,
                'name': self.version.name,
                'abbreviation': self.version.abbreviation,
                'language': self.version.language,
            },
            'books': books,
            'completedChapters': progress.completed_chapters,
            'totalVerses': progress.total_verses,
            'lastUpdated': self.last_updated or _utc_now(),
        }

    @classmethod
    def from_snapshot(cls, snapshot, **details):
        """
        Rebuild an accumulator from a progress document.

        Chapters saved without parsed verses are segmented again from their text.
        A stored chapter that no longer validates is logged and left out.
        ``details`` (name, abbreviation, language) override the stored identity.
        """
        snapshot = snapshot or {}
        identity = dict(snapshot.get('version') or {})
        identity.update({k: v for k, v in details.items() if v})
        abbreviation = identity.get('abbreviation', DEFAULT_VERSION_ABBREVIATION)
        version_id = identity.get('id')
        if not version_id and snapshot:
            version_id = legacy_version_id(abbreviation, snapshot.get('lastUpdated'))
        accumulator = cls(
            name=identity.get('name', DEFAULT_VERSION_NAME),
            abbreviation=abbreviation,
            language=identity.get('language', 'en'),
            version_id=version_id,
        )

        for abbr, book_data in (snapshot.get('books') or {}).items():
            for number, chapter_data in ((book_data or {}).get('chapters') or {}).items():
                try:
                    accumulator._restore_chapter(abbr, int(number), chapter_data or {})
                except (BibleAppError, ValueError, KeyError, TypeError) as e:
                    logger.warning(f"Skipping stored chapter {abbr} {number}: {e}")

        accumulator.last_updated = snapshot.get('lastUpdated')
        return accumulator

    def _restore_chapter(self, book_abbr, chapter_number, chapter_data):
        stored = chapter_data.get('verses')
        if not stored:
            self.add_chapter(book_abbr, chapter_number, chapter_data.get('text', ''))
            return

        info = self._locate(book_abbr, chapter_number)
        verses = tuple(Verse(number=int(v['number']), text=v['text']) for v in stored)
        check_sequence([verse.number for verse in verses])
        self._store(info, Chapter(chapter=chapter_number, verses=verses, text=chapter_data.get('text', '')))


def legacy_version_id(abbreviation, last_updated=None):
    """Stable id for progress files written before they carried a version block"""
    try:
        stamp = datetime.fromisoformat(last_updated.replace('Z', '+00:00'))
    except (AttributeError, ValueError):
        return f"custom-{abbreviation}"
    return f"custom-{abbreviation}-{int(stamp.timestamp() * 1000)}"


def empty_progress():
    """Progress document for a version with nothing imported yet"""
    return {
        'books': {},
        'completedBooks': 0,
        'completedChapters': 0,
        'totalChapters': TOTAL_CHAPTERS,
        'totalBooks': TOTAL_BOOKS,
        'totalVerses': 0,
        'currentBook': None,
    }