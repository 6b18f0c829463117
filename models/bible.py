# models/bible.py
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from utils.books import BOOK_ORDER, find_book


@dataclass(frozen=True)
class ParsedReference:
    book: str
    chapter: int
    verse_start: Optional[int] = None
    verse_end: Optional[int] = None

    @property
    def book_name(self):
        """Display name for known books, otherwise the book token as parsed"""
        info = find_book(self.book)
        return info.name if info else self.book

    @property
    def is_range(self):
        return (
            self.verse_start is not None
            and self.verse_end is not None
            and self.verse_end != self.verse_start
        )

    def to_dict(self):
        return {
            'book': self.book,
            'chapter': self.chapter,
            'verseStart': self.verse_start,
            'verseEnd': self.verse_end,
        }


@dataclass(frozen=True)
class Verse:
    number: int
    text: str

    def to_dict(self):
        return {'number': self.number, 'text': self.text}


@dataclass(frozen=True)
class Chapter:
    chapter: int
    verses: Tuple[Verse, ...]
    text: str = ''

    @property
    def verse_count(self):
        return len(self.verses)

    @property
    def content(self):
        """Chapter body with inline verse numbers, as stored in an export"""
        return ' '.join(f"{verse.number} {verse.text}" for verse in self.verses)


@dataclass
class ImportBook:
    abbreviation: str
    name: str
    # keyed by chapter number, in insertion order
    chapters: Dict[int, Chapter] = field(default_factory=dict)


@dataclass
class Version:
    id: str
    name: str
    abbreviation: str
    language: str = 'en'
    books: Dict[str, ImportBook] = field(default_factory=dict)

    @property
    def contents(self) -> List[dict]:
        """Every chapter as {book, chapter, content}, sorted by canonical book order then chapter"""
        items = [
            {'book': abbr, 'chapter': chapter.chapter, 'content': chapter.content}
            for abbr, book in self.books.items()
            for chapter in book.chapters.values()
        ]
        items.sort(key=lambda item: (BOOK_ORDER.get(item['book'], len(BOOK_ORDER)), item['chapter']))
        return items


@dataclass(frozen=True)
class ImportProgress:
    completed_books: int
    completed_chapters: int
    total_chapters: int
    total_books: int
    total_verses: int
    current_book: Optional[str] = None

    def to_dict(self):
        return {
            'completedBooks': self.completed_books,
            'completedChapters': self.completed_chapters,
            'totalChapters': self.total_chapters,
            'totalBooks': self.total_books,
            'totalVerses': self.total_verses,
            'currentBook': self.current_book,
        }
