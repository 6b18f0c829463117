# utils/books.py
"""Canonical table of the 66 books.

Each book carries the abbreviation used by the import tool, the code used in
passage identifiers of the content API, its display name and its chapter count.
Every alias the reader accepts resolves to exactly one book.
"""
from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple


@dataclass(frozen=True)
class Book:
    abbreviation: str
    code: str
    name: str
    chapters: int
    testament: str
    aliases: Tuple[str, ...] = field(default=(), repr=False)

    def to_dict(self):
        return {
            'abbreviation': self.abbreviation,
            'code': self.code,
            'name': self.name,
            'chapters': self.chapters,
            'testament': self.testament,
        }


BIBLE_BOOKS = (
    # Old Testament
    Book('gen', 'GEN', 'Genesis', 50, 'old', ('gn',)),
    Book('exo', 'EXO', 'Exodus', 40, 'old', ('ex',)),
    Book('lev', 'LEV', 'Leviticus', 27, 'old', ('lv',)),
    Book('num', 'NUM', 'Numbers', 36, 'old', ('nm',)),
    Book('deu', 'DEU', 'Deuteronomy', 34, 'old', ('dt',)),
    Book('jos', 'JOS', 'Joshua', 24, 'old', ('js',)),
    Book('jdg', 'JDG', 'Judges', 21, 'old', ('jg',)),
    Book('rut', 'RUT', 'Ruth', 4, 'old', ('rt',)),
    Book('1sa', '1SA', '1 Samuel', 31, 'old', ('1sm',)),
    Book('2sa', '2SA', '2 Samuel', 24, 'old', ('2sm',)),
    Book('1ki', '1KI', '1 Kings', 22, 'old'),
    Book('2ki', '2KI', '2 Kings', 25, 'old'),
    Book('1ch', '1CH', '1 Chronicles', 29, 'old'),
    Book('2ch', '2CH', '2 Chronicles', 36, 'old'),
    Book('ezr', 'EZR', 'Ezra', 10, 'old'),
    Book('neh', 'NEH', 'Nehemiah', 13, 'old', ('ne',)),
    Book('est', 'EST', 'Esther', 10, 'old', ('es',)),
    Book('job', 'JOB', 'Job', 42, 'old', ('jb',)),
    Book('psa', 'PSA', 'Psalms', 150, 'old', ('ps', 'psalm')),
    Book('pro', 'PRO', 'Proverbs', 31, 'old', ('pr',)),
    Book('ecc', 'ECC', 'Ecclesiastes', 12, 'old', ('ec',)),
    Book('sos', 'SNG', 'Song of Solomon', 8, 'old', ('ss', 'song', 'songofsongs')),
    Book('isa', 'ISA', 'Isaiah', 66, 'old', ('is',)),
    Book('jer', 'JER', 'Jeremiah', 52, 'old', ('jr',)),
    Book('lam', 'LAM', 'Lamentations', 5, 'old', ('lm',)),
    Book('eze', 'EZK', 'Ezekiel', 48, 'old', ('ez',)),
    Book('dan', 'DAN', 'Daniel', 12, 'old', ('dn',)),
    Book('hos', 'HOS', 'Hosea', 14, 'old', ('hs',)),
    Book('joe', 'JOL', 'Joel', 3, 'old', ('jl',)),
    Book('amo', 'AMO', 'Amos', 9, 'old', ('am',)),
    Book('oba', 'OBA', 'Obadiah', 1, 'old', ('ob',)),
    Book('jon', 'JON', 'Jonah', 4, 'old', ('jh',)),
    Book('mic', 'MIC', 'Micah', 7, 'old', ('mc',)),
    Book('nah', 'NAM', 'Nahum', 3, 'old', ('na',)),
    Book('hab', 'HAB', 'Habakkuk', 3, 'old', ('hk',)),
    Book('zep', 'ZEP', 'Zephaniah', 3, 'old', ('zp',)),
    Book('hag', 'HAG', 'Haggai', 2, 'old', ('hg',)),
    Book('zec', 'ZEC', 'Zechariah', 14, 'old', ('zc',)),
    Book('mal', 'MAL', 'Malachi', 4, 'old', ('ml',)),
    # New Testament
    Book('mat', 'MAT', 'Matthew', 28, 'new', ('mt', 'matt')),
    Book('mar', 'MRK', 'Mark', 16, 'new', ('mk',)),
    Book('luk', 'LUK', 'Luke', 24, 'new', ('lk',)),
    Book('joh', 'JHN', 'John', 21, 'new', ('jn',)),
    Book('act', 'ACT', 'Acts', 28, 'new', ('ac',)),
    Book('rom', 'ROM', 'Romans', 16, 'new', ('rm',)),
    Book('1co', '1CO', '1 Corinthians', 16, 'new'),
    Book('2co', '2CO', '2 Corinthians', 13, 'new'),
    Book('gal', 'GAL', 'Galatians', 6, 'new', ('ga',)),
    Book('eph', 'EPH', 'Ephesians', 6, 'new', ('ep',)),
    Book('phi', 'PHP', 'Philippians', 4, 'new', ('ph', 'phil')),
    Book('col', 'COL', 'Colossians', 4, 'new', ('cl',)),
    Book('1th', '1TH', '1 Thessalonians', 5, 'new'),
    Book('2th', '2TH', '2 Thessalonians', 3, 'new'),
    Book('1ti', '1TI', '1 Timothy', 6, 'new', ('1tm', '1tim')),
    Book('2ti', '2TI', '2 Timothy', 4, 'new', ('2tm', '2tim')),
    Book('tit', 'TIT', 'Titus', 3, 'new', ('tt',)),
    Book('phm', 'PHM', 'Philemon', 1, 'new'),
    Book('heb', 'HEB', 'Hebrews', 13, 'new', ('hb',)),
    Book('jam', 'JAS', 'James', 5, 'new', ('jm',)),
    Book('1pe', '1PE', '1 Peter', 5, 'new'),
    Book('2pe', '2PE', '2 Peter', 3, 'new'),
    Book('1jo', '1JN', '1 John', 5, 'new'),
    Book('2jo', '2JN', '2 John', 1, 'new'),
    Book('3jo', '3JN', '3 John', 1, 'new'),
    Book('jud', 'JUD', 'Jude', 1, 'new', ('jd',)),
    Book('rev', 'REV', 'Revelation', 22, 'new', ('rv',)),
)

TOTAL_BOOKS = len(BIBLE_BOOKS)
TOTAL_CHAPTERS = sum(book.chapters for book in BIBLE_BOOKS)  # 1189

BOOK_ORDER = {book.abbreviation: index for index, book in enumerate(BIBLE_BOOKS)}


def _alias_keys(book):
    yield book.abbreviation
    yield book.code.lower()
    yield book.name.lower().replace(' ', '')
    yield from book.aliases


def _build_alias_index() -> Dict[str, Book]:
    index = {}
    for book in BIBLE_BOOKS:
        for key in _alias_keys(book):
            existing = index.get(key)
            if existing is not None and existing is not book:
                raise ValueError(f"Alias '{key}' maps to both {existing.name} and {book.name}")
            index[key] = book
    return index


_ALIASES = _build_alias_index()


def find_book(token) -> Optional[Book]:
    """Resolve any known alias (case-insensitive, spaces ignored) to its Book"""
    if not token:
        return None
    return _ALIASES.get(token.strip().lower().replace(' ', ''))
