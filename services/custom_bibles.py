# services/custom_bibles.py
"""
Translations bundled as local JSON files.

File layout: {"data": {"id", "name", "abbreviation", "language", "copyright",
"books": [{"id", "chapters": [{"number", "reference", "verses": [{"id", "content"}]}]}]}}
where a verse id is "<BOOK>.<chapter>.<verse>".
"""
import json
import logging
import re
from pathlib import Path

from utils.errors import PassageNotFound

logger = logging.getLogger(__name__)

CUSTOM_VERSION_SUFFIX = 'BSI'

# BOOK.CH, BOOK.CH.V, BOOK.CH.V-V or BOOK.CH.V-BOOK.CH.V
PASSAGE_ID_PATTERN = re.compile(
    r'^(?P<book>[0-9A-Z]+)\.(?P<chapter>\d+)'
    r'(?:\.(?P<start>\d+)(?:-(?:[0-9A-Z]+\.\d+\.)?(?P<end>\d+))?)?$'
)

LEADING_NUMBER_PATTERN = re.compile(r'^\d+\s*')


def is_custom_version(bible_id):
    return bool(bible_id) and bible_id.endswith(CUSTOM_VERSION_SUFFIX)


def _verse_number(verse):
    return int(verse['id'].split('.')[2])


class CustomBibleRepository:
    def __init__(self, data_dir, files):
        self.data_dir = Path(data_dir)
        self.files = dict(files)
        self._cache = {}

    def _load(self, bible_id):
        if bible_id in self._cache:
            return self._cache[bible_id]

        file_name = self.files.get(bible_id)
        if not file_name:
            raise PassageNotFound(f"No file mapping found for Bible ID: {bible_id}")

        path = self.data_dir / f"{file_name}.json"
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)['data']
        self._cache[bible_id] = data
        return data

    def list_versions(self):
        """Version metadata (without books) for every mapped file that can be loaded"""
        versions = []
        for bible_id in self.files:
            try:
                data = self._load(bible_id)
            except (OSError, ValueError, KeyError) as e:
                logger.error(f"Error loading custom Bible version {bible_id}: {str(e)}")
                continue
            versions.append({key: value for key, value in data.items() if key != 'books'})
        return versions

    def get_passage(self, bible_id, passage_id, show_verse_numbers=True):
        match = PASSAGE_ID_PATTERN.match(passage_id)
        if not match:
            raise PassageNotFound(f"Invalid passage id: {passage_id}")
        book_id, chapter = match.group('book'), match.group('chapter')
        start = int(match.group('start')) if match.group('start') else None
        end = int(match.group('end')) if match.group('end') else start

        bible = self._load(bible_id)
        book = next((b for b in bible.get('books', []) if b['id'] == book_id), None)
        if not book:
            raise PassageNotFound(f"Book {book_id} not found")

        chapter_data = next((c for c in book.get('chapters', []) if str(c['number']) == chapter), None)
        if not chapter_data:
            raise PassageNotFound(f"Chapter {chapter} not found in {book_id}")

        verses = chapter_data.get('verses', [])
        if start is not None:
            verses = [v for v in verses if start <= _verse_number(v) <= end]
        if not verses:
            raise PassageNotFound('No verses found for the given reference')

        parts = []
        for verse in verses:
            text = LEADING_NUMBER_PATTERN.sub('', verse['content'])
            parts.append(f"[{_verse_number(verse)}] {text}" if show_verse_numbers else text)

        return {
            'id': passage_id,
            'bibleId': bible_id,
            'bookId': book_id,
            'chapterId': f"{book_id}.{chapter}",
            'reference': chapter_data.get('reference', f"{book_id} {chapter}"),
            'content': ' '.join(parts),
            'verseCount': len(verses),
            'copyright': bible.get('copyright', ''),
        }
