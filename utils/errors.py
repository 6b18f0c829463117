# utils/errors.py
"""Errors raised by the reference parser, the verse segmenter and the import accumulator.

Every error carries a message that is safe to show to the operator verbatim.
"""


class BibleAppError(Exception):
    """Base class for all domain errors"""
    status_code = 400

    def __init__(self, message):
        super().__init__(message)
        self.message = message

    def to_dict(self):
        return {'error': self.message, 'type': self.__class__.__name__}


class ParseFailure(BibleAppError):
    """A reference query or chapter text does not match the expected grammar"""

    def __init__(self, value, message=None):
        super().__init__(message or f"Could not parse '{value}'. Please try again.")
        self.value = value


class NoVersesFound(BibleAppError):
    def __init__(self):
        super().__init__('No valid verses found in the text. Please check the format.')


class SequenceGap(BibleAppError):
    """Verse numbers are not exactly 1..max"""

    def __init__(self, expected, found):
        super().__init__(f"Missing or invalid verse number. Expected {expected}, found {found}")
        self.expected = expected
        self.found = found

    @property
    def missing(self):
        return self.expected

    def to_dict(self):
        data = super().to_dict()
        data['missing'] = self.expected
        return data


class InvalidVerse(BibleAppError):
    def __init__(self, book, chapter, verse, reason=None):
        location = f"{book} {chapter}:{verse}" if book else f"verse {verse}"
        message = f"Invalid verse data in {location}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)
        self.verse = verse

    def to_dict(self):
        data = super().to_dict()
        data['verse'] = self.verse
        return data


class UnknownBook(BibleAppError):
    def __init__(self, book):
        super().__init__(f"Invalid book abbreviation: {book}")
        self.book = book


class InvalidChapter(BibleAppError):
    """Chapter number outside the canonical range of its book"""

    def __init__(self, book, chapter, max_chapter):
        super().__init__(f"Invalid chapter {chapter} for {book}: expected 1-{max_chapter}")
        self.chapter = chapter
        self.max_chapter = max_chapter


class IncompleteVersion(BibleAppError):
    status_code = 409

    def __init__(self, completed_chapters, total_chapters):
        super().__init__(
            f"Bible version is incomplete. Found {completed_chapters} chapters out of {total_chapters}."
        )
        self.completed_chapters = completed_chapters
        self.total_chapters = total_chapters


class PassageNotFound(BibleAppError):
    status_code = 404


class BibleAPIError(Exception):
    """The remote scripture API failed or rejected a request"""

    def __init__(self, message, status_code=502):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
