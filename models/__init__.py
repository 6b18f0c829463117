# This file makes the models directory a Python package
from .bible import Chapter, ImportBook, ImportProgress, ParsedReference, Verse, Version

__all__ = [
    'ParsedReference',
    'Verse',
    'Chapter',
    'ImportBook',
    'Version',
    'ImportProgress',
]
