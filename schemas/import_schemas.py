from pydantic import BaseModel, Field
from typing import Optional


class VerseInput(BaseModel):
    number: int = Field(..., gt=0)
    text: str = Field(..., min_length=1)


class ChapterSubmission(BaseModel):
    book: str = Field(..., min_length=1, max_length=20)
    chapter: int = Field(..., gt=0)
    text: str = Field(..., min_length=1)
    # version identity, recorded on the progress file when given
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    abbreviation: Optional[str] = Field(None, min_length=1, max_length=20)
    language: Optional[str] = Field(None, min_length=2, max_length=10)


class ChapterDeletion(BaseModel):
    book: str = Field(..., min_length=1, max_length=20)
    chapter: int = Field(..., gt=0)


class ExportRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    abbreviation: str = Field(..., min_length=1, max_length=20)
    copyright: Optional[str] = None
    info: Optional[str] = None
