from pydantic import BaseModel, ConfigDict, Field
from typing import Dict, List, Literal, Optional


class ReaderSettings(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    show_verse_numbers: bool = Field(True, alias='showVerseNumbers')
    font: Literal['sans', 'serif', 'script'] = 'serif'
    theme: Literal['light', 'dark', 'cream'] = 'light'
    verse_display: Literal['paragraph', 'list'] = Field('paragraph', alias='verseDisplay')
    font_size: Literal['small', 'medium', 'large', 'xl'] = Field('medium', alias='fontSize')


class FavoritePassage(BaseModel):
    reference: str = Field(..., min_length=1, max_length=100)
    text: str
    version: str = Field(..., min_length=1)
    timestamp: str


class Highlight(BaseModel):
    text: str = Field(..., min_length=1)
    color: str = Field(..., min_length=1, max_length=32)
    note: Optional[str] = None
    timestamp: str
    version: str = Field(..., min_length=1)


class Favorites(BaseModel):
    versions: List[str] = Field(default_factory=list)
    passages: List[FavoritePassage] = Field(default_factory=list)


class UserPreferences(BaseModel):
    favorites: Favorites = Field(default_factory=Favorites)
    highlights: Dict[str, List[Highlight]] = Field(default_factory=dict)
    settings: ReaderSettings = Field(default_factory=ReaderSettings)


class PreferencesUpdate(BaseModel):
    favorites: Optional[Favorites] = None
    highlights: Optional[Dict[str, List[Highlight]]] = None
    settings: Optional[ReaderSettings] = None
