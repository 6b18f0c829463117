# services/user_preferences.py
"""
Per-user preference documents: favorites, highlights and reader settings.

Documents are read whole and written with field-path updates such as
``{'favorites.versions': [...]}``; only the touched top-level fields are written.
"""
import copy
import logging

from database import get_db
from schemas.preference_schemas import UserPreferences
from utils.favorites import toggle_favorite

logger = logging.getLogger(__name__)

DOCUMENT_FIELDS = ('favorites', 'highlights', 'settings')


class PreferenceStore:
    """Interface: load(user_id) -> dict or None, save(user_id, fields) writes top-level fields"""

    def load(self, user_id):
        raise NotImplementedError

    def save(self, user_id, fields):
        raise NotImplementedError


class SupabasePreferenceStore(PreferenceStore):
    """One row per user in a Supabase table with JSON columns"""

    def __init__(self, table='user_preferences', connection=get_db):
        self.table = table
        self.connection = connection

    def load(self, user_id):
        with self.connection() as client:
            response = client.table(self.table).select('*').eq('user_id', user_id).limit(1).execute()
        if not response.data:
            return None
        row = response.data[0]
        return {name: row.get(name) for name in DOCUMENT_FIELDS if row.get(name) is not None}

    def save(self, user_id, fields):
        with self.connection() as client:
            client.table(self.table).upsert({'user_id': user_id, **fields}).execute()


class InMemoryPreferenceStore(PreferenceStore):
    def __init__(self, documents=None):
        self.documents = copy.deepcopy(documents) or {}

    def load(self, user_id):
        document = self.documents.get(user_id)
        return copy.deepcopy(document) if document is not None else None

    def save(self, user_id, fields):
        self.documents.setdefault(user_id, {}).update(copy.deepcopy(fields))


def apply_field_paths(document, updates):
    """Apply dotted-path updates to a document; returns the set of touched top-level fields"""
    touched = set()
    for path, value in updates.items():
        keys = path.split('.')
        if keys[0] not in DOCUMENT_FIELDS:
            raise ValueError(f"Unknown preference field: {keys[0]}")
        target = document
        for key in keys[:-1]:
            if not isinstance(target.get(key), dict):
                target[key] = {}
            target = target[key]
        target[keys[-1]] = value
        touched.add(keys[0])
    return touched


def to_field_paths(fields):
    """Turn a partial document into field paths so unset nested values are left alone"""
    updates = {}
    for name, value in fields.items():
        if name in ('favorites', 'settings') and isinstance(value, dict):
            for key, nested in value.items():
                updates[f"{name}.{key}"] = nested
        else:
            updates[name] = value
    return updates


def _load_document(store, user_id):
    document = store.load(user_id)
    if document is None:
        return UserPreferences().model_dump(by_alias=True)
    return document


def get_user_preferences(store, user_id):
    """Whole preference document for the user, or None when the user has none yet"""
    document = store.load(user_id)
    if document is None:
        return None
    return UserPreferences.model_validate(document)


def update_user_preferences(store, user_id, updates):
    """Write field-path updates and return the resulting preferences"""
    document = _load_document(store, user_id)
    touched = apply_field_paths(document, updates)
    preferences = UserPreferences.model_validate(document)
    dumped = preferences.model_dump(by_alias=True)
    store.save(user_id, {name: dumped[name] for name in touched})
    logger.info(f"Updated preferences {sorted(touched)} for user {user_id}")
    return preferences


def toggle_favorite_version(store, user_id, version_id):
    document = _load_document(store, user_id)
    favorites = (document.get('favorites') or {}).get('versions') or []
    updated = toggle_favorite(favorites, version_id)
    return update_user_preferences(store, user_id, {'favorites.versions': updated})


def add_bookmark(store, user_id, passage):
    document = _load_document(store, user_id)
    bookmarks = (document.get('favorites') or {}).get('passages') or []
    return update_user_preferences(
        store, user_id, {'favorites.passages': bookmarks + [passage.model_dump()]}
    )


def add_highlight(store, user_id, passage_id, highlight):
    # passage ids contain dots, so the whole highlights map is written
    document = _load_document(store, user_id)
    highlights = dict(document.get('highlights') or {})
    highlights[passage_id] = list(highlights.get(passage_id) or []) + [highlight.model_dump()]
    return update_user_preferences(store, user_id, {'highlights': highlights})
