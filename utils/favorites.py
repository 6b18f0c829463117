# utils/favorites.py
import logging

logger = logging.getLogger(__name__)


def toggle_favorite(favorites, version_id):
    """Return a new list with version_id added, or removed if it was already there"""
    if version_id in favorites:
        return [item for item in favorites if item != version_id]
    return list(favorites) + [version_id]


def mark_favorites(versions, favorites):
    """Copy of each version dict with an isFavorite flag, favorites first"""
    favorite_ids = set(favorites or [])
    marked = [dict(version, isFavorite=version.get('id') in favorite_ids) for version in versions]
    marked.sort(key=lambda version: not version['isFavorite'])
    return marked


def load_favorites(store, user_id):
    """Favorite version ids for the user; store failures degrade to an empty list"""
    try:
        document = store.load(user_id) or {}
        return list((document.get('favorites') or {}).get('versions') or [])
    except Exception as e:
        logger.error(f"Error loading favorites for user {user_id}: {str(e)}", exc_info=True)
        return []
