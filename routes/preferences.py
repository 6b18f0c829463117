# routes/preferences.py
from flask import Blueprint, current_app, jsonify, request
from pydantic import ValidationError
import logging

from schemas.preference_schemas import FavoritePassage, Highlight, PreferencesUpdate, UserPreferences
from services.user_preferences import (
    add_bookmark,
    add_highlight,
    get_user_preferences,
    toggle_favorite_version,
    to_field_paths,
    update_user_preferences,
)
from utils.auth import token_required
from utils.errors import BibleAPIError
from utils.favorites import load_favorites, mark_favorites

preferences_bp = Blueprint('preferences', __name__)

logger = logging.getLogger(__name__)


def _preference_store():
    return current_app.extensions['preference_store']


def _dump(preferences):
    return preferences.model_dump(by_alias=True)


@preferences_bp.route('', methods=['GET'])
@token_required
def get_preferences(current_user_id):
    try:
        preferences = get_user_preferences(_preference_store(), current_user_id)
        if preferences is None:
            preferences = UserPreferences()
        return jsonify(_dump(preferences))
    except Exception as e:
        logger.error(f"Error fetching preferences for {current_user_id}: {str(e)}", exc_info=True)
        return jsonify({'error': 'Failed to fetch preferences'}), 500


@preferences_bp.route('', methods=['PATCH'])
@token_required
def patch_preferences(current_user_id):
    data = request.get_json(silent=True)
    if not data:
        return jsonify({'error': 'Invalid JSON payload'}), 400

    try:
        update = PreferencesUpdate.model_validate(data)
    except ValidationError as e:
        return jsonify({'error': 'Invalid preferences', 'details': e.errors(include_url=False)}), 400

    fields = update.model_dump(by_alias=True, exclude_unset=True)
    if not fields:
        return jsonify({'error': 'No preference fields to update'}), 400

    try:
        preferences = update_user_preferences(_preference_store(), current_user_id, to_field_paths(fields))
        return jsonify(_dump(preferences))
    except Exception as e:
        logger.error(f"Error updating preferences for {current_user_id}: {str(e)}", exc_info=True)
        return jsonify({'error': 'Failed to update preferences'}), 500


@preferences_bp.route('/favorites/versions/<string:version_id>', methods=['POST'])
@token_required
def toggle_version(current_user_id, version_id):
    try:
        preferences = toggle_favorite_version(_preference_store(), current_user_id, version_id)
        return jsonify({'versions': preferences.favorites.versions})
    except Exception as e:
        logger.error(f"Error toggling favorite {version_id} for {current_user_id}: {str(e)}", exc_info=True)
        return jsonify({'error': 'Failed to update favorites'}), 500


@preferences_bp.route('/versions', methods=['GET'])
@token_required
def get_versions_with_favorites(current_user_id):
    """Available versions with the user's favorites flagged and listed first"""
    favorites = load_favorites(_preference_store(), current_user_id)
    try:
        versions = current_app.extensions['bible_service'].get_versions()
    except BibleAPIError as e:
        logger.error(f"Bible versions fetch error: {e.message}")
        return jsonify({'error': 'Failed to fetch Bible versions'}), 502
    return jsonify({'data': mark_favorites(versions, favorites)})


@preferences_bp.route('/bookmarks', methods=['POST'])
@token_required
def create_bookmark(current_user_id):
    data = request.get_json(silent=True)
    if not data:
        return jsonify({'error': 'Invalid JSON payload'}), 400

    try:
        passage = FavoritePassage.model_validate(data)
    except ValidationError as e:
        return jsonify({'error': 'Invalid bookmark', 'details': e.errors(include_url=False)}), 400

    try:
        preferences = add_bookmark(_preference_store(), current_user_id, passage)
        return jsonify({'passages': [p.model_dump() for p in preferences.favorites.passages]}), 201
    except Exception as e:
        logger.error(f"Error creating bookmark for {current_user_id}: {str(e)}", exc_info=True)
        return jsonify({'error': 'Failed to create bookmark'}), 500


@preferences_bp.route('/highlights/<string:passage_id>', methods=['POST'])
@token_required
def create_highlight(current_user_id, passage_id):
    data = request.get_json(silent=True)
    if not data:
        return jsonify({'error': 'Invalid JSON payload'}), 400

    try:
        highlight = Highlight.model_validate(data)
    except ValidationError as e:
        return jsonify({'error': 'Invalid highlight', 'details': e.errors(include_url=False)}), 400

    try:
        preferences = add_highlight(_preference_store(), current_user_id, passage_id, highlight)
        return jsonify({
            'passageId': passage_id,
            'highlights': [h.model_dump() for h in preferences.highlights.get(passage_id, [])],
        }), 201
    except Exception as e:
        logger.error(f"Error adding highlight to {passage_id} for {current_user_id}: {str(e)}", exc_info=True)
        return jsonify({'error': 'Failed to add highlight'}), 500
