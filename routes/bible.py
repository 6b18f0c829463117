# routes/bible.py
from flask import Blueprint, current_app, jsonify, request
import logging

from utils.books import BIBLE_BOOKS
from utils.errors import BibleAPIError, BibleAppError

bible_bp = Blueprint('bible', __name__)

logger = logging.getLogger(__name__)


def _bible_service():
    return current_app.extensions['bible_service']


def _show_verse_numbers():
    return request.args.get('showVerseNumbers', 'true').lower() != 'false'


@bible_bp.route('/books', methods=['GET'])
def get_books():
    return jsonify([book.to_dict() for book in BIBLE_BOOKS])


@bible_bp.route('/versions', methods=['GET'])
def get_versions():
    try:
        versions = _bible_service().get_versions()
        return jsonify({'data': versions})
    except BibleAPIError as e:
        logger.error(f"Bible versions fetch error: {e.message}")
        return jsonify({'error': 'Failed to fetch Bible versions'}), 502
    except Exception as e:
        logger.error(f"Bible versions fetch error: {str(e)}", exc_info=True)
        return jsonify({'error': 'Failed to fetch Bible versions'}), 500


@bible_bp.route('/passage', methods=['GET'])
def get_passage():
    bible_id = request.args.get('bibleId')
    passage_id = request.args.get('passageId')
    if not bible_id or not passage_id:
        return jsonify({'error': 'Missing required parameters'}), 400

    try:
        passage = _bible_service().get_passage(bible_id, passage_id, _show_verse_numbers())
        return jsonify({'data': passage})
    except BibleAppError as e:
        return jsonify(e.to_dict()), e.status_code
    except BibleAPIError as e:
        logger.error(f"Bible passage fetch error for {bible_id}/{passage_id}: {e.message}")
        return jsonify({'error': 'Failed to fetch Bible passage'}), 502
    except Exception as e:
        logger.error(f"Bible passage fetch error: {str(e)}", exc_info=True)
        return jsonify({'error': 'Failed to fetch Bible passage'}), 500


@bible_bp.route('/lookup', methods=['GET'])
def lookup_passage():
    """Parse a free-text reference like 'jn 3:16-18' and fetch it"""
    query = request.args.get('q', '').strip()
    bible_id = request.args.get('bibleId')
    if not bible_id:
        return jsonify({'error': 'Please wait for Bible versions to load'}), 400

    try:
        result = _bible_service().lookup(query, bible_id, _show_verse_numbers())
        return jsonify(result)
    except BibleAppError as e:
        logger.info(f"Lookup rejected for '{query}': {e.message}")
        return jsonify(e.to_dict()), e.status_code
    except BibleAPIError as e:
        logger.error(f"Lookup failed for '{query}': {e.message}")
        return jsonify({'error': e.message}), 502
    except Exception as e:
        logger.error(f"Lookup error for '{query}': {str(e)}", exc_info=True)
        return jsonify({'error': 'Failed to fetch passage'}), 500
