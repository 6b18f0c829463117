# routes/bible_import.py
from flask import Blueprint, current_app, jsonify, request
from pydantic import ValidationError
import logging

from schemas.import_schemas import ChapterDeletion, ChapterSubmission, ExportRequest
from services.import_accumulator import ImportAccumulator, empty_progress
from services.version_exporter import build_version_export, write_version_export
from utils.errors import BibleAppError

bible_import_bp = Blueprint('bible_import', __name__)

logger = logging.getLogger(__name__)


def _progress_store():
    return current_app.extensions['progress_store']


def _load_accumulator(**details):
    return ImportAccumulator.from_snapshot(_progress_store().load(), **details)


def _progress_response(accumulator):
    snapshot = accumulator.to_snapshot()
    snapshot.update(accumulator.get_progress().to_dict())
    return snapshot


def _validation_error(e):
    return jsonify({'error': 'Invalid request', 'details': e.errors(include_url=False)}), 400


@bible_import_bp.route('', methods=['POST'])
def import_chapter():
    data = request.get_json(silent=True)
    if not data:
        return jsonify({'error': 'Invalid JSON payload'}), 400

    try:
        submission = ChapterSubmission.model_validate(data)
    except ValidationError as e:
        return _validation_error(e)

    try:
        accumulator = _load_accumulator(
            name=submission.name,
            abbreviation=submission.abbreviation,
            language=submission.language,
        )
        chapter = accumulator.add_chapter(submission.book, submission.chapter, submission.text)
        _progress_store().save(accumulator.to_snapshot())

        progress = accumulator.get_progress()
        logger.info(f"Successfully processed {submission.book} {submission.chapter}")
        logger.info(f"Progress: {progress.completed_chapters}/{progress.total_chapters} chapters")
        return jsonify({
            'success': True,
            'verseCount': chapter.verse_count,
            'progress': _progress_response(accumulator),
        })
    except BibleAppError as e:
        logger.warning(f"Rejected {submission.book} {submission.chapter}: {e.message}")
        return jsonify(e.to_dict()), e.status_code
    except Exception as e:
        logger.error(f"Bible import error: {str(e)}", exc_info=True)
        return jsonify({'error': 'Failed to process chapter'}), 500


@bible_import_bp.route('/progress', methods=['GET'])
def get_progress():
    try:
        snapshot = _progress_store().load()
        if snapshot is None:
            return jsonify(empty_progress())
        return jsonify(_progress_response(ImportAccumulator.from_snapshot(snapshot)))
    except Exception as e:
        logger.error(f"Error fetching progress: {str(e)}", exc_info=True)
        return jsonify({'error': 'Failed to fetch progress'}), 500


@bible_import_bp.route('/delete', methods=['DELETE'])
def delete_chapter():
    data = request.get_json(silent=True)
    if not data:
        return jsonify({'error': 'Invalid JSON payload'}), 400

    try:
        deletion = ChapterDeletion.model_validate(data)
    except ValidationError as e:
        return _validation_error(e)

    try:
        accumulator = _load_accumulator()
        if accumulator.delete_chapter(deletion.book, deletion.chapter):
            _progress_store().save(accumulator.to_snapshot())
            logger.info(f"Deleted {deletion.book} {deletion.chapter}")
        return jsonify({'success': True, 'progress': _progress_response(accumulator)})
    except BibleAppError as e:
        return jsonify(e.to_dict()), e.status_code
    except Exception as e:
        logger.error(f"Delete chapter error: {str(e)}", exc_info=True)
        return jsonify({'error': 'Failed to delete chapter'}), 500


@bible_import_bp.route('/export', methods=['POST'])
def export_version():
    data = request.get_json(silent=True)
    if not data:
        return jsonify({'error': 'Invalid JSON payload'}), 400

    try:
        details = ExportRequest.model_validate(data)
    except ValidationError as e:
        return _validation_error(e)

    try:
        accumulator = _load_accumulator(name=details.name, abbreviation=details.abbreviation)
        version = accumulator.export()
        export = build_version_export(
            version,
            name=details.name,
            abbreviation=details.abbreviation,
            copyright=details.copyright,
            info=details.info,
        )
        export_path = write_version_export(export, current_app.config['EXPORT_DIR'])
        return jsonify({'success': True, 'path': str(export_path), 'chapters': len(export['contents'])})
    except BibleAppError as e:
        logger.warning(f"Export refused: {e.message}")
        return jsonify(e.to_dict()), e.status_code
    except Exception as e:
        logger.error(f"Export error: {str(e)}", exc_info=True)
        return jsonify({'error': 'Failed to export version'}), 500
