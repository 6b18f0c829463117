# config.py
import json
import os
from pathlib import Path

from dotenv import load_dotenv

BASE_DIR = Path(__file__).resolve().parent

load_dotenv()


def _custom_bible_files():
    raw = os.getenv('CUSTOM_BIBLE_FILES')
    if raw:
        return json.loads(raw)
    return {'TAOVBSI': 'tamil-bible'}


class Config:
    BIBLE_API_URL = os.getenv('BIBLE_API_URL', 'https://api.scripture.api.bible/v1')
    BIBLE_API_KEY = os.getenv('BIBLE_API_KEY')
    BIBLE_API_TIMEOUT = float(os.getenv('BIBLE_API_TIMEOUT', '15'))

    # Bundled translations served from local JSON files, keyed by version id
    CUSTOM_BIBLE_DIR = os.getenv('CUSTOM_BIBLE_DIR', os.path.join(BASE_DIR, 'data'))
    CUSTOM_BIBLE_FILES = _custom_bible_files()

    IMPORT_PROGRESS_PATH = os.getenv(
        'IMPORT_PROGRESS_PATH', os.path.join(BASE_DIR, 'bible_import', 'processed', 'progress.json')
    )
    EXPORT_DIR = os.getenv('EXPORT_DIR', os.path.join(BASE_DIR, 'public', 'bibles'))

    SUPABASE_URL = os.getenv('SUPABASE_URL')
    SUPABASE_SERVICE_KEY = os.getenv('SUPABASE_SERVICE_KEY')
    USER_PREFERENCES_TABLE = os.getenv('USER_PREFERENCES_TABLE', 'user_preferences')

    JWT_SECRET = os.getenv('JWT_SECRET', 'your-secret-key')  # In production, use a proper secret key

    MAX_CONTENT_LENGTH = 10 * 1024 * 1024  # 10MB max request size
    CORS_HEADERS = 'Content-Type'


class TestConfig(Config):
    TESTING = True
    BIBLE_API_KEY = 'test-key'
    JWT_SECRET = 'test-secret'
    CUSTOM_BIBLE_FILES = {}
