# app.py
from flask import Flask, jsonify, request, g
from flask_cors import CORS
from werkzeug.middleware.proxy_fix import ProxyFix
import os
import logging
import time
import sys

from config import Config
from database import SupabaseClient
from routes.bible import bible_bp
from routes.bible_import import bible_import_bp
from routes.preferences import preferences_bp
from services.bible_api import BibleAPIClient
from services.bible_service import BibleService
from services.custom_bibles import CustomBibleRepository
from services.storage import JsonFileStore
from services.user_preferences import SupabasePreferenceStore

# Configure logging to output to stdout
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[logging.StreamHandler(sys.stdout)]
)
logger = logging.getLogger(__name__)


def create_app(config_object=Config, bible_service=None, progress_store=None, preference_store=None):
    """
    Build the Flask app. Collaborators not passed in are created from the config:
    the API.Bible client plus bundled versions, the JSON progress file and the
    Supabase preference table.
    """
    app = Flask(__name__)
    app.config.from_object(config_object)

    # Use ProxyFix to handle proxy headers properly
    app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1)

    app.json.sort_keys = False  # Preserve order of keys in JSON responses
    app.json.compact = True

    CORS(app, resources={
        r"/api/*": {
            "origins": "*",
            "methods": ["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
            "allow_headers": ["Content-Type", "Authorization"],
            "expose_headers": ["Content-Type", "Authorization"],
            "supports_credentials": True
        }
    })

    # Ensure URLs with or without trailing slashes are handled the same way
    app.url_map.strict_slashes = False

    if bible_service is None:
        bible_service = BibleService(
            BibleAPIClient(
                app.config['BIBLE_API_URL'],
                app.config['BIBLE_API_KEY'],
                timeout=app.config['BIBLE_API_TIMEOUT'],
            ),
            CustomBibleRepository(app.config['CUSTOM_BIBLE_DIR'], app.config['CUSTOM_BIBLE_FILES']),
        )
    if progress_store is None:
        progress_store = JsonFileStore(app.config['IMPORT_PROGRESS_PATH'])
    if preference_store is None:
        supabase = SupabaseClient(app.config['SUPABASE_URL'], app.config['SUPABASE_SERVICE_KEY'])
        preference_store = SupabasePreferenceStore(
            table=app.config['USER_PREFERENCES_TABLE'],
            connection=supabase.db_connection,
        )

    app.extensions['bible_service'] = bible_service
    app.extensions['progress_store'] = progress_store
    app.extensions['preference_store'] = preference_store

    # Register blueprints
    app.register_blueprint(bible_bp, url_prefix='/api/bible')
    app.register_blueprint(bible_import_bp, url_prefix='/api/bible-import')
    app.register_blueprint(preferences_bp, url_prefix='/api/preferences')

    @app.before_request
    def before_request():
        g.start_time = time.time()

    @app.after_request
    def after_request(response):
        # Log request duration
        duration = time.time() - g.get('start_time', time.time())
        logger.info(f"Request to {request.path} took {duration:.2f} seconds")
        return response

    @app.route('/health', methods=['GET'])
    def health():
        return jsonify({
            'status': 'healthy',
            'timestamp': time.time()
        })

    return app


app = create_app()

if __name__ == '__main__':
    logger.info("Starting Flask server...")
    port = int(os.getenv('PORT', 5001))
    app.run(debug=True, port=port)
