from supabase import create_client
from dotenv import load_dotenv
import os
import logging
from contextlib import contextmanager

logger = logging.getLogger(__name__)

load_dotenv()

# service_role keys are JWTs
SERVICE_KEY_PREFIX = 'eyJ'

_default_client = None


class SupabaseClient:
    """Lazily created Supabase client backing the user preference table"""

    def __init__(self, url=None, key=None):
        self._client = None
        self._url = url
        self._key = key

    def _connect(self):
        url = self._url or os.getenv('SUPABASE_URL')
        key = self._key or os.getenv('SUPABASE_SERVICE_KEY')
        if not url or not key:
            raise ValueError("SUPABASE_URL or SUPABASE_SERVICE_KEY not configured")
        if not key.startswith(SERVICE_KEY_PREFIX):
            raise ValueError("SUPABASE_SERVICE_KEY appears invalid (use service_role key)")

        logger.info(f"Connecting to Supabase at {url}")
        return create_client(url, key)

    @property
    def client(self):
        if self._client is None:
            try:
                self._client = self._connect()
            except Exception as e:
                logger.error(f"Error initializing Supabase client: {str(e)}")
                raise
        return self._client

    @contextmanager
    def db_connection(self):
        """Yield the client; failures inside the block are logged and re-raised"""
        try:
            yield self.client
        except Exception as e:
            logger.error(f"Error in Supabase client operation: {str(e)}")
            raise


@contextmanager
def get_db():
    """Connection from the process-wide client configured through the environment"""
    global _default_client
    if _default_client is None:
        _default_client = SupabaseClient()
    with _default_client.db_connection() as client:
        yield client
