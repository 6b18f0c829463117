# services/bible_api.py
import logging
import requests

from utils.errors import BibleAPIError

logger = logging.getLogger(__name__)


class BibleAPIClient:
    """
    Client for the API.Bible REST service.

    - Versions: GET {base}/bibles
    - Passage:  GET {base}/bibles/{bibleId}/passages/{passageId}
    Both require the 'api-key' header.
    """

    def __init__(self, base_url, api_key, timeout=15, session=None):
        self.base_url = base_url.rstrip('/')
        self.api_key = api_key
        self.timeout = timeout
        self.session = session or requests.Session()

    def _get(self, path, params=None):
        if not self.api_key:
            raise BibleAPIError("Bible API key is not configured", status_code=500)

        url = f"{self.base_url}{path}"
        try:
            response = self.session.get(
                url,
                headers={'api-key': self.api_key},
                params=params,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.error(f"Request to {url} failed: {str(e)}")
            raise BibleAPIError(f"Could not reach the Bible API: {str(e)}") from e

        if response.status_code != 200:
            message = f"API responded with status: {response.status_code}"
            try:
                message = response.json().get('message') or message
            except ValueError:
                pass
            logger.warning(f"Bible API error for {path}: {message}")
            raise BibleAPIError(message, status_code=response.status_code)

        return response.json()

    def get_versions(self):
        """List of {id, abbreviation, name, language: {name}, ...}"""
        return self._get('/bibles').get('data', [])

    def get_passage(self, bible_id, passage_id, show_verse_numbers=True):
        params = {
            'content-type': 'text',
            'include-notes': 'false',
            'include-titles': 'false',
            'include-chapter-numbers': 'false',
            'include-verse-numbers': 'true' if show_verse_numbers else 'false',
        }
        return self._get(f"/bibles/{bible_id}/passages/{passage_id}", params=params).get('data', {})
