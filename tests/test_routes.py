"""HTTP tests for the bible, import and preference blueprints."""
import logging
import shutil
import tempfile
import unittest
from unittest.mock import MagicMock

from app import create_app
from config import TestConfig
from services.bible_api import BibleAPIClient
from services.bible_service import BibleService
from services.custom_bibles import CustomBibleRepository
from services.storage import InMemoryStore
from services.user_preferences import InMemoryPreferenceStore
from utils.auth import generate_token
from utils.errors import BibleAPIError

from tests.helpers import chapter_text, complete_accumulator

USER = 'user-1'


class RouteTestCase(unittest.TestCase):

    def setUp(self):
        self.tmp = tempfile.mkdtemp()
        self.api_client = MagicMock(spec=BibleAPIClient)
        self.progress_store = InMemoryStore()
        self.preference_store = InMemoryPreferenceStore()
        self.app = create_app(
            TestConfig,
            bible_service=BibleService(self.api_client, CustomBibleRepository(self.tmp, {})),
            progress_store=self.progress_store,
            preference_store=self.preference_store,
        )
        self.app.config['EXPORT_DIR'] = self.tmp
        self.client = self.app.test_client()

    def tearDown(self):
        shutil.rmtree(self.tmp)

    def auth_headers(self, user_id=USER, secret='test-secret'):
        return {'Authorization': f"Bearer {generate_token(user_id, secret)}"}


class TestBibleRoutes(RouteTestCase):

    def test_health(self):
        response = self.client.get('/health')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.get_json()['status'], 'healthy')

    def test_books(self):
        books = self.client.get('/api/bible/books').get_json()
        self.assertEqual(len(books), 66)
        self.assertEqual(books[0]['abbreviation'], 'gen')

    def test_versions(self):
        self.api_client.get_versions.return_value = [{'id': 'kjv'}]
        response = self.client.get('/api/bible/versions')
        self.assertEqual(response.get_json(), {'data': [{'id': 'kjv', 'isFavorite': False}]})

    def test_versions_api_failure(self):
        self.api_client.get_versions.side_effect = BibleAPIError('down')
        self.assertEqual(self.client.get('/api/bible/versions').status_code, 502)

    def test_passage_requires_parameters(self):
        self.assertEqual(self.client.get('/api/bible/passage?bibleId=kjv').status_code, 400)

    def test_passage(self):
        self.api_client.get_passage.return_value = {'id': 'GEN.1', 'content': 'In the beginning'}
        response = self.client.get('/api/bible/passage?bibleId=kjv&passageId=GEN.1&showVerseNumbers=false')
        self.assertEqual(response.status_code, 200)
        self.api_client.get_passage.assert_called_once_with('kjv', 'GEN.1', False)

    def test_lookup(self):
        self.api_client.get_passage.return_value = {'id': 'JHN.3.16', 'reference': 'John 3:16'}
        response = self.client.get('/api/bible/lookup?q=jn%203:16&bibleId=kjv')
        self.assertEqual(response.status_code, 200)
        body = response.get_json()
        self.assertEqual(body['passageId'], 'JHN.3.16')
        self.assertEqual(body['data']['reference'], 'John 3:16')

    def test_lookup_invalid_query(self):
        response = self.client.get('/api/bible/lookup?q=hello&bibleId=kjv')
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.get_json()['type'], 'ParseFailure')

    def test_lookup_needs_version(self):
        self.assertEqual(self.client.get('/api/bible/lookup?q=jn%203:16').status_code, 400)

    def test_lookup_unknown_custom_version(self):
        response = self.client.get('/api/bible/lookup?q=jn%203:16&bibleId=NONEBSI')
        self.assertEqual(response.status_code, 404)


class TestImportRoutes(RouteTestCase):

    def test_progress_when_nothing_imported(self):
        body = self.client.get('/api/bible-import/progress').get_json()
        self.assertEqual(body['completedChapters'], 0)
        self.assertEqual(body['totalChapters'], 1189)

    def test_import_chapter(self):
        response = self.client.post('/api/bible-import', json={'book': 'gen', 'chapter': 1, 'text': chapter_text(49)})
        self.assertEqual(response.status_code, 200)
        body = response.get_json()
        self.assertTrue(body['success'])
        self.assertEqual(body['verseCount'], 49)
        self.assertEqual(body['progress']['completedChapters'], 1)
        self.assertEqual(self.progress_store.saves, 1)

        progress = self.client.get('/api/bible-import/progress').get_json()
        self.assertEqual(progress['books']['gen']['chapters']['1']['verseCount'], 49)

    def test_reimport_does_not_double_count(self):
        self.client.post('/api/bible-import', json={'book': 'gen', 'chapter': 1, 'text': chapter_text(3)})
        response = self.client.post('/api/bible-import', json={'book': 'gen', 'chapter': 1, 'text': chapter_text(4)})
        self.assertEqual(response.get_json()['progress']['completedChapters'], 1)
        self.assertEqual(response.get_json()['progress']['totalVerses'], 4)

    def test_sequence_gap_rejected(self):
        response = self.client.post('/api/bible-import', json={'book': 'gen', 'chapter': 1, 'text': '1 One. 3 Three.'})
        self.assertEqual(response.status_code, 400)
        body = response.get_json()
        self.assertEqual(body['type'], 'SequenceGap')
        self.assertEqual(body['missing'], 2)
        self.assertEqual(self.progress_store.saves, 0)

    def test_unknown_book_rejected(self):
        response = self.client.post('/api/bible-import', json={'book': 'xyz', 'chapter': 1, 'text': '1 One.'})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.get_json()['type'], 'UnknownBook')

    def test_invalid_payload(self):
        response = self.client.post('/api/bible-import', json={'book': 'gen', 'chapter': 0, 'text': '1 One.'})
        self.assertEqual(response.status_code, 400)
        self.assertIn('details', response.get_json())
        self.assertEqual(self.client.post('/api/bible-import', data='nope').status_code, 400)

    def test_bad_stored_chapter_does_not_block_import(self):
        self.progress_store.save({
            'books': {'gen': {'chapters': {
                '1': {'completed': True, 'verseCount': 2, 'text': '1 A. 2 B.'},
                '51': {'completed': True, 'verseCount': 2, 'text': '1 A. 2 B.'},
            }}},
            'completedChapters': 2,
            'totalVerses': 4,
        })

        response = self.client.get('/api/bible-import/progress')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.get_json()['completedChapters'], 1)

        response = self.client.post('/api/bible-import', json={'book': 'lev', 'chapter': 1, 'text': chapter_text(2)})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.get_json()['progress']['completedChapters'], 2)
        self.assertNotIn('51', self.progress_store.load()['books']['gen']['chapters'])

        response = self.client.delete('/api/bible-import/delete', json={'book': 'gen', 'chapter': 51})
        self.assertEqual(response.status_code, 200)

    def test_version_identity_recorded_on_import(self):
        self.client.post('/api/bible-import', json={
            'book': 'gen', 'chapter': 1, 'text': chapter_text(2),
            'name': 'Tamil Union', 'abbreviation': 'TUV', 'language': 'ta',
        })
        self.client.post('/api/bible-import', json={'book': 'gen', 'chapter': 2, 'text': chapter_text(2)})
        version = self.client.get('/api/bible-import/progress').get_json()['version']
        self.assertEqual(version['name'], 'Tamil Union')
        self.assertEqual(version['abbreviation'], 'TUV')
        self.assertEqual(version['language'], 'ta')
        self.assertTrue(version['id'].startswith('custom-TUV-'))

    def test_delete_chapter(self):
        self.client.post('/api/bible-import', json={'book': 'gen', 'chapter': 1, 'text': chapter_text(2)})
        response = self.client.delete('/api/bible-import/delete', json={'book': 'gen', 'chapter': 1})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.get_json()['progress']['completedChapters'], 0)

    def test_export_incomplete_version(self):
        self.client.post('/api/bible-import', json={'book': 'gen', 'chapter': 1, 'text': chapter_text(2)})
        response = self.client.post('/api/bible-import/export', json={'name': 'Partial', 'abbreviation': 'PRT'})
        self.assertEqual(response.status_code, 409)
        self.assertEqual(response.get_json()['type'], 'IncompleteVersion')

    def test_export_complete_version(self):
        logging.disable(logging.INFO)
        try:
            self.progress_store.save(complete_accumulator().to_snapshot())
        finally:
            logging.disable(logging.NOTSET)
        response = self.client.post('/api/bible-import/export', json={'name': 'Full', 'abbreviation': 'FUL'})
        self.assertEqual(response.status_code, 200)
        body = response.get_json()
        self.assertTrue(body['success'])
        self.assertEqual(body['chapters'], 1189)
        self.assertTrue(body['path'].endswith('ful.json'))


class TestPreferenceRoutes(RouteTestCase):

    def test_requires_token(self):
        self.assertEqual(self.client.get('/api/preferences').status_code, 401)

    def test_rejects_token_with_wrong_secret(self):
        response = self.client.get('/api/preferences', headers=self.auth_headers(secret='other-secret'))
        self.assertEqual(response.status_code, 401)

    def test_defaults_for_new_user(self):
        response = self.client.get('/api/preferences', headers=self.auth_headers())
        self.assertEqual(response.status_code, 200)
        body = response.get_json()
        self.assertEqual(body['favorites'], {'versions': [], 'passages': []})
        self.assertTrue(body['settings']['showVerseNumbers'])

    def test_patch_settings(self):
        self.client.patch('/api/preferences', json={'settings': {'fontSize': 'large'}}, headers=self.auth_headers())
        response = self.client.patch('/api/preferences', json={'settings': {'theme': 'dark'}}, headers=self.auth_headers())
        self.assertEqual(response.status_code, 200)
        settings = response.get_json()['settings']
        self.assertEqual(settings['theme'], 'dark')
        self.assertEqual(settings['fontSize'], 'large')

    def test_patch_rejects_bad_values(self):
        response = self.client.patch('/api/preferences', json={'settings': {'theme': 'neon'}}, headers=self.auth_headers())
        self.assertEqual(response.status_code, 400)

    def test_toggle_favorite_and_versions(self):
        self.api_client.get_versions.return_value = [{'id': 'asv'}, {'id': 'kjv'}]
        response = self.client.post('/api/preferences/favorites/versions/kjv', headers=self.auth_headers())
        self.assertEqual(response.get_json(), {'versions': ['kjv']})

        versions = self.client.get('/api/preferences/versions', headers=self.auth_headers()).get_json()['data']
        self.assertEqual([v['id'] for v in versions], ['kjv', 'asv'])
        self.assertTrue(versions[0]['isFavorite'])

    def test_bookmark(self):
        response = self.client.post('/api/preferences/bookmarks', headers=self.auth_headers(), json={
            'reference': 'John 3:16', 'text': 'For God so loved', 'version': 'kjv',
            'timestamp': '2024-01-01T00:00:00Z',
        })
        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.get_json()['passages'][0]['reference'], 'John 3:16')

    def test_highlight(self):
        response = self.client.post('/api/preferences/highlights/JHN.3.16', headers=self.auth_headers(), json={
            'text': 'loved', 'color': 'yellow', 'timestamp': '2024-01-01T00:00:00Z', 'version': 'kjv',
        })
        self.assertEqual(response.status_code, 201)
        body = response.get_json()
        self.assertEqual(body['passageId'], 'JHN.3.16')
        self.assertEqual(len(body['highlights']), 1)


if __name__ == '__main__':
    unittest.main()
