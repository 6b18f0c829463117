"""Tests for user preference documents and favorite versions."""
import unittest
from contextlib import contextmanager
from unittest.mock import MagicMock, patch

from database import SupabaseClient
from schemas.preference_schemas import FavoritePassage, Highlight
from services.user_preferences import (
    InMemoryPreferenceStore,
    SupabasePreferenceStore,
    add_bookmark,
    add_highlight,
    apply_field_paths,
    get_user_preferences,
    to_field_paths,
    toggle_favorite_version,
    update_user_preferences,
)
from utils.favorites import load_favorites, mark_favorites, toggle_favorite

USER = 'user-1'


class TestFavorites(unittest.TestCase):

    def test_toggle_adds_then_removes(self):
        favorites = toggle_favorite([], 'kjv')
        self.assertEqual(favorites, ['kjv'])
        self.assertEqual(toggle_favorite(favorites, 'kjv'), [])
        self.assertEqual(favorites, ['kjv'])

    def test_mark_favorites_puts_favorites_first(self):
        versions = [{'id': 'a'}, {'id': 'b'}, {'id': 'c'}]
        marked = mark_favorites(versions, ['c'])
        self.assertEqual([v['id'] for v in marked], ['c', 'a', 'b'])
        self.assertTrue(marked[0]['isFavorite'])
        self.assertFalse(marked[1]['isFavorite'])
        self.assertNotIn('isFavorite', versions[0])

    def test_load_favorites_degrades_on_store_error(self):
        store = MagicMock()
        store.load.side_effect = RuntimeError('unavailable')
        self.assertEqual(load_favorites(store, USER), [])

    def test_load_favorites_for_new_user(self):
        self.assertEqual(load_favorites(InMemoryPreferenceStore(), USER), [])


class TestFieldPaths(unittest.TestCase):

    def test_apply_nested_paths(self):
        document = {'settings': {'font': 'serif'}}
        touched = apply_field_paths(document, {'settings.theme': 'dark', 'favorites.versions': ['kjv']})
        self.assertEqual(touched, {'settings', 'favorites'})
        self.assertEqual(document['settings'], {'font': 'serif', 'theme': 'dark'})
        self.assertEqual(document['favorites'], {'versions': ['kjv']})

    def test_unknown_field_rejected(self):
        with self.assertRaises(ValueError):
            apply_field_paths({}, {'password': 'x'})

    def test_to_field_paths(self):
        paths = to_field_paths({'settings': {'theme': 'dark'}, 'highlights': {'JHN.3.16': []}})
        self.assertEqual(paths, {'settings.theme': 'dark', 'highlights': {'JHN.3.16': []}})


class TestPreferenceService(unittest.TestCase):

    def setUp(self):
        self.store = InMemoryPreferenceStore()

    def test_new_user_has_no_document(self):
        self.assertIsNone(get_user_preferences(self.store, USER))

    def test_partial_settings_update_keeps_other_settings(self):
        update_user_preferences(self.store, USER, {'settings.fontSize': 'large'})
        preferences = update_user_preferences(self.store, USER, {'settings.theme': 'dark'})
        self.assertEqual(preferences.settings.theme, 'dark')
        self.assertEqual(preferences.settings.font_size, 'large')
        self.assertEqual(self.store.documents[USER]['settings']['fontSize'], 'large')

    def test_only_touched_fields_are_saved(self):
        store = MagicMock()
        store.load.return_value = None
        update_user_preferences(store, USER, {'settings.theme': 'cream'})
        _, fields = store.save.call_args[0]
        self.assertEqual(list(fields), ['settings'])

    def test_toggle_favorite_version(self):
        preferences = toggle_favorite_version(self.store, USER, 'kjv')
        self.assertEqual(preferences.favorites.versions, ['kjv'])
        preferences = toggle_favorite_version(self.store, USER, 'TAOVBSI')
        self.assertEqual(preferences.favorites.versions, ['kjv', 'TAOVBSI'])
        preferences = toggle_favorite_version(self.store, USER, 'kjv')
        self.assertEqual(preferences.favorites.versions, ['TAOVBSI'])

    def test_add_bookmark_keeps_favorite_versions(self):
        toggle_favorite_version(self.store, USER, 'kjv')
        passage = FavoritePassage(reference='John 3:16', text='For God so loved', version='kjv',
                                  timestamp='2024-01-01T00:00:00Z')
        preferences = add_bookmark(self.store, USER, passage)
        self.assertEqual(len(preferences.favorites.passages), 1)
        self.assertEqual(preferences.favorites.versions, ['kjv'])

    def test_highlights_keyed_by_dotted_passage_id(self):
        highlight = Highlight(text='loved', color='yellow', timestamp='2024-01-01T00:00:00Z', version='kjv')
        add_highlight(self.store, USER, 'JHN.3.16', highlight)
        preferences = add_highlight(self.store, USER, 'JHN.3.16', highlight)
        self.assertEqual(len(preferences.highlights['JHN.3.16']), 2)
        self.assertIn('JHN.3.16', self.store.documents[USER]['highlights'])


class TestSupabasePreferenceStore(unittest.TestCase):

    def setUp(self):
        self.client = MagicMock()

        @contextmanager
        def connection():
            yield self.client

        self.store = SupabasePreferenceStore(table='prefs', connection=connection)

    def test_load_row(self):
        query = self.client.table.return_value.select.return_value.eq.return_value.limit.return_value
        query.execute.return_value = MagicMock(data=[{'user_id': USER, 'settings': {'theme': 'dark'}, 'highlights': None}])
        self.assertEqual(self.store.load(USER), {'settings': {'theme': 'dark'}})
        self.client.table.assert_called_with('prefs')
        self.client.table.return_value.select.return_value.eq.assert_called_with('user_id', USER)

    def test_load_missing_row(self):
        query = self.client.table.return_value.select.return_value.eq.return_value.limit.return_value
        query.execute.return_value = MagicMock(data=[])
        self.assertIsNone(self.store.load(USER))

    def test_save_upserts(self):
        self.store.save(USER, {'favorites': {'versions': ['kjv'], 'passages': []}})
        self.client.table.return_value.upsert.assert_called_once_with(
            {'user_id': USER, 'favorites': {'versions': ['kjv'], 'passages': []}}
        )


class TestSupabaseClient(unittest.TestCase):

    def test_client_created_once(self):
        with patch('database.create_client') as create_client:
            supabase = SupabaseClient('https://example.supabase.co', 'eyJservicekey')
            with supabase.db_connection() as first:
                pass
            with supabase.db_connection() as second:
                pass
        create_client.assert_called_once_with('https://example.supabase.co', 'eyJservicekey')
        self.assertIs(first, second)

    def test_rejects_non_service_key(self):
        with patch('database.create_client') as create_client:
            with self.assertRaises(ValueError):
                SupabaseClient('https://example.supabase.co', 'anon-key').client
        create_client.assert_not_called()


if __name__ == '__main__':
    unittest.main()
