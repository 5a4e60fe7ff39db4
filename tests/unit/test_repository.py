"""Unit tests for tracer_lib.words.repository.

Uses in-memory SQLite key-value stores for isolation.
"""

import json
import sys
import tempfile
import unittest
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from tracer_lib.config import BG_COLOR_KEY, CUSTOM_WORDS_KEY
from tracer_lib.domain import WordEntry
from tracer_lib.words import (
    INITIAL_WORDS,
    InMemoryWordRepository,
    JsonWordRepository,
    KeyValueStore,
    SettingsRepository,
    WordLibrary,
)


class TestKeyValueStore(unittest.TestCase):
    """Tests for KeyValueStore."""

    def setUp(self):
        self.store = KeyValueStore(':memory:')

    def tearDown(self):
        self.store.close()

    def test_missing_key(self):
        self.assertIsNone(self.store.get_item('nope'))

    def test_set_get_overwrite(self):
        self.assertTrue(self.store.set_item('k', 'v1'))
        self.assertTrue(self.store.set_item('k', 'v2'))
        self.assertEqual(self.store.get_item('k'), 'v2')

    def test_remove(self):
        self.store.set_item('k', 'v')
        self.store.remove_item('k')
        self.assertIsNone(self.store.get_item('k'))

    def test_file_backed_store_persists(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = str(Path(tmp) / 'tracer.db')
            first = KeyValueStore(path)
            first.set_item('k', 'v')
            first.close()

            second = KeyValueStore(path)
            self.assertEqual(second.get_item('k'), 'v')
            second.close()


class TestJsonWordRepository(unittest.TestCase):
    """Tests for JsonWordRepository."""

    def setUp(self):
        self.store = KeyValueStore(':memory:')
        self.repo = JsonWordRepository(self.store)

    def tearDown(self):
        self.store.close()

    def test_empty(self):
        self.assertEqual(self.repo.list(), [])

    def test_append_persists_json_list(self):
        self.assertTrue(self.repo.append(WordEntry('moon', emoji='x', id='1')))
        self.assertTrue(self.repo.append(WordEntry('sun', image_url='data:,', id='2')))

        self.assertEqual([w.text for w in self.repo.list()], ['moon', 'sun'])
        raw = json.loads(self.store.get_item(CUSTOM_WORDS_KEY))
        self.assertEqual(raw[1], {'id': '2', 'text': 'sun', 'imageUrl': 'data:,'})

    def test_corrupt_json_treated_as_empty(self):
        self.store.set_item(CUSTOM_WORDS_KEY, '{not json')
        with self.assertLogs('tracer_lib.words.repository', level='ERROR'):
            self.assertEqual(self.repo.list(), [])

    def test_non_list_treated_as_empty(self):
        self.store.set_item(CUSTOM_WORDS_KEY, '{"text": "moon"}')
        self.assertEqual(self.repo.list(), [])

    def test_invalid_entries_skipped(self):
        self.store.set_item(CUSTOM_WORDS_KEY, json.dumps([{'text': 'moon'}, {'emoji': 'x'}, 5]))
        self.assertEqual([w.text for w in self.repo.list()], ['moon'])


class TestWordLibrary(unittest.TestCase):
    """Tests for WordLibrary."""

    def test_defaults_then_custom(self):
        library = WordLibrary(InMemoryWordRepository([WordEntry('moon')]))
        words = library.list()
        self.assertEqual(len(words), len(INITIAL_WORDS) + 1)
        self.assertEqual(words[0].text, 'bed')
        self.assertEqual(words[-1].text, 'moon')

    def test_append_goes_to_custom(self):
        custom = InMemoryWordRepository()
        library = WordLibrary(custom, defaults=[WordEntry('a')])
        library.append(WordEntry('b'))
        self.assertEqual([w.text for w in custom.list()], ['b'])
        self.assertEqual([w.text for w in library.list()], ['a', 'b'])


class TestSettingsRepository(unittest.TestCase):
    """Tests for SettingsRepository."""

    def setUp(self):
        self.store = KeyValueStore(':memory:')
        self.settings = SettingsRepository(self.store)

    def tearDown(self):
        self.store.close()

    def test_defaults(self):
        self.assertEqual(self.settings.background_color('#F1F5F9'), '#F1F5F9')
        self.assertEqual(self.settings.font_family('Andika'), 'Andika')

    def test_saved_values(self):
        self.settings.set_background_color('#FECACA')
        self.settings.set_font_family('Fredoka')
        self.assertEqual(self.store.get_item(BG_COLOR_KEY), '#FECACA')
        self.assertEqual(self.settings.background_color('#FFFFFF'), '#FECACA')
        self.assertEqual(self.settings.font_family('Andika'), 'Fredoka')


if __name__ == '__main__':
    unittest.main()
