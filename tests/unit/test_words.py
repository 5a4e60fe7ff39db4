"""Unit tests for word entries, the default library and the match game."""

import random
import sys
import unittest
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from tracer_lib.domain import WordEntry
from tracer_lib.words import INITIAL_WORDS, WordMatchGame, generate_round


class TestWordEntry(unittest.TestCase):
    """Tests for WordEntry serialization."""

    def test_to_dict_uses_persisted_keys(self):
        entry = WordEntry('moon', image_url='data:image/jpeg;base64,xx', id='1700000000000')
        self.assertEqual(entry.to_dict(), {
            'id': '1700000000000',
            'text': 'moon',
            'imageUrl': 'data:image/jpeg;base64,xx',
        })

    def test_from_dict(self):
        entry = WordEntry.from_dict({'text': 'sun', 'emoji': '☀', 'category': 'Sky'})
        self.assertEqual(entry, WordEntry('sun', emoji='☀', category='Sky'))

    def test_from_dict_round_trips(self):
        entry = WordEntry('cat', image_url='./assets/cat.png', emoji='x', category='Animals', id='7')
        self.assertEqual(WordEntry.from_dict(entry.to_dict()), entry)

    def test_from_dict_requires_text(self):
        with self.assertRaises(ValueError):
            WordEntry.from_dict({'emoji': 'x'})
        with self.assertRaises(ValueError):
            WordEntry.from_dict({'text': 42})


class TestInitialWords(unittest.TestCase):
    """Tests for the default word list."""

    def test_default_words(self):
        self.assertEqual([w.text for w in INITIAL_WORDS], [
            'bed', 'cat', 'ball', 'doll', 'dog', 'bear', 'chair', 'sitting', 'on', 'socks',
        ])

    def test_every_default_word_has_imagery(self):
        for word in INITIAL_WORDS:
            self.assertEqual(word.image_url, f'./assets/{word.text}.png')
            self.assertTrue(word.emoji)
            self.assertTrue(word.category)


class TestWordMatch(unittest.TestCase):
    """Tests for the word-match mini game."""

    def test_round_has_target_and_two_distractors(self):
        rng = random.Random(3)
        for _ in range(20):
            rnd = generate_round(INITIAL_WORDS, rng)
            texts = [w.text for w in rnd.options]
            self.assertEqual(len(texts), 3)
            self.assertEqual(len(set(texts)), 3)
            self.assertIn(rnd.target, rnd.options)

    def test_not_enough_words(self):
        with self.assertRaises(ValueError) as ctx:
            generate_round(INITIAL_WORDS[:2])
        self.assertIn('at least 3', str(ctx.exception))

    def test_streak(self):
        game = WordMatchGame(INITIAL_WORDS, random.Random(1))
        self.assertTrue(game.answer(game.round.target))
        self.assertTrue(game.answer(game.round.target))
        self.assertEqual(game.streak, 2)

        wrong = next(w for w in game.round.options if w.text != game.round.target.text)
        self.assertFalse(game.answer(wrong))
        self.assertEqual(game.streak, 0)


if __name__ == '__main__':
    unittest.main()
