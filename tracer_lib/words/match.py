"""Word-match mini game.

Shows one picture and three words; the child taps the word that matches.
Rounds are drawn from the same word library as the tracing game.
"""

from __future__ import annotations

import random
from collections.abc import Sequence
from dataclasses import dataclass
from typing import List, Optional

from ..domain.words import WordEntry

OPTIONS_PER_ROUND = 3


@dataclass(frozen=True)
class MatchRound:
    """One question: the target word and the shuffled options."""
    target: WordEntry
    options: List[WordEntry]


def generate_round(pool: Sequence[WordEntry], rng: Optional[random.Random] = None) -> MatchRound:
    """Pick a target and two distinct distractors, shuffled.

    Raises:
        ValueError: If the pool has fewer than three words.
    """
    if len(pool) < OPTIONS_PER_ROUND:
        raise ValueError(f"Not enough words to play! Need at least {OPTIONS_PER_ROUND}.")
    rng = rng or random.Random()

    target_index = rng.randrange(len(pool))
    target = pool[target_index]
    others = [w for i, w in enumerate(pool) if i != target_index]
    options = [target, *rng.sample(others, OPTIONS_PER_ROUND - 1)]
    rng.shuffle(options)
    return MatchRound(target=target, options=options)


class WordMatchGame:
    """Keeps the current round and the streak of correct answers."""

    def __init__(self, pool: Sequence[WordEntry], rng: Optional[random.Random] = None):
        self.pool = list(pool)
        self.rng = rng or random.Random()
        self.streak = 0
        self.round = generate_round(self.pool, self.rng)

    def answer(self, word: WordEntry) -> bool:
        """Check an answer by text. A correct one starts the next round."""
        if word.text == self.round.target.text:
            self.streak += 1
            self.round = generate_round(self.pool, self.rng)
            return True
        self.streak = 0
        return False
