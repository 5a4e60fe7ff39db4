"""Word library collaborators.

The module exports:
    INITIAL_WORDS: The default words.
    WordRepository: Protocol the session reads words through.
    InMemoryWordRepository, JsonWordRepository, WordLibrary: Implementations.
    KeyValueStore: sqlite3 string store with local-storage semantics.
    SettingsRepository: Persisted appearance settings.
    MatchRound, WordMatchGame, generate_round: Word-match mini game.
"""

from .library import INITIAL_WORDS
from .match import MatchRound, WordMatchGame, generate_round
from .repository import (
    InMemoryWordRepository,
    JsonWordRepository,
    KeyValueStore,
    SettingsRepository,
    WordLibrary,
    WordRepository,
)

__all__ = [
    'INITIAL_WORDS',
    'WordRepository', 'InMemoryWordRepository', 'JsonWordRepository', 'WordLibrary',
    'KeyValueStore', 'SettingsRepository',
    'MatchRound', 'WordMatchGame', 'generate_round',
]
