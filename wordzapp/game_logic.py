from __future__ import annotations
import enum
import random
from typing import Container, FrozenSet, Iterable, List, Optional, Tuple

from .config import ALPHABET, LETTER_COUNT, MIN_WORD_LENGTH, TIME_LIMIT, VOWELS, WORD_LIMIT

MIN_VOWELS = 2


class ErrorKind(str, enum.Enum):
    GAME_LOCKED = 'GameLocked'
    TOO_SHORT = 'TooShort'
    INVALID_LETTERS = 'InvalidLetters'
    ALREADY_SUBMITTED = 'AlreadySubmitted'
    ALREADY_ZAPPED = 'AlreadyZapped'
    NOT_IN_DICTIONARY = 'NotInDictionary'


MESSAGES = {
    ErrorKind.GAME_LOCKED: 'Game is locked.',
    ErrorKind.TOO_SHORT: f'Must be at least {MIN_WORD_LENGTH} letters long.',
    ErrorKind.INVALID_LETTERS: 'Invalid letters.',
    ErrorKind.ALREADY_SUBMITTED: 'Already submitted.',
    ErrorKind.ALREADY_ZAPPED: 'Word was zapped.',
    ErrorKind.NOT_IN_DICTIONARY: 'Unrecognized word.',
}


class SubmissionError(Exception):
    """A rejected submission. Leaves the game untouched."""

    def __init__(self, kind: ErrorKind, word: str = ''):
        super().__init__(MESSAGES[kind])
        self.kind = kind
        self.word = word

    @property
    def message(self) -> str:
        return MESSAGES[self.kind]


def draw_letters(size: int = LETTER_COUNT, rng: Optional[random.Random] = None) -> Tuple[str, ...]:
    """Draw ``size`` distinct letters, the first two of them vowels, in draw order."""
    if size < MIN_VOWELS or size > len(ALPHABET):
        raise ValueError(f'Letter count must be between {MIN_VOWELS} and {len(ALPHABET)}, got {size}')
    rng = rng or random.Random()

    vowels = list(VOWELS)
    alphabet = list(ALPHABET)
    drawn: List[str] = []

    for _ in range(MIN_VOWELS):
        letter = vowels.pop(rng.randrange(len(vowels)))
        alphabet.remove(letter)
        drawn.append(letter)

    for _ in range(size - MIN_VOWELS):
        drawn.append(alphabet.pop(rng.randrange(len(alphabet))))

    return tuple(drawn)


def pick_letters(size: int = LETTER_COUNT, rng: Optional[random.Random] = None) -> FrozenSet[str]:
    return frozenset(draw_letters(size, rng))


def normalize_letters(letters: Iterable[str]) -> Tuple[str, ...]:
    """Validate a caller-supplied letter set (practice games, tests)."""
    seq = tuple(c.upper() for c in letters)
    if not seq or not all(len(c) == 1 and c in ALPHABET for c in seq):
        raise ValueError('Letters must be single characters A-Z')
    if len(set(seq)) != len(seq):
        raise ValueError('Letters must be unique')
    if sum(1 for c in seq if c in VOWELS) < MIN_VOWELS:
        raise ValueError(f'Letters must include at least {MIN_VOWELS} vowels')
    return seq


class GameEngine:
    """
    State of a single game: the drawn letters, accepted words, zapped words
    and the lock. One instance per game; start a new game with a new engine.

    ``dictionary`` is any container of uppercase words.
    """

    def __init__(
        self,
        dictionary: Container[str],
        letter_count: int = LETTER_COUNT,
        word_limit: int = WORD_LIMIT,
        time_limit: int = TIME_LIMIT,
        letters: Optional[Iterable[str]] = None,
        rng: Optional[random.Random] = None,
    ):
        self.rng = rng or random.Random()
        self.dictionary = dictionary
        self.word_limit = word_limit
        self.time_limit = time_limit
        if letters is not None:
            self.draw_order = normalize_letters(letters)
        else:
            self.draw_order = draw_letters(letter_count, self.rng)
        self.letters: FrozenSet[str] = frozenset(self.draw_order)
        # insertion-ordered sets
        self._submitted: dict = {}
        self._zapped: dict = {}
        self.locked = False

    @property
    def submitted(self) -> List[str]:
        return list(self._submitted)

    @property
    def zapped(self) -> List[str]:
        return list(self._zapped)

    @property
    def tally(self) -> int:
        return len(self._submitted)

    def submit(self, raw: str) -> bool:
        word = raw.strip().upper()
        if self.locked:
            raise SubmissionError(ErrorKind.GAME_LOCKED, word)
        if len(word) < MIN_WORD_LENGTH:
            raise SubmissionError(ErrorKind.TOO_SHORT, word)
        # set membership only; a letter may repeat within a word
        if not set(word) <= self.letters:
            raise SubmissionError(ErrorKind.INVALID_LETTERS, word)
        if word in self._submitted:
            raise SubmissionError(ErrorKind.ALREADY_SUBMITTED, word)
        if word in self._zapped:
            raise SubmissionError(ErrorKind.ALREADY_ZAPPED, word)
        if word not in self.dictionary:
            raise SubmissionError(ErrorKind.NOT_IN_DICTIONARY, word)

        self._submitted[word] = None
        if len(self._submitted) == self.word_limit:
            self.end()
        return True

    def zap(self, word: str) -> bool:
        if word not in self._submitted:
            return False
        del self._submitted[word]
        self._zapped[word] = None
        return True

    def random_submission(self, rng: Optional[random.Random] = None) -> Optional[str]:
        """Pick a uniformly random word from what is submitted right now."""
        words = self.submitted
        if not words:
            return None
        return words[(rng or self.rng).randrange(len(words))]

    def end(self):
        self.locked = True
